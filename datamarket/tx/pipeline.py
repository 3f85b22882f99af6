"""Estimate-then-submit protocol shared by every state-changing call.

A transaction moves through BUILT -> ESTIMATED -> SUBMITTED and ends in
CONFIRMED or REVERTED. With estimate_only the pipeline stops after
ESTIMATED and returns the gas figure without submitting anything.

Estimation failures are recovered here: the node's refusal is logged and
the configured default gas limit is used instead. Submission failures are
never retried.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.errors import (
    EstimationFailed,
    PermissionDenied,
    SubmissionReverted,
    revert_error,
)
from datamarket.tx.gas import FairGasPrice, GasPricePolicy
from datamarket.tx.receipt import TxReceipt

if TYPE_CHECKING:
    from datamarket.chain.base import ContractCaller, ContractProvider, TxParams

logger = structlog.get_logger()


class TxStage(str, Enum):
    """Lifecycle of a pending transaction."""

    BUILT = "built"
    ESTIMATED = "estimated"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


class TransactionPipeline:
    """Runs state-changing contract calls through estimation and submission.

    Example:
        >>> pipeline = TransactionPipeline(provider)
        >>> gas = await pipeline.execute(pool, "setSwapFee", [fee], sender, estimate_only=True)
        >>> receipt = await pipeline.execute(pool, "setSwapFee", [fee], sender)
    """

    def __init__(
        self,
        provider: ContractProvider,
        config: ClientConfig | None = None,
        gas_price_policy: GasPricePolicy | None = None,
    ):
        self.provider = provider
        self.config = config or DEFAULT_CONFIG
        self.gas_price_policy = gas_price_policy or FairGasPrice(
            provider, self.config.gas_fee_multiplier
        )

    def _log_stage(self, stage: TxStage, contract: ContractCaller, method: str, **kw: Any) -> None:
        logger.debug("tx_stage", stage=stage.value, contract=contract.address, method=method, **kw)

    async def estimate_gas(
        self,
        contract: ContractCaller,
        method: str,
        args: Sequence[Any],
        sender: str,
    ) -> int:
        """Estimate gas for a call, falling back to the default limit on failure.

        Returns:
            Positive gas estimate
        """
        tx: TxParams = {"from": sender}
        try:
            estimate = int(await contract.estimate(method, list(args), tx))
        except Exception as e:
            failure = EstimationFailed(method, e)
            logger.warning(
                "gas_estimation_failed",
                contract=contract.address,
                method=method,
                sender=sender,
                error=str(failure),
                fallback=self.config.gas_limit_default,
            )
            return self.config.gas_limit_default

        if estimate <= 0:
            logger.warning(
                "gas_estimation_non_positive",
                contract=contract.address,
                method=method,
                estimate=estimate,
                fallback=self.config.gas_limit_default,
            )
            return self.config.gas_limit_default
        return estimate

    async def execute(
        self,
        contract: ContractCaller,
        method: str,
        args: Sequence[Any],
        sender: str,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Estimate and, unless estimate_only, submit a contract call.

        Args:
            contract: Target contract
            method: Contract method name
            args: Positional arguments, already in wire units
            sender: Address the transaction is sent from
            estimate_only: Return the gas estimate without submitting

        Returns:
            The gas estimate when estimate_only, otherwise the confirmed receipt

        Raises:
            PermissionDenied: The contract rejected the caller's role or ownership
            SubmissionReverted: The gas price was unavailable, the node refused
                the transaction or it reverted
        """
        args = list(args)
        self._log_stage(TxStage.BUILT, contract, method, sender=sender)

        estimate = await self.estimate_gas(contract, method, args, sender)
        self._log_stage(TxStage.ESTIMATED, contract, method, gas=estimate)
        if estimate_only:
            return estimate

        try:
            gas_price = await self.gas_price_policy.gas_price()
        except Exception as e:
            error = SubmissionReverted(method, f"gas price unavailable: {e}")
            self._log_failure(contract, method, error)
            raise error from e

        tx: TxParams = {
            "from": sender,
            "gas": estimate + self.config.gas_safety_margin,
            "gasPrice": gas_price,
        }
        self._log_stage(TxStage.SUBMITTED, contract, method, gas=tx["gas"], gas_price=tx["gasPrice"])

        try:
            receipt = await contract.write(method, args, tx)
        except SubmissionReverted as e:
            error = revert_error(method, e.reason, e.tx_hash)
            self._log_failure(contract, method, error)
            raise error from e
        except Exception as e:
            error = revert_error(method, str(e))
            self._log_failure(contract, method, error)
            raise error from e

        if not receipt.succeeded:
            error = revert_error(method, receipt.revert_reason, receipt.tx_hash)
            self._log_failure(contract, method, error)
            raise error

        self._log_stage(
            TxStage.CONFIRMED,
            contract,
            method,
            tx_hash=receipt.tx_hash,
            block=receipt.block_number,
            gas_used=receipt.gas_used,
        )
        return receipt

    def _log_failure(self, contract: ContractCaller, method: str, error: SubmissionReverted) -> None:
        logger.error(
            "tx_reverted",
            stage=TxStage.REVERTED.value,
            contract=contract.address,
            method=method,
            reason=error.reason,
            tx_hash=error.tx_hash,
            permission_denied=isinstance(error, PermissionDenied),
        )


__all__ = ["TxStage", "TransactionPipeline"]
