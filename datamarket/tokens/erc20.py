"""ERC20 helpers: precision, balances and approvals."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import ERC20_ABI
from datamarket.errors import QueryFailed
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt
from datamarket.units import AmountLike, UnitConverter

if TYPE_CHECKING:
    from datamarket.chain.base import ContractProvider

logger = structlog.get_logger()


class Erc20Token:
    """Reads and approvals for fungible tokens, in human-readable amounts."""

    def __init__(
        self,
        provider: ContractProvider,
        pipeline: TransactionPipeline,
        converter: UnitConverter | None = None,
    ):
        self.provider = provider
        self.pipeline = pipeline
        self.converter = converter or UnitConverter(provider, pipeline.config)

    async def _read(self, token: str, method: str, *args: Any) -> Any:
        try:
            return await self.provider.contract(token, ERC20_ABI).read(method, *args)
        except Exception as e:
            logger.warning("erc20_query_failed", token=token, method=method, error=str(e))
            raise QueryFailed(method, e) from e

    async def decimals(self, token: str) -> int:
        """Token precision (cached by the converter)."""
        return await self.converter.get_decimals(token)

    async def balance(self, token: str, account: str) -> Decimal:
        units = await self._read(token, "balanceOf", account)
        return await self.converter.to_amount(token, units)

    async def allowance(self, token: str, owner: str, spender: str) -> Decimal:
        units = await self._read(token, "allowance", owner, spender)
        return await self.converter.to_amount(token, units)

    async def approve(
        self,
        token: str,
        sender: str,
        spender: str,
        amount: AmountLike,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Allow spender to move amount of token on behalf of sender."""
        units = await self.converter.to_units(token, amount)
        return await self.pipeline.execute(
            self.provider.contract(token, ERC20_ABI),
            "approve",
            [spender, units],
            sender,
            estimate_only=estimate_only,
        )


__all__ = ["Erc20Token"]
