"""Side-staking bot that provides the datatoken side of a pool's liquidity."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import SIDE_STAKING_ABI
from datamarket.errors import QueryFailed
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt
from datamarket.units import AmountLike, UnitConverter, to_wei

if TYPE_CHECKING:
    from datamarket.chain.base import ContractCaller, ContractProvider

logger = structlog.get_logger()


class SideStaking:
    """Reads and actions on a side-staking contract, keyed by datatoken.

    Token quantities are returned in human-readable amounts of the datatoken
    (or of the base token for get_base_token_balance).
    """

    def __init__(
        self,
        provider: ContractProvider,
        pipeline: TransactionPipeline,
        converter: UnitConverter | None = None,
    ):
        self.provider = provider
        self.pipeline = pipeline
        self.converter = converter or UnitConverter(provider, pipeline.config)

    def contract(self, ss_address: str) -> ContractCaller:
        return self.provider.contract(ss_address, SIDE_STAKING_ABI)

    async def _read(self, ss_address: str, method: str, *args: Any) -> Any:
        try:
            return await self.contract(ss_address).read(method, *args)
        except Exception as e:
            logger.warning(
                "side_staking_query_failed", contract=ss_address, method=method, error=str(e)
            )
            raise QueryFailed(method, e) from e

    async def _datatoken_amount(
        self, ss_address: str, method: str, datatoken: str, decimals: int | None
    ) -> Decimal:
        units = await self._read(ss_address, method, datatoken)
        return await self.converter.to_amount(datatoken, units, decimals)

    async def get_datatoken_circulating_supply(
        self, ss_address: str, datatoken: str, decimals: int | None = None
    ) -> Decimal:
        """Datatokens minted so far, vested or released to the pool."""
        return await self._datatoken_amount(
            ss_address, "getDatatokenCirculatingSupply", datatoken, decimals
        )

    async def get_datatoken_current_circulating_supply(
        self, ss_address: str, datatoken: str, decimals: int | None = None
    ) -> Decimal:
        """Datatokens actually out of the contract: withdrawn vesting plus pool releases."""
        return await self._datatoken_amount(
            ss_address, "getDatatokenCurrentCirculatingSupply", datatoken, decimals
        )

    async def get_publisher_address(self, ss_address: str, datatoken: str) -> str:
        return await self._read(ss_address, "getPublisherAddress", datatoken)

    async def get_base_token(self, ss_address: str, datatoken: str) -> str:
        return await self._read(ss_address, "getBaseTokenAddress", datatoken)

    async def get_pool_address(self, ss_address: str, datatoken: str) -> str:
        return await self._read(ss_address, "getPoolAddress", datatoken)

    async def get_base_token_balance(self, ss_address: str, datatoken: str) -> Decimal:
        """Base token held by the contract for this datatoken's pool."""
        base_token = await self.get_base_token(ss_address, datatoken)
        units = await self._read(ss_address, "getBaseTokenBalance", datatoken)
        return await self.converter.to_amount(base_token, units)

    async def get_datatoken_balance(
        self, ss_address: str, datatoken: str, decimals: int | None = None
    ) -> Decimal:
        """Datatokens still held by the contract."""
        return await self._datatoken_amount(ss_address, "getDatatokenBalance", datatoken, decimals)

    async def get_vesting_end_block(self, ss_address: str, datatoken: str) -> int:
        return int(await self._read(ss_address, "getvestingEndBlock", datatoken))

    async def get_vesting_amount(
        self, ss_address: str, datatoken: str, decimals: int | None = None
    ) -> Decimal:
        """Total datatokens vested to the publisher."""
        return await self._datatoken_amount(ss_address, "getvestingAmount", datatoken, decimals)

    async def get_vesting_last_block(self, ss_address: str, datatoken: str) -> int:
        """Block of the last vesting withdrawal."""
        return int(await self._read(ss_address, "getvestingLastBlock", datatoken))

    async def get_vesting_amount_so_far(
        self, ss_address: str, datatoken: str, decimals: int | None = None
    ) -> Decimal:
        """Datatokens already withdrawn from vesting."""
        return await self._datatoken_amount(
            ss_address, "getvestingAmountSoFar", datatoken, decimals
        )

    async def get_router(self, ss_address: str) -> str:
        return await self._read(ss_address, "router")

    async def get_vesting(
        self, sender: str, ss_address: str, datatoken: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Send the datatokens vested so far to the publisher."""
        return await self.pipeline.execute(
            self.contract(ss_address),
            "getVesting",
            [datatoken],
            sender,
            estimate_only=estimate_only,
        )

    async def set_pool_swap_fee(
        self,
        sender: str,
        ss_address: str,
        datatoken: str,
        pool: str,
        swap_fee: AmountLike,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Set the LP fee of a pool through its side-staking contract (publisher only)."""
        return await self.pipeline.execute(
            self.contract(ss_address),
            "setPoolSwapFee",
            [datatoken, pool, to_wei(swap_fee)],
            sender,
            estimate_only=estimate_only,
        )


__all__ = ["SideStaking"]
