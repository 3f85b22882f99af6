"""Read-only accessors for pool state.

Every accessor either returns a well-typed value or raises QueryFailed;
none of them signals failure with None. Zero reserves and empty token
lists are valid answers. Nothing here is cached.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import POOL_ABI
from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.errors import QueryFailed
from datamarket.pools.types import CurrentFees, PoolInfo
from datamarket.units import UnitConverter, from_wei

if TYPE_CHECKING:
    from datamarket.chain.base import ContractCaller, ContractProvider

logger = structlog.get_logger()


class PoolQueryFacade:
    """Typed, failure-explicit reads of pool contracts.

    Token amounts come back in their token's human-readable denomination.
    Fee rates, weights and pool shares are 18-decimal fixed point on chain
    and come back as plain Decimals.
    """

    def __init__(
        self,
        provider: ContractProvider,
        converter: UnitConverter | None = None,
        config: ClientConfig | None = None,
    ):
        self.provider = provider
        self.config = config or DEFAULT_CONFIG
        self.converter = converter or UnitConverter(provider, self.config)

    def contract(self, pool: str) -> ContractCaller:
        return self.provider.contract(pool, POOL_ABI)

    async def read(self, pool: str, method: str, *args: Any) -> Any:
        """Call a read-only pool method.

        Raises:
            QueryFailed: If the call fails for any reason
        """
        try:
            return await self.contract(pool).read(method, *args)
        except Exception as e:
            logger.warning("pool_query_failed", pool=pool, method=method, error=str(e))
            raise QueryFailed(method, e) from e

    # -------------------------------------------------------------------------
    # Pool shares
    # -------------------------------------------------------------------------

    async def shares_balance(self, account: str, pool: str) -> Decimal:
        """Pool shares held by an account."""
        return from_wei(await self.read(pool, "balanceOf", account))

    async def get_pool_shares_total_supply(self, pool: str) -> Decimal:
        return from_wei(await self.read(pool, "totalSupply"))

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    async def get_num_tokens(self, pool: str) -> int:
        return int(await self.read(pool, "getNumTokens"))

    async def get_current_tokens(self, pool: str) -> list[str]:
        """Tokens currently bound to the pool."""
        return list(await self.read(pool, "getCurrentTokens"))

    async def get_final_tokens(self, pool: str) -> list[str]:
        """Tokens of a finalized pool."""
        return list(await self.read(pool, "getFinalTokens"))

    async def get_controller(self, pool: str) -> str:
        return await self.read(pool, "getController")

    async def get_base_token(self, pool: str) -> str:
        return await self.read(pool, "getBaseTokenAddress")

    async def get_datatoken(self, pool: str) -> str:
        return await self.read(pool, "getDatatokenAddress")

    async def is_bound(self, pool: str, token: str) -> bool:
        return bool(await self.read(pool, "isBound", token))

    async def is_finalized(self, pool: str) -> bool:
        return bool(await self.read(pool, "isFinalized"))

    async def get_reserve(self, pool: str, token: str, decimals: int | None = None) -> Decimal:
        """Balance of a token held by the pool."""
        units, token_decimals = await asyncio.gather(
            self.read(pool, "getBalance", token),
            self.converter.get_decimals(token, decimals),
        )
        return await self.converter.to_amount(token, units, token_decimals)

    # -------------------------------------------------------------------------
    # Weights
    # -------------------------------------------------------------------------

    async def get_normalized_weight(self, pool: str, token: str) -> Decimal:
        return from_wei(await self.read(pool, "getNormalizedWeight", token))

    async def get_denormalized_weight(self, pool: str, token: str) -> Decimal:
        return from_wei(await self.read(pool, "getDenormalizedWeight", token))

    async def get_total_denormalized_weight(self, pool: str) -> Decimal:
        return from_wei(await self.read(pool, "getTotalDenormalizedWeight"))

    # -------------------------------------------------------------------------
    # Fees
    # -------------------------------------------------------------------------

    async def get_swap_fee(self, pool: str) -> Decimal:
        """Liquidity provider fee rate."""
        return from_wei(await self.read(pool, "getSwapFee"))

    async def get_market_fee(self, pool: str) -> Decimal:
        """Publish-market fee rate."""
        return from_wei(await self.read(pool, "getMarketFee"))

    async def get_opc_fee(self, pool: str) -> Decimal:
        """Protocol community fee rate."""
        return from_wei(await self.read(pool, "getOPCFee"))

    async def get_market_fee_collector(self, pool: str) -> str:
        """Address allowed to collect and update the publish-market fee."""
        return await self.read(pool, "_publishMarketCollector")

    async def get_market_fees(self, pool: str, token: str) -> Decimal:
        """Publish-market fees collected so far in one token."""
        units = await self.read(pool, "publishMarketFees", token)
        return await self.converter.to_amount(token, units)

    async def get_community_fees(self, pool: str, token: str) -> Decimal:
        """Protocol community fees collected so far in one token."""
        units = await self.read(pool, "communityFees", token)
        return await self.converter.to_amount(token, units)

    async def get_current_market_fees(self, pool: str) -> CurrentFees:
        """Publish-market fees available for collection, per token."""
        return await self._current_fees(pool, "getCurrentMarketFees")

    async def get_current_opc_fees(self, pool: str) -> CurrentFees:
        """Protocol community fees available for collection, per token."""
        return await self._current_fees(pool, "getCurrentOPCFees")

    async def _current_fees(self, pool: str, method: str) -> CurrentFees:
        tokens, units = await self.read(pool, method)
        amounts = await asyncio.gather(
            *(self.converter.to_amount(token, amount) for token, amount in zip(tokens, units))
        )
        return CurrentFees(tokens=tuple(tokens), amounts=tuple(amounts))

    # -------------------------------------------------------------------------
    # Aggregate
    # -------------------------------------------------------------------------

    async def get_pool_info(self, pool: str) -> PoolInfo:
        """Read a pool's configuration with concurrent calls."""
        (
            base_token,
            datatoken,
            tokens,
            swap_fee,
            market_fee,
            opc_fee,
            finalized,
            controller,
            collector,
            total_shares,
        ) = await asyncio.gather(
            self.get_base_token(pool),
            self.get_datatoken(pool),
            self.get_current_tokens(pool),
            self.get_swap_fee(pool),
            self.get_market_fee(pool),
            self.get_opc_fee(pool),
            self.is_finalized(pool),
            self.get_controller(pool),
            self.get_market_fee_collector(pool),
            self.get_pool_shares_total_supply(pool),
        )
        weights = await asyncio.gather(
            *(self.get_normalized_weight(pool, token) for token in tokens)
        )
        return PoolInfo(
            address=pool,
            base_token=base_token,
            datatoken=datatoken,
            tokens=tuple(tokens),
            weights=dict(zip(tokens, weights)),
            swap_fee=swap_fee,
            market_fee=market_fee,
            opc_fee=opc_fee,
            finalized=finalized,
            controller=controller,
            market_fee_collector=collector,
            total_shares=total_shares,
        )


__all__ = ["PoolQueryFacade"]
