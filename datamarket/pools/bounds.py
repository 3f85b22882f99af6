"""Per-operation trade bounds derived from live pool reserves.

A bound is the reserve of the relevant token multiplied by the configured
ratio for the operation. Bounds are recomputed from a fresh reserve read
every time; a bound is only valid for the block it was read at.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

import structlog

from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.errors import AmountExceedsBound
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.types import BoundKind, TradeBound
from datamarket.units import DECIMAL_HIGH_PREC_CONTEXT, AmountLike, to_decimal

logger = structlog.get_logger()


def calc_max_bound(reserve: Decimal, ratio: Decimal) -> Decimal:
    """Largest amount an operation may move given a reserve.

    Raises:
        ValueError: If reserve is negative or ratio is outside (0, 1]
    """
    if reserve < 0:
        raise ValueError(f"Reserve cannot be negative: {reserve}")
    if not Decimal(0) < ratio <= Decimal(1):
        raise ValueError(f"Ratio must be in (0, 1]: {ratio}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return reserve * ratio


class BoundsCalculator:
    """Computes and enforces the maximum amounts a pool accepts per operation.

    Example:
        >>> bounds = BoundsCalculator(query)
        >>> await bounds.max_swap_exact_in(pool, ocean)
        Decimal('500.0000000000000000000')
    """

    def __init__(self, query: PoolQueryFacade, config: ClientConfig | None = None):
        self.query = query
        self.config = config or DEFAULT_CONFIG

    def ratio(self, kind: BoundKind) -> Decimal:
        ratios = self.config.bound_ratios
        return {
            BoundKind.SWAP_EXACT_IN: ratios.swap_exact_in,
            BoundKind.SWAP_EXACT_OUT: ratios.swap_exact_out,
            BoundKind.ADD_LIQUIDITY: ratios.add_liquidity,
            BoundKind.REMOVE_LIQUIDITY: ratios.remove_liquidity,
        }[kind]

    async def bound(
        self, kind: BoundKind, pool: str, token: str, decimals: int | None = None
    ) -> TradeBound:
        """Read the token reserve and derive the bound for one operation."""
        reserve = await self.query.get_reserve(pool, token, decimals)
        ratio = self.ratio(kind)
        return TradeBound(
            kind=kind,
            pool=pool,
            token=token,
            reserve=reserve,
            ratio=ratio,
            maximum=calc_max_bound(reserve, ratio),
        )

    async def check(
        self,
        kind: BoundKind,
        pool: str,
        token: str,
        amount: AmountLike,
        decimals: int | None = None,
    ) -> TradeBound:
        """Verify an amount against the live bound.

        Returns:
            The bound that was checked

        Raises:
            AmountExceedsBound: If amount is strictly greater than the bound
        """
        value = to_decimal(amount)
        bound = await self.bound(kind, pool, token, decimals)
        if not bound.allows(value):
            logger.warning(
                "amount_exceeds_bound",
                operation=kind.value,
                pool=pool,
                token=token,
                amount=str(value),
                bound=str(bound.maximum),
            )
            raise AmountExceedsBound(kind.value, value, bound.maximum)
        return bound

    async def max_swap_exact_in(self, pool: str, token: str, decimals: int | None = None) -> Decimal:
        """Largest input amount of token for an exact-in swap."""
        return (await self.bound(BoundKind.SWAP_EXACT_IN, pool, token, decimals)).maximum

    async def max_swap_exact_out(
        self, pool: str, token: str, decimals: int | None = None
    ) -> Decimal:
        """Largest output amount of token for an exact-out swap."""
        return (await self.bound(BoundKind.SWAP_EXACT_OUT, pool, token, decimals)).maximum

    async def max_add_liquidity(self, pool: str, token: str, decimals: int | None = None) -> Decimal:
        """Largest single-sided deposit of token."""
        return (await self.bound(BoundKind.ADD_LIQUIDITY, pool, token, decimals)).maximum

    async def max_remove_liquidity(
        self, pool: str, token: str, decimals: int | None = None
    ) -> Decimal:
        """Largest single-sided withdrawal of token."""
        return (await self.bound(BoundKind.REMOVE_LIQUIDITY, pool, token, decimals)).maximum


__all__ = ["BoundsCalculator", "calc_max_bound"]
