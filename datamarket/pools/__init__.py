"""Datatoken AMM pools: reads, trade bounds, fee-decomposed quotes and operations."""

from datamarket.pools.types import (
    AmountsInMaxFee,
    AmountsOutMaxFee,
    BoundKind,
    CurrentFees,
    PoolInfo,
    QuoteKind,
    SwapQuote,
    TokenInOutMarket,
    TradeBound,
)
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.bounds import BoundsCalculator, calc_max_bound
from datamarket.pools.quotes import FeeDecomposer
from datamarket.pools.pool import Pool

__all__ = [
    # Types
    "QuoteKind",
    "BoundKind",
    "SwapQuote",
    "TradeBound",
    "TokenInOutMarket",
    "AmountsInMaxFee",
    "AmountsOutMaxFee",
    "CurrentFees",
    "PoolInfo",
    # Components
    "PoolQueryFacade",
    "BoundsCalculator",
    "calc_max_bound",
    "FeeDecomposer",
    "Pool",
]
