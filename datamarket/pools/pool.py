"""State-changing pool operations.

Every operation goes through the TransactionPipeline and accepts
estimate_only. Swaps and single-sided liquidity changes are checked
against the live trade bound first; a request over the bound fails
without anything being estimated or submitted.
"""

from __future__ import annotations

from decimal import Decimal

from datamarket.chain.abi import POOL_ABI, event_topic
from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.constants import MAX_UINT_256
from datamarket.pools.bounds import BoundsCalculator
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.quotes import FeeDecomposer
from datamarket.pools.types import (
    AmountsInMaxFee,
    AmountsOutMaxFee,
    BoundKind,
    TokenInOutMarket,
)
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt
from datamarket.units import AmountLike, to_wei


class Pool:
    """Write access to datatoken pools.

    Example:
        >>> pool = Pool(query, pipeline)
        >>> receipt = await pool.swap_exact_amount_in(
        ...     alice, pool_address,
        ...     TokenInOutMarket(ocean, datatoken, market),
        ...     AmountsInMaxFee(Decimal("10"), Decimal("1")),
        ... )
    """

    def __init__(
        self,
        query: PoolQueryFacade,
        pipeline: TransactionPipeline,
        bounds: BoundsCalculator | None = None,
        quotes: FeeDecomposer | None = None,
        config: ClientConfig | None = None,
    ):
        self.query = query
        self.pipeline = pipeline
        self.config = config or DEFAULT_CONFIG
        self.bounds = bounds or BoundsCalculator(query, self.config)
        self.quotes = quotes or FeeDecomposer(query, self.bounds)
        self.converter = query.converter

    async def _execute(
        self, pool: str, method: str, args: list, sender: str, estimate_only: bool
    ) -> TxReceipt | int:
        return await self.pipeline.execute(
            self.query.contract(pool), method, args, sender, estimate_only=estimate_only
        )

    # -------------------------------------------------------------------------
    # Fees
    # -------------------------------------------------------------------------

    async def set_swap_fee(
        self, sender: str, pool: str, fee: AmountLike, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Set the liquidity provider fee rate (controller only)."""
        return await self._execute(pool, "setSwapFee", [to_wei(fee)], sender, estimate_only)

    async def collect_opc(
        self, sender: str, pool: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Send accumulated protocol community fees to their collector."""
        return await self._execute(pool, "collectOPC", [], sender, estimate_only)

    async def collect_market_fee(
        self, sender: str, pool: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Send accumulated publish-market fees to their collector.

        Raises:
            PermissionDenied: If the pool rejects sender as fee collector
        """
        return await self._execute(pool, "collectMarketFee", [], sender, estimate_only)

    async def update_publish_market_fee(
        self,
        sender: str,
        pool: str,
        new_collector: str,
        new_fee: AmountLike,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Change the publish-market fee collector and rate.

        Raises:
            PermissionDenied: If the pool rejects sender as fee collector
        """
        return await self._execute(
            pool,
            "updatePublishMarketFee",
            [new_collector, to_wei(new_fee)],
            sender,
            estimate_only,
        )

    # -------------------------------------------------------------------------
    # Swaps
    # -------------------------------------------------------------------------

    async def _max_price_units(self, pool: str, max_price: Decimal | None) -> int:
        if max_price is None:
            return MAX_UINT_256
        base_token = await self.query.get_base_token(pool)
        return await self.converter.to_units(base_token, max_price)

    async def swap_exact_amount_in(
        self,
        sender: str,
        pool: str,
        tokens: TokenInOutMarket,
        amounts: AmountsInMaxFee,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Swap an exact amount of token_in for at least min_amount_out of token_out.

        Raises:
            AmountExceedsBound: If token_amount_in exceeds max_swap_exact_in
        """
        await self.bounds.check(
            BoundKind.SWAP_EXACT_IN,
            pool,
            tokens.token_in,
            amounts.token_amount_in,
            tokens.token_in_decimals,
        )
        amount_in = await self.converter.to_units(
            tokens.token_in, amounts.token_amount_in, tokens.token_in_decimals
        )
        min_out = await self.converter.to_units(
            tokens.token_out, amounts.min_amount_out, tokens.token_out_decimals
        )
        max_price = await self._max_price_units(pool, amounts.max_price)
        args = [
            [tokens.token_in, tokens.token_out, tokens.market_fee_address],
            [amount_in, min_out, max_price, to_wei(amounts.swap_market_fee)],
        ]
        return await self._execute(pool, "swapExactAmountIn", args, sender, estimate_only)

    async def swap_exact_amount_out(
        self,
        sender: str,
        pool: str,
        tokens: TokenInOutMarket,
        amounts: AmountsOutMaxFee,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Swap at most max_amount_in of token_in for an exact amount of token_out.

        Raises:
            AmountExceedsBound: If token_amount_out exceeds max_swap_exact_out
        """
        await self.bounds.check(
            BoundKind.SWAP_EXACT_OUT,
            pool,
            tokens.token_out,
            amounts.token_amount_out,
            tokens.token_out_decimals,
        )
        max_in = await self.converter.to_units(
            tokens.token_in, amounts.max_amount_in, tokens.token_in_decimals
        )
        amount_out = await self.converter.to_units(
            tokens.token_out, amounts.token_amount_out, tokens.token_out_decimals
        )
        max_price = await self._max_price_units(pool, amounts.max_price)
        args = [
            [tokens.token_in, tokens.token_out, tokens.market_fee_address],
            [max_in, amount_out, max_price, to_wei(amounts.swap_market_fee)],
        ]
        return await self._execute(pool, "swapExactAmountOut", args, sender, estimate_only)

    # -------------------------------------------------------------------------
    # Single-sided liquidity
    # -------------------------------------------------------------------------

    async def join_swap_extern_amount_in(
        self,
        sender: str,
        pool: str,
        token_amount_in: AmountLike,
        min_pool_amount_out: AmountLike,
        token_in_decimals: int | None = None,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Deposit base token and receive at least min_pool_amount_out shares.

        token_in_decimals overrides the base token precision, skipping the
        decimals() query.

        Raises:
            AmountExceedsBound: If the deposit exceeds max_add_liquidity
        """
        base_token = await self.query.get_base_token(pool)
        await self.bounds.check(
            BoundKind.ADD_LIQUIDITY, pool, base_token, token_amount_in, token_in_decimals
        )
        amount_in = await self.converter.to_units(base_token, token_amount_in, token_in_decimals)
        args = [amount_in, to_wei(min_pool_amount_out)]
        return await self._execute(pool, "joinswapExternAmountIn", args, sender, estimate_only)

    async def exit_swap_pool_amount_in(
        self,
        sender: str,
        pool: str,
        pool_amount_in: AmountLike,
        min_token_amount_out: AmountLike,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Burn pool shares and receive at least min_token_amount_out base token.

        Raises:
            AmountExceedsBound: If the expected withdrawal exceeds max_remove_liquidity
        """
        base_token = await self.query.get_base_token(pool)
        expected_out = await self.quotes.calc_single_out_given_pool_in(
            pool, base_token, pool_amount_in
        )
        await self.bounds.check(BoundKind.REMOVE_LIQUIDITY, pool, base_token, expected_out)
        min_out = await self.converter.to_units(base_token, min_token_amount_out)
        args = [to_wei(pool_amount_in), min_out]
        return await self._execute(pool, "exitswapPoolAmountIn", args, sender, estimate_only)

    # -------------------------------------------------------------------------
    # Event topics
    # -------------------------------------------------------------------------

    @staticmethod
    def get_swap_event_signature() -> str:
        return event_topic(POOL_ABI, "LOG_SWAP")

    @staticmethod
    def get_join_event_signature() -> str:
        return event_topic(POOL_ABI, "LOG_JOIN")

    @staticmethod
    def get_exit_event_signature() -> str:
        return event_topic(POOL_ABI, "LOG_EXIT")


__all__ = ["Pool"]
