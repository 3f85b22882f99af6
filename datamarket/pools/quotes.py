"""Swap quotes split into their fee components, plus liquidity calculators.

Quotes are side-effect free: they validate the request against the live
trade bound, ask the pool contract for the gross amount and the four fee
components in base units, and convert each component back with the
precision of the token it is denominated in. Fees are always charged in
the input token.
"""

from __future__ import annotations

import asyncio
import decimal
from decimal import Decimal
from typing import Any

import structlog

from datamarket.pools.bounds import BoundsCalculator
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.types import BoundKind, QuoteKind, SwapQuote
from datamarket.units import (
    DECIMAL_HIGH_PREC_CONTEXT,
    AmountLike,
    UnitConverter,
    amount_to_units,
    from_wei,
    to_decimal,
    to_wei,
    units_to_amount,
)

logger = structlog.get_logger()


class FeeDecomposer:
    """Quotes swaps with a four-way fee breakdown.

    Example:
        >>> quote = await decomposer.quote_exact_in(pool, ocean, datatoken, Decimal("1"))
        >>> quote.token_amount, quote.lp_fee_amount
    """

    def __init__(
        self,
        query: PoolQueryFacade,
        bounds: BoundsCalculator | None = None,
        converter: UnitConverter | None = None,
    ):
        self.query = query
        self.bounds = bounds or BoundsCalculator(query, query.config)
        self.converter = converter or query.converter

    async def _decimals(
        self,
        token_in: str,
        token_out: str,
        token_in_decimals: int | None,
        token_out_decimals: int | None,
    ) -> tuple[int, int]:
        in_decimals, out_decimals = await asyncio.gather(
            self.converter.get_decimals(token_in, token_in_decimals),
            self.converter.get_decimals(token_out, token_out_decimals),
        )
        return in_decimals, out_decimals

    def _build_quote(
        self,
        kind: QuoteKind,
        pool: str,
        token_in: str,
        token_out: str,
        amount: Decimal,
        raw: Any,
        token_amount_decimals: int,
        fee_decimals: int,
    ) -> SwapQuote:
        token_amount, lp_fee, protocol_fee, publish_fee, consume_fee = raw
        return SwapQuote(
            kind=kind,
            pool=pool,
            token_in=token_in,
            token_out=token_out,
            amount=amount,
            token_amount=units_to_amount(token_amount, token_amount_decimals),
            lp_fee_amount=units_to_amount(lp_fee, fee_decimals),
            protocol_fee_amount=units_to_amount(protocol_fee, fee_decimals),
            publish_market_fee_amount=units_to_amount(publish_fee, fee_decimals),
            consume_market_fee_amount=units_to_amount(consume_fee, fee_decimals),
        )

    async def quote_exact_in(
        self,
        pool: str,
        token_in: str,
        token_out: str,
        amount_in: AmountLike,
        market_fee: AmountLike = Decimal(0),
        token_in_decimals: int | None = None,
        token_out_decimals: int | None = None,
    ) -> SwapQuote:
        """Quote how much token_out a fixed amount of token_in buys.

        Args:
            pool: Pool address
            token_in: Token sold
            token_out: Token bought
            amount_in: Exact input amount
            market_fee: Consume-market fee ratio (e.g. Decimal("0.001"))
            token_in_decimals: Optional precision override for token_in
            token_out_decimals: Optional precision override for token_out

        Returns:
            SwapQuote whose token_amount is the output, in token_out units

        Raises:
            AmountExceedsBound: If amount_in exceeds max_swap_exact_in
            QueryFailed: If the pool read fails
        """
        amount = to_decimal(amount_in)
        await self.bounds.check(BoundKind.SWAP_EXACT_IN, pool, token_in, amount, token_in_decimals)
        in_decimals, out_decimals = await self._decimals(
            token_in, token_out, token_in_decimals, token_out_decimals
        )
        raw = await self.query.read(
            pool,
            "getAmountOutExactIn",
            token_in,
            token_out,
            amount_to_units(amount, in_decimals),
            to_wei(market_fee),
        )
        quote = self._build_quote(
            QuoteKind.EXACT_IN, pool, token_in, token_out, amount, raw, out_decimals, in_decimals
        )
        logger.debug(
            "quote_exact_in",
            pool=pool,
            amount_in=str(amount),
            amount_out=str(quote.token_amount),
            total_fees=str(quote.total_fees),
        )
        return quote

    async def quote_exact_out(
        self,
        pool: str,
        token_in: str,
        token_out: str,
        amount_out: AmountLike,
        market_fee: AmountLike = Decimal(0),
        token_in_decimals: int | None = None,
        token_out_decimals: int | None = None,
    ) -> SwapQuote:
        """Quote how much token_in a fixed amount of token_out costs.

        Returns:
            SwapQuote whose token_amount is the required input, in token_in units

        Raises:
            AmountExceedsBound: If amount_out exceeds max_swap_exact_out
            QueryFailed: If the pool read fails
        """
        amount = to_decimal(amount_out)
        await self.bounds.check(
            BoundKind.SWAP_EXACT_OUT, pool, token_out, amount, token_out_decimals
        )
        in_decimals, out_decimals = await self._decimals(
            token_in, token_out, token_in_decimals, token_out_decimals
        )
        raw = await self.query.read(
            pool,
            "getAmountInExactOut",
            token_in,
            token_out,
            amount_to_units(amount, out_decimals),
            to_wei(market_fee),
        )
        # The required input is denominated in token_in, like the fees
        quote = self._build_quote(
            QuoteKind.EXACT_OUT, pool, token_in, token_out, amount, raw, in_decimals, in_decimals
        )
        logger.debug(
            "quote_exact_out",
            pool=pool,
            amount_out=str(amount),
            amount_in=str(quote.token_amount),
            total_fees=str(quote.total_fees),
        )
        return quote

    async def get_spot_price(
        self,
        pool: str,
        token_in: str,
        token_out: str,
        market_fee: AmountLike = Decimal(0),
    ) -> Decimal:
        """Price of one token_out in token_in, fees included.

        The pool reports the ratio of base units scaled by 1e18; the
        precision difference between the tokens is applied here.
        """
        raw, (in_decimals, out_decimals) = await asyncio.gather(
            self.query.read(pool, "getSpotPrice", token_in, token_out, to_wei(market_fee)),
            self._decimals(token_in, token_out, None, None),
        )
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return from_wei(raw).scaleb(out_decimals - in_decimals)

    # -------------------------------------------------------------------------
    # Single-sided liquidity
    # -------------------------------------------------------------------------

    async def calc_pool_out_given_single_in(
        self, pool: str, token_in: str, token_amount_in: AmountLike
    ) -> Decimal:
        """Pool shares minted for a single-sided deposit."""
        units = await self.converter.to_units(token_in, token_amount_in)
        return from_wei(await self.query.read(pool, "calcPoolOutSingleIn", token_in, units))

    async def calc_single_in_given_pool_out(
        self, pool: str, token_in: str, pool_amount_out: AmountLike
    ) -> Decimal:
        """Deposit of token_in needed to mint a number of pool shares."""
        raw = await self.query.read(pool, "calcSingleInPoolOut", token_in, to_wei(pool_amount_out))
        return await self.converter.to_amount(token_in, raw)

    async def calc_single_out_given_pool_in(
        self, pool: str, token_out: str, pool_amount_in: AmountLike
    ) -> Decimal:
        """Amount of token_out returned for burning a number of pool shares."""
        raw = await self.query.read(pool, "calcSingleOutPoolIn", token_out, to_wei(pool_amount_in))
        return await self.converter.to_amount(token_out, raw)

    async def calc_pool_in_given_single_out(
        self, pool: str, token_out: str, token_amount_out: AmountLike
    ) -> Decimal:
        """Pool shares burned to withdraw an amount of token_out."""
        units = await self.converter.to_units(token_out, token_amount_out)
        return from_wei(await self.query.read(pool, "calcPoolInSingleOut", token_out, units))


__all__ = ["FeeDecomposer"]
