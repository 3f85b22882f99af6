"""Value objects for pool quotes, bounds and swap arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from datamarket.constants import ZERO_ADDRESS


class QuoteKind(str, Enum):
    """Which side of a swap the caller fixes."""

    EXACT_IN = "exact_in"
    EXACT_OUT = "exact_out"


class BoundKind(str, Enum):
    """Operation a trade bound applies to."""

    SWAP_EXACT_IN = "swap_exact_in"
    SWAP_EXACT_OUT = "swap_exact_out"
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"


@dataclass(frozen=True)
class SwapQuote:
    """Gross amount and fee breakdown of a prospective swap.

    All fee components are charged in token_in and expressed in its
    human-readable denomination. token_amount is the computed side of the
    swap: the output amount for EXACT_IN, the required input for EXACT_OUT.

    Attributes:
        kind: EXACT_IN or EXACT_OUT
        pool: Pool address
        token_in: Token sold to the pool
        token_out: Token bought from the pool
        amount: The fixed side of the request
        token_amount: The computed side, in its own token's denomination
        lp_fee_amount: Fee kept by liquidity providers
        protocol_fee_amount: Fee collected for the protocol community
        publish_market_fee_amount: Fee for the market that published the asset
        consume_market_fee_amount: Fee for the market the swap goes through
    """

    kind: QuoteKind
    pool: str
    token_in: str
    token_out: str
    amount: Decimal
    token_amount: Decimal
    lp_fee_amount: Decimal
    protocol_fee_amount: Decimal
    publish_market_fee_amount: Decimal
    consume_market_fee_amount: Decimal

    @property
    def amount_in(self) -> Decimal:
        return self.amount if self.kind == QuoteKind.EXACT_IN else self.token_amount

    @property
    def amount_out(self) -> Decimal:
        return self.token_amount if self.kind == QuoteKind.EXACT_IN else self.amount

    @property
    def total_fees(self) -> Decimal:
        return (
            self.lp_fee_amount
            + self.protocol_fee_amount
            + self.publish_market_fee_amount
            + self.consume_market_fee_amount
        )


@dataclass(frozen=True)
class TradeBound:
    """Largest amount a single operation may move, derived from a live reserve."""

    kind: BoundKind
    pool: str
    token: str
    reserve: Decimal
    ratio: Decimal
    maximum: Decimal

    def allows(self, amount: Decimal) -> bool:
        """Amounts equal to the maximum are allowed."""
        return amount <= self.maximum


@dataclass(frozen=True)
class TokenInOutMarket:
    """Token addresses of a swap plus the consume-market fee recipient.

    Precision overrides skip the decimals() query for that token.
    """

    token_in: str
    token_out: str
    market_fee_address: str = ZERO_ADDRESS
    token_in_decimals: int | None = None
    token_out_decimals: int | None = None


@dataclass(frozen=True)
class AmountsInMaxFee:
    """Amounts of an exact-in swap.

    Attributes:
        token_amount_in: Exact input amount
        min_amount_out: Smallest acceptable output
        swap_market_fee: Consume-market fee ratio (e.g. Decimal("0.001"))
        max_price: Highest acceptable spot price, None for no limit
    """

    token_amount_in: Decimal
    min_amount_out: Decimal
    swap_market_fee: Decimal = Decimal(0)
    max_price: Decimal | None = None


@dataclass(frozen=True)
class AmountsOutMaxFee:
    """Amounts of an exact-out swap.

    Attributes:
        max_amount_in: Largest acceptable input
        token_amount_out: Exact output amount
        swap_market_fee: Consume-market fee ratio
        max_price: Highest acceptable spot price, None for no limit
    """

    max_amount_in: Decimal
    token_amount_out: Decimal
    swap_market_fee: Decimal = Decimal(0)
    max_price: Decimal | None = None


@dataclass(frozen=True)
class CurrentFees:
    """Collectable fee balances per token."""

    tokens: tuple[str, ...] = field(default_factory=tuple)
    amounts: tuple[Decimal, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, Decimal]:
        return dict(zip(self.tokens, self.amounts, strict=True))


@dataclass(frozen=True)
class PoolInfo:
    """Snapshot of a pool's configuration. Reserves are read separately with get_reserve."""

    address: str
    base_token: str
    datatoken: str
    tokens: tuple[str, ...]
    weights: dict[str, Decimal]
    swap_fee: Decimal
    market_fee: Decimal
    opc_fee: Decimal
    finalized: bool
    controller: str
    market_fee_collector: str
    total_shares: Decimal


__all__ = [
    "QuoteKind",
    "BoundKind",
    "SwapQuote",
    "TradeBound",
    "TokenInOutMarket",
    "AmountsInMaxFee",
    "AmountsOutMaxFee",
    "CurrentFees",
    "PoolInfo",
]
