"""Conversion between human-readable token amounts and integer wire units.

Every amount that crosses a component boundary is a Decimal in the token's
human-readable denomination. Only this module (and the pipeline that
submits its output) sees integer base units.

All arithmetic uses a 78-digit Decimal context, enough for any uint256
value (up to ~1.16 * 10^77). Floats are never accepted.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import ERC20_ABI
from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.constants import MAX_DECIMALS, MAX_UINT_256, WEI_DECIMALS, normalize_address
from datamarket.errors import AmountOutOfRange, InvalidDecimals

if TYPE_CHECKING:
    from datamarket.chain.base import ContractProvider

logger = structlog.get_logger()

# 78 digits of precision, enough for any uint256 value
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

AmountLike = Decimal | int | str


def validate_decimals(decimals: Any, token: str | None = None) -> int:
    """Check that a precision is an integer in [0, 77].

    Raises:
        InvalidDecimals: If the value is not an int (bools are rejected)
            or is out of range
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidDecimals(
            f"Decimals must be an integer, got {type(decimals).__name__}", token
        )
    if not 0 <= decimals <= MAX_DECIMALS:
        raise InvalidDecimals(f"Decimals out of range [0, {MAX_DECIMALS}]: {decimals}", token)
    return decimals


def to_decimal(amount: AmountLike) -> Decimal:
    """Coerce an amount to a finite, non-negative Decimal.

    Raises:
        AmountOutOfRange: For floats, bools, malformed strings, non-finite
            or negative values
    """
    if isinstance(amount, (bool, float)):
        raise AmountOutOfRange(
            f"Amount must be Decimal, int or str, got {type(amount).__name__}: {amount!r}"
        )
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(amount)
        except InvalidOperation as err:
            raise AmountOutOfRange(f"Amount is not a decimal number: {amount!r}") from err
    else:
        raise AmountOutOfRange(f"Unsupported amount type: {type(amount).__name__}")

    if not value.is_finite():
        raise AmountOutOfRange(f"Amount must be finite: {amount}")
    if value < 0:
        raise AmountOutOfRange(f"Amount cannot be negative: {amount}")
    return value


def amount_to_units(amount: AmountLike, decimals: int) -> int:
    """Convert a human-readable amount to integer base units.

    Digits beyond the token's precision are truncated toward zero.

    Args:
        amount: Human-readable amount
        decimals: Token precision

    Returns:
        Integer base units

    Raises:
        AmountOutOfRange: If the amount is invalid or the result exceeds uint256
        InvalidDecimals: If decimals is out of range
    """
    decimals = validate_decimals(decimals)
    value = to_decimal(amount)
    # Integer arithmetic on the coefficient keeps truncation exact for any
    # number of input digits
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")
    shift = int(exponent) + decimals
    if coefficient and len(str(coefficient)) + shift > len(str(MAX_UINT_256)):
        raise AmountOutOfRange(f"Amount {amount} at {decimals} decimals overflows uint256")
    if shift >= 0:
        units = coefficient * 10**shift
    else:
        units = coefficient // 10**-shift
    if units > MAX_UINT_256:
        raise AmountOutOfRange(f"Amount {amount} at {decimals} decimals overflows uint256")
    return units


def units_to_amount(units: int | str, decimals: int) -> Decimal:
    """Convert integer base units to a human-readable Decimal amount.

    Exact: the result only shifts the decimal point.

    Raises:
        AmountOutOfRange: If units is negative, non-integral or exceeds uint256
        InvalidDecimals: If decimals is out of range
    """
    decimals = validate_decimals(decimals)
    if isinstance(units, bool) or not isinstance(units, (int, str)):
        raise AmountOutOfRange(f"Units must be an integer, got {type(units).__name__}")
    try:
        value = int(units)
    except ValueError as err:
        raise AmountOutOfRange(f"Units must be an integer: {units!r}") from err
    if value < 0:
        raise AmountOutOfRange(f"Units cannot be negative: {units}")
    if value > MAX_UINT_256:
        raise AmountOutOfRange(f"Units overflow uint256: {units}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(value).scaleb(-decimals)


def to_wei(amount: AmountLike) -> int:
    """Convert an 18-decimal fixed-point quantity (fee ratio, price, shares) to units."""
    return amount_to_units(amount, WEI_DECIMALS)


def from_wei(units: int | str) -> Decimal:
    """Convert 18-decimal fixed-point units back to a Decimal."""
    return units_to_amount(units, WEI_DECIMALS)


class UnitConverter:
    """Token-aware conversion between amounts and base units.

    Precision is resolved in order: explicit override, the token contract's
    decimals(), then config.default_decimals when no token is given.
    Queried precisions are cached for the lifetime of the converter, since
    a deployed token cannot change them.

    Example:
        >>> converter = UnitConverter(provider)
        >>> await converter.to_units(usdc, Decimal("1.5"))
        1500000
    """

    def __init__(
        self,
        provider: ContractProvider | None = None,
        config: ClientConfig | None = None,
    ):
        self.provider = provider
        self.config = config or DEFAULT_CONFIG
        self._decimals: dict[str, int] = {}

    async def get_decimals(self, token: str | None, decimals: int | None = None) -> int:
        """Resolve the precision to use for a token.

        Raises:
            InvalidDecimals: If the override is invalid, or the token query
                fails or returns an out-of-range value
        """
        if decimals is not None:
            return validate_decimals(decimals, token)
        if token is None:
            return self.config.default_decimals

        key = normalize_address(token)
        cached = self._decimals.get(key)
        if cached is not None:
            return cached

        if self.provider is None:
            raise InvalidDecimals(f"No provider to query decimals of {token}", token)
        try:
            raw = await self.provider.contract(token, ERC20_ABI).read("decimals")
        except Exception as e:
            logger.warning("decimals_query_failed", token=token, error=str(e))
            raise InvalidDecimals(f"Could not read decimals of {token}: {e}", token) from e

        if isinstance(raw, bool) or not isinstance(raw, int):
            raise InvalidDecimals(f"decimals() of {token} returned {raw!r}", token)
        value = validate_decimals(raw, token)
        self._decimals[key] = value
        return value

    async def to_units(
        self, token: str | None, amount: AmountLike, decimals: int | None = None
    ) -> int:
        """Convert a human-readable amount of a token to base units (truncating)."""
        return amount_to_units(amount, await self.get_decimals(token, decimals))

    async def to_amount(
        self, token: str | None, units: int | str, decimals: int | None = None
    ) -> Decimal:
        """Convert base units of a token to a human-readable amount."""
        return units_to_amount(units, await self.get_decimals(token, decimals))


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "AmountLike",
    "UnitConverter",
    "amount_to_units",
    "units_to_amount",
    "to_decimal",
    "to_wei",
    "from_wei",
    "validate_decimals",
]
