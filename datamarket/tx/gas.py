"""Gas price policies."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datamarket.chain.base import ContractProvider


class GasPricePolicy(Protocol):
    """Source of the gas price attached to each submission."""

    async def gas_price(self) -> int:
        ...


class FairGasPrice:
    """Node gas price scaled by a configurable multiplier.

    Queried fresh for every submission; never cached.
    """

    def __init__(self, provider: ContractProvider, multiplier: Decimal = Decimal(1)):
        self.provider = provider
        self.multiplier = multiplier

    async def gas_price(self) -> int:
        price = await self.provider.gas_price()
        if self.multiplier == 1:
            return int(price)
        scaled = (Decimal(int(price)) * self.multiplier).to_integral_value(rounding=ROUND_DOWN)
        return int(scaled)


class FixedGasPrice:
    """Constant gas price, for private chains and tests."""

    def __init__(self, price: int):
        if price < 0:
            raise ValueError(f"Gas price cannot be negative: {price}")
        self.price = price

    async def gas_price(self) -> int:
        return self.price


__all__ = ["GasPricePolicy", "FairGasPrice", "FixedGasPrice"]
