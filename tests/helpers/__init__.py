"""Test helpers module for shared test utilities.

- constants: Token, contract and account addresses
- fakes: In-memory contracts, provider and pool simulator
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DATATOKEN,
    DISPENSER,
    FACTORY,
    FIXED_RATE,
    MARKET,
    NFT,
    NFT_TEMPLATE,
    OCEAN,
    POOL,
    POOL_TEMPLATE,
    SIDE_STAKING,
    TOKEN_DECIMALS,
    USDC,
    WEI,
    ZERO,
)
from tests.helpers.fakes import FakeContract, FakePool, FakeProvider, RecordedCall

__all__ = [
    # Constants
    "OCEAN",
    "USDC",
    "DATATOKEN",
    "POOL",
    "NFT",
    "FACTORY",
    "SIDE_STAKING",
    "FIXED_RATE",
    "DISPENSER",
    "NFT_TEMPLATE",
    "POOL_TEMPLATE",
    "ALICE",
    "BOB",
    "MARKET",
    "TOKEN_DECIMALS",
    "WEI",
    "ZERO",
    # Fakes
    "FakeContract",
    "FakeProvider",
    "FakePool",
    "RecordedCall",
]
