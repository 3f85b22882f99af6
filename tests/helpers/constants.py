"""Shared address constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import OCEAN, DATATOKEN
    # or
    from tests.helpers.constants import OCEAN, DATATOKEN
"""

# =============================================================================
# Tokens
# =============================================================================

OCEAN = "0x967da4048cd07ab37855c090aaf366e4ce1b9f48"  # Base token (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # Base token (6 decimals)
DATATOKEN = "0x1111111111111111111111111111111111111111"  # Datatoken (18 decimals)

# =============================================================================
# Contracts
# =============================================================================

POOL = "0x2222222222222222222222222222222222222222"
NFT = "0x3333333333333333333333333333333333333333"
FACTORY = "0x4444444444444444444444444444444444444444"
SIDE_STAKING = "0x5555555555555555555555555555555555555555"
FIXED_RATE = "0x6666666666666666666666666666666666666666"
DISPENSER = "0x7777777777777777777777777777777777777777"
NFT_TEMPLATE = "0x8888888888888888888888888888888888888888"
POOL_TEMPLATE = "0x9999999999999999999999999999999999999999"

# =============================================================================
# Accounts
# =============================================================================

ALICE = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"  # Publisher / owner
BOB = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"  # Consumer
MARKET = "0xcccccccccccccccccccccccccccccccccccccccc"  # Market fee collector

# =============================================================================
# Token decimals lookup
# =============================================================================

TOKEN_DECIMALS = {
    OCEAN: 18,
    USDC: 6,
    DATATOKEN: 18,
}

WEI = 10**18
ZERO = "0x0000000000000000000000000000000000000000"


__all__ = [
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
]
