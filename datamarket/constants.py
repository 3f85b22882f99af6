"""Protocol constants for the data market client.

Centralizes well-known addresses and protocol parameters.
"""

import re

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Maximum uint256 value; also the "no limit" sentinel for max_price
MAX_UINT_256 = 2**256 - 1

# Gas used when a node refuses to estimate a call
GAS_LIMIT_DEFAULT = 1_000_000

# Added on top of every estimate before submission
GAS_SAFETY_MARGIN = 1

# Precision assumed when no token contract is available to ask
DEFAULT_DECIMALS = 18

# Largest precision for which 10**decimals still fits in a uint256
MAX_DECIMALS = 77

# 18-decimal fixed point used for fee ratios, prices and pool shares
WEI_DECIMALS = 18

# Factory refuses more orders than this in one batch
MAX_ORDERS_PER_BATCH = 50

_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed 20-byte hex address."""
    return isinstance(address, str) and bool(_ADDRESS_PATTERN.match(address))


def normalize_address(address: str) -> str:
    """Normalize an address to lowercase for comparisons."""
    return address.lower()


def same_address(a: str, b: str) -> bool:
    """Case-insensitive address equality."""
    return normalize_address(a) == normalize_address(b)


__all__ = [
    "ZERO_ADDRESS",
    "MAX_UINT_256",
    "GAS_LIMIT_DEFAULT",
    "GAS_SAFETY_MARGIN",
    "DEFAULT_DECIMALS",
    "MAX_DECIMALS",
    "WEI_DECIMALS",
    "MAX_ORDERS_PER_BATCH",
    "is_valid_address",
    "normalize_address",
    "same_address",
]
