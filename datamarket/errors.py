"""Error classes for data market client operations.

Every failure surfaces as a subclass of DataMarketError; no operation
signals failure by returning None.
"""

from __future__ import annotations

import re
from decimal import Decimal


class DataMarketError(Exception):
    """Base error for data market client operations."""

    pass


class InvalidDecimals(DataMarketError):
    """Token precision could not be determined or is out of range [0, 77]."""

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token = token


class AmountOutOfRange(DataMarketError):
    """Amount is negative, not exactly representable, or exceeds uint256."""

    pass


class AmountExceedsBound(DataMarketError):
    """Requested amount is larger than the pool allows for this operation."""

    def __init__(self, operation: str, amount: Decimal, bound: Decimal):
        super().__init__(f"{operation}: amount {amount} is greater than {bound}")
        self.operation = operation
        self.amount = amount
        self.bound = bound


class QueryFailed(DataMarketError):
    """A read-only contract call failed."""

    def __init__(self, method: str, cause: BaseException | str):
        super().__init__(f"{method} query failed: {cause}")
        self.method = method
        self.cause = cause


class EstimationFailed(DataMarketError):
    """Gas estimation was refused by the node.

    The transaction pipeline recovers from this locally by falling back
    to the default gas limit; it is never raised to callers.
    """

    def __init__(self, method: str, cause: BaseException | str):
        super().__init__(f"gas estimation for {method} failed: {cause}")
        self.method = method
        self.cause = cause


class SubmissionReverted(DataMarketError):
    """Transaction was rejected at submission or reverted on chain."""

    def __init__(self, method: str, reason: str | None = None, tx_hash: str | None = None):
        message = f"{method} reverted"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.method = method
        self.reason = reason
        self.tx_hash = tx_hash


class PermissionDenied(SubmissionReverted):
    """Caller lacks the role or ownership required for the operation."""

    pass


class InvalidTemplate(DataMarketError):
    """Template index is zero, out of range, or not in the required state."""

    pass


class FetchError(DataMarketError):
    """HTTP request returned a non-success status."""

    def __init__(self, url: str, status_code: int, body: str = ""):
        super().__init__(f"{url} returned {status_code}: {body}")
        self.url = url
        self.status_code = status_code
        self.body = body


# Revert reasons emitted by role-gated and owner-gated contract methods
_PERMISSION_REASON = re.compile(
    r"\bnot (the )?(owner|manager|minter|allowed|authorized|publisher|controller|router"
    r"|erc20 ?deployer|metadata|store ?updater)"
    r"|\bnot ?nft ?owner"
    r"|(^|_)not_(controller|owner|manager|minter|publisher|router)"
    r"|caller is not|\bonly (owner|router|manager)|unauthorized|no privileges",
    re.IGNORECASE,
)


def is_permission_reason(reason: str | None) -> bool:
    """Check whether a revert reason denotes a role or ownership rejection."""
    return bool(reason) and _PERMISSION_REASON.search(reason) is not None


def revert_error(
    method: str, reason: str | None, tx_hash: str | None = None
) -> SubmissionReverted:
    """Build the matching revert error for a reason string."""
    if is_permission_reason(reason):
        return PermissionDenied(method, reason, tx_hash)
    return SubmissionReverted(method, reason, tx_hash)


__all__ = [
    "DataMarketError",
    "InvalidDecimals",
    "AmountOutOfRange",
    "AmountExceedsBound",
    "QueryFailed",
    "EstimationFailed",
    "SubmissionReverted",
    "PermissionDenied",
    "InvalidTemplate",
    "FetchError",
    "is_permission_reason",
    "revert_error",
]
