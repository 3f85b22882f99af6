"""Client library for data NFTs, datatokens and datatoken AMM pools."""

__version__ = "0.1.0"

from datamarket.client import DataMarketClient
from datamarket.config import DEFAULT_CONFIG, BoundRatios, ClientConfig
from datamarket.errors import (
    AmountExceedsBound,
    AmountOutOfRange,
    DataMarketError,
    EstimationFailed,
    FetchError,
    InvalidDecimals,
    InvalidTemplate,
    PermissionDenied,
    QueryFailed,
    SubmissionReverted,
)
from datamarket.units import UnitConverter, amount_to_units, units_to_amount

__all__ = [
    "__version__",
    # Client
    "DataMarketClient",
    # Configuration
    "BoundRatios",
    "ClientConfig",
    "DEFAULT_CONFIG",
    # Units
    "UnitConverter",
    "amount_to_units",
    "units_to_amount",
    # Errors
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
]
