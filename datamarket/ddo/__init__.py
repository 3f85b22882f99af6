"""Asset document models."""

from datamarket.ddo.asset import (
    Asset,
    AssetDatatoken,
    AssetLastEvent,
    AssetNft,
    AssetStats,
    MetadataState,
)

__all__ = [
    "Asset",
    "AssetNft",
    "AssetDatatoken",
    "AssetLastEvent",
    "AssetStats",
    "MetadataState",
]
