"""Pydantic models for asset documents returned by metadata caches.

Only the fields this client reads are modeled; every other field of the
document is kept as-is.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class MetadataState(IntEnum):
    """Lifecycle state of a data NFT's metadata."""

    ACTIVE = 0
    END_OF_LIFE = 1
    DEPRECATED = 2
    REVOKED = 3
    ORDERING_DISABLED = 4


class AssetNft(BaseModel):
    """The data NFT backing an asset."""

    address: str
    name: str
    symbol: str
    owner: str
    state: MetadataState = MetadataState.ACTIVE

    model_config = {"populate_by_name": True, "extra": "allow"}


class AssetDatatoken(BaseModel):
    """A datatoken granting access to one service of the asset."""

    name: str
    symbol: str
    address: str
    service_id: str = Field(alias="serviceId")

    model_config = {"populate_by_name": True, "extra": "allow"}


class AssetLastEvent(BaseModel):
    """Last on-chain event indexed for the asset."""

    tx: str
    block: int
    from_: str = Field(alias="from")
    contract: str

    model_config = {"populate_by_name": True, "extra": "allow"}


class AssetStats(BaseModel):
    """Usage statistics computed by the indexer."""

    consume: int = 0

    model_config = {"extra": "allow"}


class Asset(BaseModel):
    """An asset document: the DDO plus indexer-provided on-chain state."""

    id: str
    version: str | None = None
    chain_id: int | None = Field(default=None, alias="chainId")
    nft_address: str | None = Field(default=None, alias="nftAddress")
    metadata: dict[str, Any] = Field(default_factory=dict)
    services: list[dict[str, Any]] = Field(default_factory=list)
    credentials: dict[str, Any] | None = None

    nft: AssetNft | None = None
    datatokens: list[AssetDatatoken] = Field(default_factory=list)
    event: AssetLastEvent | None = None
    stats: AssetStats = Field(default_factory=AssetStats)
    is_in_purgatory: bool = Field(default=False, alias="isInPurgatory")

    model_config = {"populate_by_name": True, "extra": "allow"}

    def datatoken_for_service(self, service_id: str) -> AssetDatatoken | None:
        """Datatoken attached to a service, if any."""
        for datatoken in self.datatokens:
            if datatoken.service_id == service_id:
                return datatoken
        return None


__all__ = [
    "MetadataState",
    "AssetNft",
    "AssetDatatoken",
    "AssetLastEvent",
    "AssetStats",
    "Asset",
]
