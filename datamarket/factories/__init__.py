"""NFT factory and the parameter objects for its deployment flows."""

from datamarket.factories.params import (
    ConsumeMarketFee,
    DispenserCreationParams,
    Erc20CreateParams,
    FreCreationParams,
    MetadataAndTokenUri,
    MetadataProof,
    NftCreateData,
    PoolCreationParams,
    ProviderFees,
    Template,
    TokenOrder,
)
from datamarket.factories.names import generate_dt_name
from datamarket.factories.nft_factory import NftFactory

__all__ = [
    # Parameters
    "NftCreateData",
    "Erc20CreateParams",
    "PoolCreationParams",
    "FreCreationParams",
    "DispenserCreationParams",
    "ProviderFees",
    "ConsumeMarketFee",
    "TokenOrder",
    "Template",
    "MetadataProof",
    "MetadataAndTokenUri",
    # Names
    "generate_dt_name",
    # Factory
    "NftFactory",
]
