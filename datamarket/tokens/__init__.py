"""Token wrappers: fungible datatokens and data NFTs."""

from datamarket.tokens.erc20 import Erc20Token
from datamarket.tokens.nft import Nft, NftMetadata, NftPermissions

__all__ = [
    "Erc20Token",
    "Nft",
    "NftPermissions",
    "NftMetadata",
]
