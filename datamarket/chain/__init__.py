"""Contract transport: protocols, ABIs and the web3.py adapter."""

from datamarket.chain.base import Abi, ContractCaller, ContractProvider, TxParams
from datamarket.chain.abi import (
    ERC20_ABI,
    NFT_ABI,
    NFT_FACTORY_ABI,
    POOL_ABI,
    SIDE_STAKING_ABI,
    event_topic,
)
from datamarket.chain.web3_provider import (
    Web3Contract,
    Web3ContractProvider,
    decode_revert_reason,
)

__all__ = [
    # Protocols
    "Abi",
    "ContractCaller",
    "ContractProvider",
    "TxParams",
    # ABIs
    "ERC20_ABI",
    "POOL_ABI",
    "NFT_ABI",
    "NFT_FACTORY_ABI",
    "SIDE_STAKING_ABI",
    "event_topic",
    # web3.py
    "Web3Contract",
    "Web3ContractProvider",
    "decode_revert_reason",
]
