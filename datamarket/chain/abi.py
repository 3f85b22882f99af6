"""Minimal contract ABIs for the methods and events this client uses.

ABIs are built from compact (type, name) tuples to keep the definitions
readable. Tuple-typed parameters carry their components.
"""

from __future__ import annotations

from typing import Any

from eth_utils import event_abi_to_log_topic

Param = tuple[str, str] | tuple[str, str, list[Any]]


def _param(definition: Param, indexed: bool | None = None) -> dict[str, Any]:
    kind, name = definition[0], definition[1]
    entry: dict[str, Any] = {"name": name, "type": kind}
    if len(definition) == 3:
        entry["components"] = [_param(c) for c in definition[2]]  # type: ignore[misc]
    if indexed is not None:
        entry["indexed"] = indexed
    return entry


def _fn(
    name: str,
    inputs: list[Param] | None = None,
    outputs: list[Param] | None = None,
    mutability: str = "view",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [_param(p) for p in inputs or []],
        "outputs": [_param(p) for p in outputs or []],
        "stateMutability": mutability,
    }


def _tx(
    name: str, inputs: list[Param] | None = None, outputs: list[Param] | None = None
) -> dict[str, Any]:
    return _fn(name, inputs, outputs, mutability="nonpayable")


def _event(name: str, inputs: list[tuple[str, str, bool]]) -> dict[str, Any]:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [_param((kind, arg), indexed) for kind, arg, indexed in inputs],
    }


def event_topic(abi: list[dict[str, Any]], name: str) -> str:
    """Return the 0x-prefixed keccak topic of a named event in an ABI.

    Raises:
        KeyError: If the ABI has no event with that name
    """
    for entry in abi:
        if entry.get("type") == "event" and entry.get("name") == name:
            return "0x" + event_abi_to_log_topic(entry).hex()
    raise KeyError(f"event {name} not in ABI")


def event_names(abi: list[dict[str, Any]]) -> list[str]:
    return [entry["name"] for entry in abi if entry.get("type") == "event"]


# =============================================================================
# ERC20
# =============================================================================

ERC20_ABI = [
    _fn("decimals", outputs=[("uint8", "")]),
    _fn("name", outputs=[("string", "")]),
    _fn("symbol", outputs=[("string", "")]),
    _fn("totalSupply", outputs=[("uint256", "")]),
    _fn("balanceOf", [("address", "account")], [("uint256", "")]),
    _fn("allowance", [("address", "owner"), ("address", "spender")], [("uint256", "")]),
    _tx("approve", [("address", "spender"), ("uint256", "amount")], [("bool", "")]),
    _event(
        "Approval",
        [("address", "owner", True), ("address", "spender", True), ("uint256", "value", False)],
    ),
    _event(
        "Transfer",
        [("address", "from", True), ("address", "to", True), ("uint256", "value", False)],
    ),
]

# =============================================================================
# Datatoken pool
# =============================================================================

_SWAP_ADDRESSES = ("address[3]", "tokenInOutMarket")
_SWAP_AMOUNTS = ("uint256[4]", "amountsInOutMaxFee")
_FEE_BREAKDOWN = [
    ("uint256", "tokenAmount"),
    ("uint256", "lpFeeAmount"),
    ("uint256", "oceanFeeAmount"),
    ("uint256", "publishMarketSwapFeeAmount"),
    ("uint256", "consumeMarketSwapFeeAmount"),
]

POOL_ABI = ERC20_ABI + [
    _fn("getNumTokens", outputs=[("uint256", "")]),
    _fn("getCurrentTokens", outputs=[("address[]", "")]),
    _fn("getFinalTokens", outputs=[("address[]", "")]),
    _fn("getController", outputs=[("address", "")]),
    _fn("getBaseTokenAddress", outputs=[("address", "")]),
    _fn("getDatatokenAddress", outputs=[("address", "")]),
    _fn("getMarketFee", outputs=[("uint256", "")]),
    _fn("_publishMarketCollector", outputs=[("address", "")]),
    _fn("getOPCFee", outputs=[("uint256", "")]),
    _fn("isBound", [("address", "token")], [("bool", "")]),
    _fn("isFinalized", outputs=[("bool", "")]),
    _fn("getBalance", [("address", "token")], [("uint256", "")]),
    _fn("getSwapFee", outputs=[("uint256", "")]),
    _fn("getNormalizedWeight", [("address", "token")], [("uint256", "")]),
    _fn("getDenormalizedWeight", [("address", "token")], [("uint256", "")]),
    _fn("getTotalDenormalizedWeight", outputs=[("uint256", "")]),
    _fn("publishMarketFees", [("address", "token")], [("uint256", "")]),
    _fn("communityFees", [("address", "token")], [("uint256", "")]),
    _fn("getCurrentMarketFees", outputs=[("address[]", ""), ("uint256[]", "")]),
    _fn("getCurrentOPCFees", outputs=[("address[]", ""), ("uint256[]", "")]),
    _fn(
        "getSpotPrice",
        [("address", "tokenIn"), ("address", "tokenOut"), ("uint256", "_consumeMarketSwapFee")],
        [("uint256", "")],
    ),
    _fn(
        "getAmountInExactOut",
        [
            ("address", "tokenIn"),
            ("address", "tokenOut"),
            ("uint256", "tokenAmountOut"),
            ("uint256", "_consumeMarketSwapFee"),
        ],
        [("tuple", "data", _FEE_BREAKDOWN)],
    ),
    _fn(
        "getAmountOutExactIn",
        [
            ("address", "tokenIn"),
            ("address", "tokenOut"),
            ("uint256", "tokenAmountIn"),
            ("uint256", "_consumeMarketSwapFee"),
        ],
        [("tuple", "data", _FEE_BREAKDOWN)],
    ),
    _fn(
        "calcPoolOutSingleIn",
        [("address", "tokenIn"), ("uint256", "tokenAmountIn")],
        [("uint256", "")],
    ),
    _fn(
        "calcSingleInPoolOut",
        [("address", "tokenIn"), ("uint256", "poolAmountOut")],
        [("uint256", "")],
    ),
    _fn(
        "calcSingleOutPoolIn",
        [("address", "tokenOut"), ("uint256", "poolAmountIn")],
        [("uint256", "")],
    ),
    _fn(
        "calcPoolInSingleOut",
        [("address", "tokenOut"), ("uint256", "tokenAmountOut")],
        [("uint256", "")],
    ),
    _tx("setSwapFee", [("uint256", "swapFee")]),
    _tx("collectOPC"),
    _tx("collectMarketFee"),
    _tx("updatePublishMarketFee", [("address", "_newCollector"), ("uint256", "_newSwapFee")]),
    _tx(
        "swapExactAmountIn",
        [_SWAP_ADDRESSES, _SWAP_AMOUNTS],
        [("uint256", "tokenAmountOut"), ("uint256", "spotPriceAfter")],
    ),
    _tx(
        "swapExactAmountOut",
        [_SWAP_ADDRESSES, _SWAP_AMOUNTS],
        [("uint256", "tokenAmountIn"), ("uint256", "spotPriceAfter")],
    ),
    _tx(
        "joinswapExternAmountIn",
        [("uint256", "tokenAmountIn"), ("uint256", "minPoolAmountOut")],
        [("uint256", "poolAmountOut")],
    ),
    _tx(
        "exitswapPoolAmountIn",
        [("uint256", "poolAmountIn"), ("uint256", "minAmountOut")],
        [("uint256", "tokenAmountOut")],
    ),
    _event(
        "LOG_SWAP",
        [
            ("address", "caller", True),
            ("address", "tokenIn", True),
            ("address", "tokenOut", True),
            ("uint256", "tokenAmountIn", False),
            ("uint256", "tokenAmountOut", False),
            ("uint256", "timestamp", False),
            ("uint256", "inBalance", False),
            ("uint256", "outBalance", False),
            ("uint256", "newSpotPrice", False),
        ],
    ),
    _event(
        "LOG_JOIN",
        [
            ("address", "caller", True),
            ("address", "tokenIn", True),
            ("uint256", "tokenAmountIn", False),
            ("uint256", "timestamp", False),
        ],
    ),
    _event(
        "LOG_EXIT",
        [
            ("address", "caller", True),
            ("address", "tokenOut", True),
            ("uint256", "tokenAmountOut", False),
            ("uint256", "timestamp", False),
        ],
    ),
]

# =============================================================================
# NFT (ERC721 template)
# =============================================================================

_ROLES = [
    ("bool", "manager"),
    ("bool", "deployERC20"),
    ("bool", "updateMetadata"),
    ("bool", "store"),
]
_METADATA_PROOF = [
    ("address", "validatorAddress"),
    ("uint8", "v"),
    ("bytes32", "r"),
    ("bytes32", "s"),
]

NFT_ABI = [
    _fn("name", outputs=[("string", "")]),
    _fn("symbol", outputs=[("string", "")]),
    _fn("ownerOf", [("uint256", "tokenId")], [("address", "")]),
    _fn("tokenURI", [("uint256", "tokenId")], [("string", "")]),
    _fn("getPermissions", [("address", "user")], [("tuple", "", _ROLES)]),
    _fn("isERC20Deployer", [("address", "account")], [("bool", "")]),
    _fn(
        "getMetaData",
        outputs=[("string", ""), ("string", ""), ("uint8", ""), ("bool", "")],
    ),
    _tx(
        "createERC20",
        [
            ("uint256", "_templateIndex"),
            ("string[]", "strings"),
            ("address[]", "addresses"),
            ("uint256[]", "uints"),
            ("bytes[]", "bytess"),
        ],
        [("address", "")],
    ),
    _tx("addManager", [("address", "_managerAddress")]),
    _tx("removeManager", [("address", "_managerAddress")]),
    _tx("addToCreateERC20List", [("address", "_allowedAddress")]),
    _tx("removeFromCreateERC20List", [("address", "_allowedAddress")]),
    _tx("addToMetadataList", [("address", "_allowedAddress")]),
    _tx("removeFromMetadataList", [("address", "_allowedAddress")]),
    _tx("addTo725StoreList", [("address", "_allowedAddress")]),
    _tx("removeFrom725StoreList", [("address", "_allowedAddress")]),
    _tx("cleanPermissions"),
    _tx(
        "transferFrom",
        [("address", "from"), ("address", "to"), ("uint256", "tokenId")],
    ),
    _tx(
        "setMetaData",
        [
            ("uint8", "_metaDataState"),
            ("string", "_metaDataDecryptorUrl"),
            ("string", "_metaDataDecryptorAddress"),
            ("bytes", "flags"),
            ("bytes", "data"),
            ("bytes32", "_metaDataHash"),
            ("tuple[]", "_metadataProofs", _METADATA_PROOF),
        ],
    ),
    _tx("setMetaDataState", [("uint8", "_metaDataState")]),
    _tx("setTokenURI", [("uint256", "tokenId"), ("string", "tokenURI")]),
    _tx(
        "setMetaDataAndTokenURI",
        [
            (
                "tuple",
                "_metadataAndTokenURI",
                [
                    ("uint8", "metaDataState"),
                    ("string", "metaDataDecryptorUrl"),
                    ("string", "metaDataDecryptorAddress"),
                    ("bytes", "flags"),
                    ("bytes", "data"),
                    ("bytes32", "metaDataHash"),
                    ("uint256", "tokenId"),
                    ("string", "tokenURI"),
                    ("tuple[]", "metadataProofs", _METADATA_PROOF),
                ],
            )
        ],
    ),
    _event(
        "TokenCreated",
        [
            ("address", "newTokenAddress", True),
            ("address", "templateAddress", True),
            ("string", "name", False),
        ],
    ),
    _event(
        "TokenURIUpdate",
        [
            ("address", "updatedBy", True),
            ("string", "tokenURI", False),
            ("uint256", "tokenID", False),
            ("uint256", "timestamp", False),
            ("uint256", "blockNumber", False),
        ],
    ),
    _event(
        "MetadataUpdated",
        [
            ("address", "updatedBy", True),
            ("uint8", "state", False),
            ("string", "decryptorUrl", False),
            ("bytes", "flags", False),
            ("bytes", "data", False),
            ("bytes32", "metaDataHash", False),
            ("uint256", "timestamp", False),
            ("uint256", "blockNumber", False),
        ],
    ),
    _event(
        "MetadataState",
        [
            ("address", "updatedBy", True),
            ("uint8", "state", False),
            ("uint256", "timestamp", False),
            ("uint256", "blockNumber", False),
        ],
    ),
]

# =============================================================================
# NFT factory
# =============================================================================

_TEMPLATE = [("address", "templateAddress"), ("bool", "isActive")]
_NFT_CREATE_DATA = [
    ("string", "name"),
    ("string", "symbol"),
    ("uint256", "templateIndex"),
    ("string", "tokenURI"),
    ("bool", "transferable"),
    ("address", "owner"),
]
_ERC_CREATE_DATA = [
    ("uint256", "templateIndex"),
    ("string[]", "strings"),
    ("address[]", "addresses"),
    ("uint256[]", "uints"),
    ("bytes[]", "bytess"),
]
_POOL_DATA = [
    ("address[]", "addresses"),
    ("uint256[]", "ssParams"),
    ("uint256[]", "swapFees"),
]
_FIXED_DATA = [
    ("address", "fixedPriceAddress"),
    ("address[]", "addresses"),
    ("uint256[]", "uints"),
]
_DISPENSER_DATA = [
    ("address", "dispenserAddress"),
    ("uint256", "maxTokens"),
    ("uint256", "maxBalance"),
    ("bool", "withMint"),
    ("address", "allowedSwapper"),
]
_PROVIDER_FEE = [
    ("address", "providerFeeAddress"),
    ("address", "providerFeeToken"),
    ("uint256", "providerFeeAmount"),
    ("uint8", "v"),
    ("bytes32", "r"),
    ("bytes32", "s"),
    ("uint256", "validUntil"),
    ("bytes", "providerData"),
]
_CONSUME_MARKET_FEE = [
    ("address", "consumeMarketFeeAddress"),
    ("address", "consumeMarketFeeToken"),
    ("uint256", "consumeMarketFeeAmount"),
]
_TOKEN_ORDER = [
    ("address", "tokenAddress"),
    ("address", "consumer"),
    ("uint256", "serviceIndex"),
    ("tuple", "_providerFee", _PROVIDER_FEE),
    ("tuple", "_consumeMarketFee", _CONSUME_MARKET_FEE),
]

NFT_FACTORY_ABI = [
    _fn("owner", outputs=[("address", "")]),
    _fn("getCurrentNFTCount", outputs=[("uint256", "")]),
    _fn("getCurrentTokenCount", outputs=[("uint256", "")]),
    _fn("getCurrentNFTTemplateCount", outputs=[("uint256", "")]),
    _fn("getCurrentTemplateCount", outputs=[("uint256", "")]),
    _fn("getNFTTemplate", [("uint256", "_index")], [("tuple", "", _TEMPLATE)]),
    _fn("getTokenTemplate", [("uint256", "_index")], [("tuple", "", _TEMPLATE)]),
    _fn("erc20List", [("address", "")], [("bool", "")]),
    _fn("erc721List", [("address", "")], [("address", "")]),
    _tx(
        "deployERC721Contract",
        [
            ("string", "name"),
            ("string", "symbol"),
            ("uint256", "_templateIndex"),
            ("address", "additionalERC20Deployer"),
            ("address", "additionalMetaDataUpdater"),
            ("string", "tokenURI"),
            ("bool", "transferable"),
            ("address", "owner"),
        ],
        [("address", "token")],
    ),
    _tx("add721TokenTemplate", [("address", "_templateAddress")], [("uint256", "")]),
    _tx("disable721TokenTemplate", [("uint256", "_index")]),
    _tx("reactivate721TokenTemplate", [("uint256", "_index")]),
    _tx("addTokenTemplate", [("address", "_templateAddress")], [("uint256", "")]),
    _tx("disableTokenTemplate", [("uint256", "_index")]),
    _tx("reactivateTokenTemplate", [("uint256", "_index")]),
    _tx("startMultipleTokenOrder", [("tuple[]", "orders", _TOKEN_ORDER)]),
    _tx(
        "createNftWithErc20",
        [("tuple", "_NftCreateData", _NFT_CREATE_DATA), ("tuple", "_ErcCreateData", _ERC_CREATE_DATA)],
        [("address", "erc721Address"), ("address", "erc20Address")],
    ),
    _tx(
        "createNftWithErc20WithPool",
        [
            ("tuple", "_NftCreateData", _NFT_CREATE_DATA),
            ("tuple", "_ErcCreateData", _ERC_CREATE_DATA),
            ("tuple", "_PoolData", _POOL_DATA),
        ],
        [("address", "erc721Address"), ("address", "erc20Address"), ("address", "poolAddress")],
    ),
    _tx(
        "createNftWithErc20WithFixedRate",
        [
            ("tuple", "_NftCreateData", _NFT_CREATE_DATA),
            ("tuple", "_ErcCreateData", _ERC_CREATE_DATA),
            ("tuple", "_FixedData", _FIXED_DATA),
        ],
        [("address", "erc721Address"), ("address", "erc20Address"), ("bytes32", "exchangeId")],
    ),
    _tx(
        "createNftWithErc20WithDispenser",
        [
            ("tuple", "_NftCreateData", _NFT_CREATE_DATA),
            ("tuple", "_ErcCreateData", _ERC_CREATE_DATA),
            ("tuple", "_DispenserData", _DISPENSER_DATA),
        ],
        [("address", "erc721Address"), ("address", "erc20Address")],
    ),
    _event(
        "NFTCreated",
        [
            ("address", "newTokenAddress", True),
            ("address", "templateAddress", True),
            ("string", "tokenName", False),
            ("address", "admin", False),
            ("string", "symbol", False),
            ("string", "tokenURI", False),
            ("bool", "transferable", False),
            ("address", "creator", True),
        ],
    ),
    _event(
        "TokenCreated",
        [
            ("address", "newTokenAddress", True),
            ("address", "templateAddress", True),
            ("string", "name", False),
            ("address", "creator", False),
        ],
    ),
    _event(
        "NewPool",
        [
            ("address", "poolAddress", False),
            ("address", "ssContract", False),
            ("address", "baseTokenAddress", False),
        ],
    ),
]

# =============================================================================
# Side staking
# =============================================================================

SIDE_STAKING_ABI = [
    _fn("getDatatokenCirculatingSupply", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn(
        "getDatatokenCurrentCirculatingSupply",
        [("address", "datatokenAddress")],
        [("uint256", "")],
    ),
    _fn("getPublisherAddress", [("address", "datatokenAddress")], [("address", "")]),
    _fn("getBaseTokenAddress", [("address", "datatokenAddress")], [("address", "")]),
    _fn("getPoolAddress", [("address", "datatokenAddress")], [("address", "")]),
    _fn("getBaseTokenBalance", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("getDatatokenBalance", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("getvestingEndBlock", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("getvestingAmount", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("getvestingLastBlock", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("getvestingAmountSoFar", [("address", "datatokenAddress")], [("uint256", "")]),
    _fn("router", outputs=[("address", "")]),
    _tx("getVesting", [("address", "datatokenAddress")]),
    _tx(
        "setPoolSwapFee",
        [("address", "datatokenAddress"), ("address", "poolAddress"), ("uint256", "swapFee")],
    ),
    _event(
        "Vesting",
        [
            ("address", "datatokenAddress", True),
            ("address", "publisherAddress", True),
            ("address", "caller", True),
            ("uint256", "amountVested", False),
        ],
    ),
]


__all__ = [
    "ERC20_ABI",
    "POOL_ABI",
    "NFT_ABI",
    "NFT_FACTORY_ABI",
    "SIDE_STAKING_ABI",
    "event_topic",
    "event_names",
]
