"""Creation parameter objects and their contract encodings.

Parameters are human-readable (Decimal amounts, ratios); to_contract()
produces the struct the factory expects, with amounts in wire units.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from datamarket.constants import ZERO_ADDRESS
from datamarket.units import UnitConverter, to_wei


@dataclass(frozen=True)
class NftCreateData:
    """Data NFT to deploy. Empty name or symbol are generated at creation."""

    name: str = ""
    symbol: str = ""
    template_index: int = 1
    token_uri: str = ""
    transferable: bool = True
    owner: str = ZERO_ADDRESS

    def to_contract(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "templateIndex": self.template_index,
            "tokenURI": self.token_uri,
            "transferable": self.transferable,
            "owner": self.owner,
        }


@dataclass(frozen=True)
class Erc20CreateParams:
    """Fungible datatoken to deploy from a data NFT.

    Attributes:
        template_index: Token template to use (1-based)
        minter: Address allowed to mint
        payment_collector: Receives payments for orders
        mp_fee_address: Publish-market fee recipient
        fee_token: Token the publish-market fee is paid in
        fee_amount: Publish-market fee per order
        cap: Maximum supply
        name: Token name
        symbol: Token symbol
    """

    template_index: int
    minter: str
    payment_collector: str
    mp_fee_address: str
    fee_token: str
    fee_amount: Decimal
    cap: Decimal
    name: str
    symbol: str

    def to_contract(self) -> dict[str, Any]:
        return {
            "templateIndex": self.template_index,
            "strings": [self.name, self.symbol],
            "addresses": [self.minter, self.payment_collector, self.mp_fee_address, self.fee_token],
            "uints": [to_wei(self.cap), to_wei(self.fee_amount)],
            "bytess": [],
        }


@dataclass(frozen=True)
class PoolCreationParams:
    """AMM pool created alongside a datatoken, staked by the side-staking bot.

    Attributes:
        ss_contract: Side-staking contract
        base_token_address: Token the datatoken is paired with
        base_token_sender: Account providing the initial liquidity
        publisher_address: Receives vested datatokens
        market_fee_collector: Publish-market fee recipient
        pool_template_address: Pool template to clone
        rate: Initial datatokens per base token
        base_token_decimals: Precision of the base token
        vesting_amount: Datatokens vested to the publisher
        vested_blocks: Vesting duration in blocks
        initial_base_token_liquidity: Base token deposited at creation
        swap_fee_liquidity_provider: LP fee ratio
        swap_fee_market_runner: Publish-market fee ratio
    """

    ss_contract: str
    base_token_address: str
    base_token_sender: str
    publisher_address: str
    market_fee_collector: str
    pool_template_address: str
    rate: Decimal
    base_token_decimals: int
    vesting_amount: Decimal
    vested_blocks: int
    initial_base_token_liquidity: Decimal
    swap_fee_liquidity_provider: Decimal
    swap_fee_market_runner: Decimal

    async def to_contract(self, converter: UnitConverter) -> dict[str, Any]:
        """Encode, converting the initial liquidity with the base token precision."""
        liquidity = await converter.to_units(
            self.base_token_address, self.initial_base_token_liquidity
        )
        return {
            "addresses": [
                self.ss_contract,
                self.base_token_address,
                self.base_token_sender,
                self.publisher_address,
                self.market_fee_collector,
                self.pool_template_address,
            ],
            "ssParams": [
                to_wei(self.rate),
                self.base_token_decimals,
                to_wei(self.vesting_amount),
                self.vested_blocks,
                liquidity,
            ],
            "swapFees": [
                to_wei(self.swap_fee_liquidity_provider),
                to_wei(self.swap_fee_market_runner),
            ],
        }


@dataclass(frozen=True)
class FreCreationParams:
    """Fixed-rate exchange created alongside a datatoken."""

    fixed_rate_address: str
    base_token_address: str
    owner: str
    market_fee_collector: str
    base_token_decimals: int
    datatoken_decimals: int
    fixed_rate: Decimal
    market_fee: Decimal
    with_mint: bool = False
    allowed_consumer: str | None = None

    def to_contract(self) -> dict[str, Any]:
        return {
            "fixedPriceAddress": self.fixed_rate_address,
            "addresses": [
                self.base_token_address,
                self.owner,
                self.market_fee_collector,
                self.allowed_consumer or ZERO_ADDRESS,
            ],
            "uints": [
                self.base_token_decimals,
                self.datatoken_decimals,
                to_wei(self.fixed_rate),
                to_wei(self.market_fee),
                1 if self.with_mint else 0,
            ],
        }


@dataclass(frozen=True)
class DispenserCreationParams:
    """Free-token dispenser created alongside a datatoken."""

    dispenser_address: str
    max_tokens: Decimal
    max_balance: Decimal
    with_mint: bool = True
    allowed_swapper: str = ZERO_ADDRESS

    def to_contract(self) -> dict[str, Any]:
        return {
            "dispenserAddress": self.dispenser_address,
            "maxTokens": to_wei(self.max_tokens),
            "maxBalance": to_wei(self.max_balance),
            "withMint": self.with_mint,
            "allowedSwapper": self.allowed_swapper,
        }


@dataclass(frozen=True)
class ProviderFees:
    """Signed provider fee attached to an order. Amount is already in wire units."""

    provider_fee_address: str
    provider_fee_token: str
    provider_fee_amount: int
    v: int
    r: str
    s: str
    valid_until: int
    provider_data: str

    def to_contract(self) -> dict[str, Any]:
        return {
            "providerFeeAddress": self.provider_fee_address,
            "providerFeeToken": self.provider_fee_token,
            "providerFeeAmount": self.provider_fee_amount,
            "v": self.v,
            "r": self.r,
            "s": self.s,
            "validUntil": self.valid_until,
            "providerData": self.provider_data,
        }


@dataclass(frozen=True)
class ConsumeMarketFee:
    """Fee charged by the market an order is placed through. Amount in wire units."""

    consume_market_fee_address: str = ZERO_ADDRESS
    consume_market_fee_token: str = ZERO_ADDRESS
    consume_market_fee_amount: int = 0

    def to_contract(self) -> dict[str, Any]:
        return {
            "consumeMarketFeeAddress": self.consume_market_fee_address,
            "consumeMarketFeeToken": self.consume_market_fee_token,
            "consumeMarketFeeAmount": self.consume_market_fee_amount,
        }


@dataclass(frozen=True)
class TokenOrder:
    """One order in a start_multiple_token_order batch."""

    token_address: str
    consumer: str
    service_index: int
    provider_fee: ProviderFees
    consume_market_fee: ConsumeMarketFee = field(default_factory=ConsumeMarketFee)

    def to_contract(self) -> dict[str, Any]:
        return {
            "tokenAddress": self.token_address,
            "consumer": self.consumer,
            "serviceIndex": self.service_index,
            "_providerFee": self.provider_fee.to_contract(),
            "_consumeMarketFee": self.consume_market_fee.to_contract(),
        }


@dataclass(frozen=True)
class Template:
    """A factory template slot."""

    template_address: str
    is_active: bool

    @classmethod
    def from_contract(cls, raw: Any) -> Template:
        if isinstance(raw, dict):
            return cls(template_address=raw["templateAddress"], is_active=bool(raw["isActive"]))
        address, active = raw
        return cls(template_address=address, is_active=bool(active))


@dataclass(frozen=True)
class MetadataProof:
    """Validator signature over a metadata update."""

    validator_address: str
    v: int
    r: str
    s: str

    def to_contract(self) -> dict[str, Any]:
        return {"validatorAddress": self.validator_address, "v": self.v, "r": self.r, "s": self.s}


@dataclass(frozen=True)
class MetadataAndTokenUri:
    """Combined metadata and token URI update for a data NFT."""

    metadata_state: int
    metadata_decryptor_url: str
    metadata_decryptor_address: str
    flags: bytes
    data: bytes
    metadata_hash: bytes
    token_id: int
    token_uri: str
    metadata_proofs: tuple[MetadataProof, ...] = ()

    def to_contract(self) -> dict[str, Any]:
        return {
            "metaDataState": self.metadata_state,
            "metaDataDecryptorUrl": self.metadata_decryptor_url,
            "metaDataDecryptorAddress": self.metadata_decryptor_address,
            "flags": self.flags,
            "data": self.data,
            "metaDataHash": self.metadata_hash,
            "tokenId": self.token_id,
            "tokenURI": self.token_uri,
            "metadataProofs": [proof.to_contract() for proof in self.metadata_proofs],
        }


__all__ = [
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
]
