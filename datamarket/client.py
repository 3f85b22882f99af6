"""Entry point wiring every component to one provider and one config."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from datamarket.chain.web3_provider import Web3ContractProvider
from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.factories.nft_factory import NftFactory
from datamarket.pools.bounds import BoundsCalculator
from datamarket.pools.pool import Pool
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.quotes import FeeDecomposer
from datamarket.staking.side_staking import SideStaking
from datamarket.tokens.erc20 import Erc20Token
from datamarket.tokens.nft import Nft
from datamarket.tx.gas import GasPricePolicy
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.units import UnitConverter

if TYPE_CHECKING:
    from datamarket.chain.base import ContractProvider

logger = structlog.get_logger()


class DataMarketClient:
    """All data market components sharing one converter and one pipeline.

    The unit converter's decimals cache is shared, so each token's
    precision is queried at most once per client.

    Example:
        >>> client = DataMarketClient.from_config(ClientConfig(rpc_url=url, nft_factory_address=f))
        >>> quote = await client.quotes.quote_exact_in(pool, ocean, datatoken, Decimal("1"))
    """

    def __init__(
        self,
        provider: ContractProvider,
        config: ClientConfig | None = None,
        gas_price_policy: GasPricePolicy | None = None,
    ):
        self.provider = provider
        self.config = config or DEFAULT_CONFIG
        self.converter = UnitConverter(provider, self.config)
        self.pipeline = TransactionPipeline(provider, self.config, gas_price_policy)

        self.query = PoolQueryFacade(provider, self.converter, self.config)
        self.bounds = BoundsCalculator(self.query, self.config)
        self.quotes = FeeDecomposer(self.query, self.bounds, self.converter)
        self.pool = Pool(self.query, self.pipeline, self.bounds, self.quotes, self.config)

        self.nft = Nft(provider, self.pipeline)
        self.erc20 = Erc20Token(provider, self.pipeline, self.converter)
        self.side_staking = SideStaking(provider, self.pipeline, self.converter)

        self.nft_factory: NftFactory | None = None
        if self.config.nft_factory_address:
            self.nft_factory = NftFactory(
                self.config.nft_factory_address,
                provider,
                self.pipeline,
                self.converter,
                self.config,
            )

        logger.debug(
            "client_initialized",
            chain_id=self.config.chain_id,
            nft_factory=self.config.nft_factory_address,
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, gas_price_policy: GasPricePolicy | None = None
    ) -> DataMarketClient:
        """Connect to config.rpc_url over HTTP."""
        provider = Web3ContractProvider.from_url(config.rpc_url)
        return cls(provider, config, gas_price_policy)

    @classmethod
    def from_env(cls) -> DataMarketClient:
        """Connect using DATAMARKET_* environment variables."""
        return cls.from_config(ClientConfig.from_env())

    def factory(self) -> NftFactory:
        """The configured NFT factory.

        Raises:
            ValueError: If no nft_factory_address is configured
        """
        if self.nft_factory is None:
            raise ValueError("nft_factory_address is not configured")
        return self.nft_factory


__all__ = ["DataMarketClient"]
