"""Pytest configuration and fixtures."""

import pytest

from datamarket.config import ClientConfig
from datamarket.pools.bounds import BoundsCalculator
from datamarket.pools.pool import Pool
from datamarket.pools.query import PoolQueryFacade
from datamarket.pools.quotes import FeeDecomposer
from datamarket.tx.gas import FixedGasPrice
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.units import UnitConverter
from tests.helpers import DATATOKEN, OCEAN, POOL, USDC, WEI, FakePool, FakeProvider


@pytest.fixture
def config() -> ClientConfig:
    """Default configuration with a small fallback gas limit."""
    return ClientConfig(gas_limit_default=500_000)


@pytest.fixture
def provider() -> FakeProvider:
    """Provider knowing OCEAN, USDC and DATATOKEN precisions."""
    provider = FakeProvider(gas_price=2 * 10**9)
    provider.add_token(OCEAN, decimals=18)
    provider.add_token(USDC, decimals=6)
    provider.add_token(DATATOKEN, decimals=18)
    return provider


@pytest.fixture
def fake_pool(provider: FakeProvider) -> FakePool:
    """OCEAN/DATATOKEN pool holding 1000 of each token."""
    pool = FakePool(provider, POOL, base_token=OCEAN, datatoken=DATATOKEN)
    pool.set_reserve(OCEAN, 1000 * WEI)
    pool.set_reserve(DATATOKEN, 1000 * WEI)
    return pool


@pytest.fixture
def converter(provider: FakeProvider, config: ClientConfig) -> UnitConverter:
    return UnitConverter(provider, config)


@pytest.fixture
def pipeline(provider: FakeProvider, config: ClientConfig) -> TransactionPipeline:
    """Pipeline with a fixed gas price of 1 gwei."""
    return TransactionPipeline(provider, config, FixedGasPrice(10**9))


@pytest.fixture
def query(provider: FakeProvider, converter: UnitConverter, config: ClientConfig) -> PoolQueryFacade:
    return PoolQueryFacade(provider, converter, config)


@pytest.fixture
def bounds(query: PoolQueryFacade, config: ClientConfig) -> BoundsCalculator:
    return BoundsCalculator(query, config)


@pytest.fixture
def quotes(query: PoolQueryFacade, bounds: BoundsCalculator) -> FeeDecomposer:
    return FeeDecomposer(query, bounds)


@pytest.fixture
def pool(
    query: PoolQueryFacade,
    pipeline: TransactionPipeline,
    bounds: BoundsCalculator,
    quotes: FeeDecomposer,
    config: ClientConfig,
) -> Pool:
    return Pool(query, pipeline, bounds, quotes, config)
