"""Tests for state-changing pool operations."""

import asyncio
from decimal import Decimal

import pytest
from eth_utils import keccak

from datamarket.constants import MAX_UINT_256
from datamarket.errors import AmountExceedsBound, PermissionDenied, SubmissionReverted
from datamarket.pools.pool import Pool
from datamarket.pools.types import AmountsInMaxFee, AmountsOutMaxFee, TokenInOutMarket
from tests.helpers import ALICE, BOB, DATATOKEN, MARKET, OCEAN, POOL, WEI

TOKENS = TokenInOutMarket(token_in=OCEAN, token_out=DATATOKEN, market_fee_address=MARKET)


class TestSwapExactAmountIn:
    """Tests for exact-in swaps."""

    def test_submits_wire_arguments(self, pool, fake_pool):
        amounts = AmountsInMaxFee(
            token_amount_in=Decimal(10),
            min_amount_out=Decimal("9.5"),
            swap_market_fee=Decimal("0.001"),
        )
        receipt = asyncio.run(pool.swap_exact_amount_in(ALICE, POOL, TOKENS, amounts))

        assert receipt.succeeded
        call = fake_pool.contract.write_calls[0]
        assert call.method == "swapExactAmountIn"
        assert call.args == [
            [OCEAN, DATATOKEN, MARKET],
            [10 * WEI, 95 * WEI // 10, MAX_UINT_256, 10**15],
        ]

    def test_max_price_uses_base_token_precision(self, pool, fake_pool):
        amounts = AmountsInMaxFee(Decimal(1), Decimal(0), max_price=Decimal(2))
        asyncio.run(pool.swap_exact_amount_in(ALICE, POOL, TOKENS, amounts))
        assert fake_pool.contract.write_calls[0].args[1][2] == 2 * WEI

    def test_estimate_only_submits_nothing(self, pool, fake_pool):
        amounts = AmountsInMaxFee(Decimal(10), Decimal(0))
        gas = asyncio.run(
            pool.swap_exact_amount_in(ALICE, POOL, TOKENS, amounts, estimate_only=True)
        )

        assert isinstance(gas, int)
        assert gas > 0
        assert fake_pool.contract.write_calls == []

    def test_over_bound_never_estimates_or_submits(self, pool, fake_pool):
        amounts = AmountsInMaxFee(Decimal(1000), Decimal(0))
        with pytest.raises(AmountExceedsBound):
            asyncio.run(pool.swap_exact_amount_in(ALICE, POOL, TOKENS, amounts))

        assert fake_pool.contract.estimate_calls == []
        assert fake_pool.contract.write_calls == []


class TestSwapExactAmountOut:
    """Tests for exact-out swaps."""

    def test_submits_wire_arguments(self, pool, fake_pool):
        amounts = AmountsOutMaxFee(max_amount_in=Decimal(2), token_amount_out=Decimal(1))
        asyncio.run(pool.swap_exact_amount_out(BOB, POOL, TOKENS, amounts))

        call = fake_pool.contract.write_calls[0]
        assert call.method == "swapExactAmountOut"
        assert call.args == [[OCEAN, DATATOKEN, MARKET], [2 * WEI, WEI, MAX_UINT_256, 0]]
        assert call.tx["from"] == BOB

    def test_over_bound_is_rejected(self, pool, fake_pool):
        amounts = AmountsOutMaxFee(max_amount_in=Decimal(5000), token_amount_out=Decimal(600))
        with pytest.raises(AmountExceedsBound):
            asyncio.run(pool.swap_exact_amount_out(BOB, POOL, TOKENS, amounts))
        assert fake_pool.contract.write_calls == []


class TestSingleSidedLiquidity:
    """Tests for joins and exits."""

    def test_join(self, pool, fake_pool):
        asyncio.run(pool.join_swap_extern_amount_in(ALICE, POOL, Decimal(10), Decimal("0.5")))
        call = fake_pool.contract.write_calls[0]
        assert call.method == "joinswapExternAmountIn"
        assert call.args == [10 * WEI, WEI // 2]

    def test_join_with_decimals_override(self, pool, fake_pool, provider):
        """An explicit precision is used for both the bound check and the wire amount."""
        asyncio.run(
            pool.join_swap_extern_amount_in(
                ALICE, POOL, Decimal(10), Decimal("0.5"), token_in_decimals=6
            )
        )

        assert fake_pool.contract.write_calls[0].args == [10 * 10**6, WEI // 2]
        ocean = provider.contracts[OCEAN.lower()]
        assert "decimals" not in [m for m, _ in ocean.read_calls]

    def test_join_over_bound(self, pool, fake_pool):
        with pytest.raises(AmountExceedsBound):
            asyncio.run(pool.join_swap_extern_amount_in(ALICE, POOL, Decimal(600), Decimal(0)))
        assert fake_pool.contract.write_calls == []

    def test_exit(self, pool, fake_pool):
        asyncio.run(pool.exit_swap_pool_amount_in(ALICE, POOL, Decimal(10), Decimal(99)))
        call = fake_pool.contract.write_calls[0]
        assert call.method == "exitswapPoolAmountIn"
        assert call.args == [10 * WEI, 99 * WEI]

    def test_exit_over_bound(self, pool, fake_pool):
        """60 of 100 shares would withdraw 600 of a 1000 reserve."""
        with pytest.raises(AmountExceedsBound):
            asyncio.run(pool.exit_swap_pool_amount_in(ALICE, POOL, Decimal(60), Decimal(0)))
        assert fake_pool.contract.write_calls == []


class TestFees:
    """Tests for fee administration."""

    def test_set_swap_fee(self, pool, fake_pool):
        asyncio.run(pool.set_swap_fee(ALICE, POOL, Decimal("0.003")))
        assert fake_pool.contract.write_calls[0].args == [3 * 10**15]

    def test_collect_opc(self, pool, fake_pool):
        asyncio.run(pool.collect_opc(BOB, POOL))
        assert fake_pool.contract.methods_written() == ["collectOPC"]

    def test_collect_market_fee(self, pool, fake_pool):
        asyncio.run(pool.collect_market_fee(MARKET, POOL))
        assert fake_pool.contract.methods_written() == ["collectMarketFee"]

    def test_collect_market_fee_rejected_by_pool(self, pool, fake_pool):
        """The collector is enforced by the pool; its revert surfaces as PermissionDenied."""
        fake_pool.contract.write_result = SubmissionReverted(
            "collectMarketFee", "caller is not publishMarketCollector"
        )
        with pytest.raises(PermissionDenied):
            asyncio.run(pool.collect_market_fee(BOB, POOL))

    def test_collect_market_fee_estimate_for_any_sender(self, pool, fake_pool):
        """Estimating never reads the collector or rejects the sender locally."""
        fake_pool.market_fee_collector = MARKET
        gas = asyncio.run(pool.collect_market_fee(ALICE, POOL, estimate_only=True))

        assert gas == 100_000
        assert fake_pool.contract.write_calls == []
        assert "_publishMarketCollector" not in [m for m, _ in fake_pool.contract.read_calls]

    def test_update_publish_market_fee(self, pool, fake_pool):
        fake_pool.market_fee_collector = MARKET
        asyncio.run(pool.update_publish_market_fee(MARKET, POOL, BOB, Decimal("0.01")))
        assert fake_pool.contract.write_calls[0].args == [BOB, 10**16]

    def test_update_publish_market_fee_rejected_by_pool(self, pool, fake_pool):
        fake_pool.contract.write_result = SubmissionReverted(
            "updatePublishMarketFee", "ERR_NOT_CONTROLLER"
        )
        with pytest.raises(PermissionDenied):
            asyncio.run(pool.update_publish_market_fee(BOB, POOL, BOB, Decimal("0.01")))


class TestEventSignatures:
    """Tests for event topic helpers."""

    def test_swap_signature(self):
        expected = keccak(
            text="LOG_SWAP(address,address,address,uint256,uint256,uint256,uint256,uint256,uint256)"
        )
        assert Pool.get_swap_event_signature() == "0x" + expected.hex()

    def test_join_signature(self):
        expected = keccak(text="LOG_JOIN(address,address,uint256,uint256)")
        assert Pool.get_join_event_signature() == "0x" + expected.hex()

    def test_exit_signature(self):
        expected = keccak(text="LOG_EXIT(address,address,uint256,uint256)")
        assert Pool.get_exit_event_signature() == "0x" + expected.hex()
