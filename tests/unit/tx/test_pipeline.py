"""Tests for the estimate-then-submit transaction pipeline."""

import asyncio

import pytest

from datamarket.config import ClientConfig
from datamarket.errors import DataMarketError, PermissionDenied, SubmissionReverted
from datamarket.tx.gas import FixedGasPrice
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt
from tests.helpers import ALICE, POOL, FakeProvider


def make_pipeline(provider, **overrides):
    config = ClientConfig(**overrides)
    return TransactionPipeline(provider, config, FixedGasPrice(10**9))


class TestEstimateOnly:
    """Tests for estimate_only calls."""

    def test_returns_positive_estimate(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.estimate_result = 54_321

        result = asyncio.run(
            make_pipeline(provider).execute(contract, "collectOPC", [], ALICE, estimate_only=True)
        )

        assert result == 54_321
        assert isinstance(result, int)

    def test_submits_nothing(self):
        """No write and no gas price query happen."""
        provider = FakeProvider()
        contract = provider.add(POOL)

        asyncio.run(
            make_pipeline(provider).execute(contract, "collectOPC", [], ALICE, estimate_only=True)
        )

        assert contract.write_calls == []
        assert len(contract.estimate_calls) == 1

    def test_estimate_failure_returns_default(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.estimate_result = RuntimeError("execution reverted")

        result = asyncio.run(
            make_pipeline(provider, gas_limit_default=777_000).execute(
                contract, "collectOPC", [], ALICE, estimate_only=True
            )
        )

        assert result == 777_000


class TestSubmission:
    """Tests for submitted calls."""

    def test_submits_with_margin_and_gas_price(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.estimate_result = 50_000

        receipt = asyncio.run(
            make_pipeline(provider).execute(contract, "setSwapFee", [10**15], ALICE)
        )

        assert isinstance(receipt, TxReceipt)
        assert receipt.succeeded
        call = contract.write_calls[0]
        assert call.method == "setSwapFee"
        assert call.args == [10**15]
        assert call.tx == {"from": ALICE, "gas": 50_001, "gasPrice": 10**9}

    def test_estimate_is_sent_with_sender_only(self):
        provider = FakeProvider()
        contract = provider.add(POOL)

        asyncio.run(make_pipeline(provider).execute(contract, "collectOPC", [], ALICE))

        assert contract.estimate_calls[0].tx == {"from": ALICE}

    def test_estimation_failure_still_submits_with_default(self):
        """A refused estimate falls back to the default limit instead of failing."""
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.estimate_result = RuntimeError("gas required exceeds allowance")

        receipt = asyncio.run(
            make_pipeline(provider, gas_limit_default=600_000).execute(
                contract, "collectOPC", [], ALICE
            )
        )

        assert receipt.succeeded
        assert contract.write_calls[0].tx["gas"] == 600_001

    def test_non_positive_estimate_uses_default(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.estimate_result = 0

        asyncio.run(
            make_pipeline(provider, gas_limit_default=400_000).execute(
                contract, "collectOPC", [], ALICE
            )
        )

        assert contract.write_calls[0].tx["gas"] == 400_001

    def test_default_policy_queries_node_gas_price(self):
        provider = FakeProvider(gas_price=3 * 10**9)
        contract = provider.add(POOL)

        asyncio.run(TransactionPipeline(provider).execute(contract, "collectOPC", [], ALICE))

        assert contract.write_calls[0].tx["gasPrice"] == 3 * 10**9
        assert provider.gas_price_calls == 1


class TestFailures:
    """Tests for revert and permission mapping."""

    def test_reverted_receipt_raises(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.write_result = TxReceipt(tx_hash="0xdead", status=0, revert_reason="ERR_LIMIT_OUT")

        with pytest.raises(SubmissionReverted) as exc_info:
            asyncio.run(make_pipeline(provider).execute(contract, "swapExactAmountIn", [], ALICE))

        assert exc_info.value.reason == "ERR_LIMIT_OUT"
        assert exc_info.value.tx_hash == "0xdead"
        assert not isinstance(exc_info.value, PermissionDenied)

    def test_role_revert_becomes_permission_denied(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.write_result = SubmissionReverted("addManager", "ERC721RolesAddress: NOT MANAGER")

        with pytest.raises(PermissionDenied):
            asyncio.run(make_pipeline(provider).execute(contract, "addManager", [ALICE], ALICE))

    def test_node_error_becomes_submission_reverted(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.write_result = ConnectionError("connection refused")

        with pytest.raises(SubmissionReverted) as exc_info:
            asyncio.run(make_pipeline(provider).execute(contract, "collectOPC", [], ALICE))

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_submission_is_not_retried(self):
        provider = FakeProvider()
        contract = provider.add(POOL)
        contract.write_result = ConnectionError("timeout")

        with pytest.raises(SubmissionReverted):
            asyncio.run(make_pipeline(provider).execute(contract, "collectOPC", [], ALICE))

        assert len(contract.write_calls) == 1

    def test_gas_price_failure_becomes_submission_reverted(self):
        """A node that cannot quote a gas price fails with a typed error and nothing is sent."""
        provider = FakeProvider(gas_price=ConnectionError("node down"))
        contract = provider.add(POOL)

        with pytest.raises(SubmissionReverted, match="gas price unavailable") as exc_info:
            asyncio.run(TransactionPipeline(provider).execute(contract, "collectOPC", [], ALICE))

        assert isinstance(exc_info.value, DataMarketError)
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert contract.write_calls == []
