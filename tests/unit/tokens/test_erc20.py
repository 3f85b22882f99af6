"""Tests for ERC20 reads and approvals."""

import asyncio
from decimal import Decimal

import pytest

from datamarket.errors import QueryFailed
from datamarket.tokens.erc20 import Erc20Token
from tests.helpers import ALICE, BOB, POOL, USDC


@pytest.fixture
def erc20(provider, pipeline, converter) -> Erc20Token:
    return Erc20Token(provider, pipeline, converter)


class TestReads:
    """Tests for balances and allowances."""

    def test_decimals(self, erc20):
        assert asyncio.run(erc20.decimals(USDC)) == 6

    def test_balance(self, erc20, provider):
        provider.add(USDC, balanceOf=lambda account: 12_340_000 if account == ALICE else 0)
        assert asyncio.run(erc20.balance(USDC, ALICE)) == Decimal("12.34")
        assert asyncio.run(erc20.balance(USDC, BOB)) == Decimal(0)

    def test_allowance(self, erc20, provider):
        provider.add(USDC, allowance=1_000_000)
        assert asyncio.run(erc20.allowance(USDC, ALICE, POOL)) == Decimal(1)

    def test_failed_read(self, erc20, provider):
        provider.add(USDC, balanceOf=RuntimeError("boom"))
        with pytest.raises(QueryFailed):
            asyncio.run(erc20.balance(USDC, ALICE))


class TestApprove:
    """Tests for approvals."""

    def test_approve_in_token_units(self, erc20, provider):
        asyncio.run(erc20.approve(USDC, ALICE, POOL, Decimal("2.5")))
        call = provider.contract(USDC, []).write_calls[0]
        assert call.method == "approve"
        assert call.args == [POOL, 2_500_000]

    def test_approve_estimate_only(self, erc20, provider):
        gas = asyncio.run(erc20.approve(USDC, ALICE, POOL, Decimal(1), estimate_only=True))
        assert gas > 0
        assert provider.contract(USDC, []).write_calls == []
