"""Tests for the error hierarchy and revert classification."""

from decimal import Decimal

import pytest

from datamarket.errors import (
    AmountExceedsBound,
    DataMarketError,
    FetchError,
    InvalidDecimals,
    PermissionDenied,
    QueryFailed,
    SubmissionReverted,
    is_permission_reason,
    revert_error,
)


class TestHierarchy:
    """Tests for error class relationships."""

    def test_all_errors_share_base(self):
        for error in (
            InvalidDecimals("x"),
            AmountExceedsBound("swap_exact_in", Decimal(2), Decimal(1)),
            QueryFailed("getBalance", "boom"),
            SubmissionReverted("swap"),
            FetchError("http://x", 500),
        ):
            assert isinstance(error, DataMarketError)

    def test_permission_denied_is_a_revert(self):
        assert issubclass(PermissionDenied, SubmissionReverted)


class TestMessages:
    """Tests for error messages and attributes."""

    def test_amount_exceeds_bound_message(self):
        error = AmountExceedsBound("swap_exact_in", Decimal("600"), Decimal("500"))
        assert str(error) == "swap_exact_in: amount 600 is greater than 500"
        assert error.amount == Decimal("600")
        assert error.bound == Decimal("500")

    def test_submission_reverted_without_reason(self):
        assert str(SubmissionReverted("collectOPC")) == "collectOPC reverted"

    def test_submission_reverted_with_reason(self):
        error = SubmissionReverted("collectOPC", "paused", "0xabc")
        assert str(error) == "collectOPC reverted: paused"
        assert error.tx_hash == "0xabc"


class TestPermissionClassification:
    """Tests for mapping revert reasons to PermissionDenied."""

    @pytest.mark.parametrize(
        "reason",
        [
            "ERC721Template: NOT MANAGER",
            "ERC721Template: NOT ERC20DEPLOYER_ROLE",
            "ERC721RolesAddress: Not metadata",
            "Ownable: caller is not the owner",
            "ERC721Template: NOT OWNER",
            "ERC20Template: NOT MINTER",
            "NOT PUBLISHER",
            "ONLY ROUTER",
            "ERC721Template: not NFTOwner",
            "ERR_NOT_CONTROLLER",
        ],
    )
    def test_role_reasons(self, reason):
        assert is_permission_reason(reason)
        assert isinstance(revert_error("m", reason), PermissionDenied)

    @pytest.mark.parametrize("reason", [None, "", "ERR_MAX_IN_RATIO", "ERR_LIMIT_OUT"])
    def test_other_reasons(self, reason):
        assert not is_permission_reason(reason)
        error = revert_error("m", reason)
        assert type(error) is SubmissionReverted
