"""Tests for data NFT role management, metadata and datatoken creation."""

import asyncio
from decimal import Decimal

import pytest

from datamarket.errors import PermissionDenied, QueryFailed, SubmissionReverted
from datamarket.factories.params import Erc20CreateParams, MetadataAndTokenUri, MetadataProof
from datamarket.tokens.nft import Nft, NftPermissions
from datamarket.tx.receipt import TxEvent
from tests.helpers import ALICE, BOB, DATATOKEN, MARKET, NFT, OCEAN, WEI, ZERO


@pytest.fixture
def nft(provider, pipeline) -> Nft:
    return Nft(provider, pipeline)


@pytest.fixture
def nft_contract(provider):
    return provider.add(NFT)


def erc20_params() -> Erc20CreateParams:
    return Erc20CreateParams(
        template_index=1,
        minter=ALICE,
        payment_collector=ALICE,
        mp_fee_address=MARKET,
        fee_token=OCEAN,
        fee_amount=Decimal("0.5"),
        cap=Decimal(1000),
        name="Data Token",
        symbol="DT1",
    )


class TestCreateErc20:
    """Tests for deploying datatokens from an NFT."""

    def test_returns_new_token_address(self, nft, nft_contract):
        nft_contract.write_events = [
            TxEvent("TokenCreated", {"newTokenAddress": DATATOKEN, "templateAddress": ZERO})
        ]
        address = asyncio.run(nft.create_erc20(NFT, ALICE, erc20_params()))

        assert address == DATATOKEN
        call = nft_contract.write_calls[0]
        assert call.method == "createERC20"
        assert call.args == [
            1,
            ["Data Token", "DT1"],
            [ALICE, ALICE, MARKET, OCEAN],
            [1000 * WEI, WEI // 2],
            [],
        ]

    def test_estimate_only(self, nft, nft_contract):
        gas = asyncio.run(nft.create_erc20(NFT, ALICE, erc20_params(), estimate_only=True))
        assert gas == 100_000
        assert nft_contract.write_calls == []


class TestRoles:
    """Tests for role grants and revocations."""

    @pytest.mark.parametrize(
        ("operation", "method"),
        [
            ("add_manager", "addManager"),
            ("remove_manager", "removeManager"),
            ("add_erc20_deployer", "addToCreateERC20List"),
            ("remove_erc20_deployer", "removeFromCreateERC20List"),
            ("add_metadata_updater", "addToMetadataList"),
            ("remove_metadata_updater", "removeFromMetadataList"),
            ("add_store_updater", "addTo725StoreList"),
            ("remove_store_updater", "removeFrom725StoreList"),
        ],
    )
    def test_role_methods(self, nft, nft_contract, operation, method):
        asyncio.run(getattr(nft, operation)(NFT, ALICE, BOB))
        call = nft_contract.write_calls[0]
        assert call.method == method
        assert call.args == [BOB]
        assert call.tx["from"] == ALICE

    def test_clean_permissions(self, nft, nft_contract):
        asyncio.run(nft.clean_permissions(NFT, ALICE))
        assert nft_contract.methods_written() == ["cleanPermissions"]

    def test_role_rejection_is_permission_denied(self, nft, nft_contract):
        """The contract enforces roles; its revert reason is classified."""
        nft_contract.write_result = SubmissionReverted(
            "addManager", "ERC721RolesAddress: NOT MANAGER"
        )
        with pytest.raises(PermissionDenied):
            asyncio.run(nft.add_manager(NFT, BOB, BOB))

    @pytest.mark.parametrize("operation", ["add_manager", "remove_manager"])
    def test_non_owner_manager_change_is_permission_denied(self, nft, nft_contract, operation):
        nft_contract.write_result = SubmissionReverted(
            "addManager", "ERC721Template: not NFTOwner"
        )
        with pytest.raises(PermissionDenied):
            asyncio.run(getattr(nft, operation)(NFT, BOB, BOB))

    def test_non_owner_clean_permissions_is_permission_denied(self, nft, nft_contract):
        nft_contract.write_result = SubmissionReverted(
            "cleanPermissions", "ERC721Template: not NFTOwner"
        )
        with pytest.raises(PermissionDenied):
            asyncio.run(nft.clean_permissions(NFT, BOB))

    def test_permissions_from_tuple(self, nft, nft_contract):
        nft_contract.reads["getPermissions"] = (True, False, True, False)
        permissions = asyncio.run(nft.get_nft_permissions(NFT, ALICE))
        assert permissions == NftPermissions(
            manager=True, deploy_erc20=False, update_metadata=True, store=False
        )

    def test_permissions_from_dict(self):
        raw = {"manager": 1, "deployERC20": 1, "updateMetadata": 0, "store": 0}
        permissions = NftPermissions.from_contract(raw)
        assert permissions.deploy_erc20 is True
        assert permissions.store is False

    def test_is_erc20_deployer(self, nft, nft_contract):
        nft_contract.reads["isERC20Deployer"] = lambda address: address == ALICE
        assert asyncio.run(nft.is_erc20_deployer(NFT, ALICE)) is True
        assert asyncio.run(nft.is_erc20_deployer(NFT, BOB)) is False


class TestOwnershipAndMetadata:
    """Tests for transfers, metadata and token URIs."""

    def test_transfer(self, nft, nft_contract):
        asyncio.run(nft.transfer_nft(NFT, ALICE, BOB))
        call = nft_contract.write_calls[0]
        assert call.method == "transferFrom"
        assert call.args == [ALICE, BOB, 1]

    def test_owner(self, nft, nft_contract):
        nft_contract.reads["ownerOf"] = lambda token_id: ALICE if token_id == 1 else ZERO
        assert asyncio.run(nft.get_nft_owner(NFT)) == ALICE

    def test_set_metadata(self, nft, nft_contract):
        proof = MetadataProof(validator_address=BOB, v=27, r="0x01", s="0x02")
        asyncio.run(
            nft.set_metadata(
                NFT, ALICE, 0, "https://provider", MARKET, b"\x02", b"ddo", b"hash", (proof,)
            )
        )
        call = nft_contract.write_calls[0]
        assert call.method == "setMetaData"
        assert call.args[:6] == [0, "https://provider", MARKET, b"\x02", b"ddo", b"hash"]
        assert call.args[6] == [{"validatorAddress": BOB, "v": 27, "r": "0x01", "s": "0x02"}]

    def test_set_metadata_state(self, nft, nft_contract):
        asyncio.run(nft.set_metadata_state(NFT, ALICE, 4))
        assert nft_contract.write_calls[0].args == [4]

    def test_set_token_uri(self, nft, nft_contract):
        asyncio.run(nft.set_token_uri(NFT, ALICE, "ipfs://uri"))
        assert nft_contract.write_calls[0].args == [1, "ipfs://uri"]

    def test_set_metadata_and_token_uri(self, nft, nft_contract):
        update = MetadataAndTokenUri(
            metadata_state=0,
            metadata_decryptor_url="https://provider",
            metadata_decryptor_address=MARKET,
            flags=b"\x00",
            data=b"ddo",
            metadata_hash=b"hash",
            token_id=1,
            token_uri="ipfs://uri",
        )
        asyncio.run(nft.set_metadata_and_token_uri(NFT, ALICE, update))
        (struct,) = nft_contract.write_calls[0].args
        assert struct["tokenURI"] == "ipfs://uri"
        assert struct["metadataProofs"] == []

    def test_get_metadata(self, nft, nft_contract):
        nft_contract.reads["getMetaData"] = ("https://provider", MARKET, 0, True)
        metadata = asyncio.run(nft.get_metadata(NFT))
        assert metadata.decryptor_url == "https://provider"
        assert metadata.has_metadata is True

    def test_failed_read(self, nft, nft_contract):
        with pytest.raises(QueryFailed):
            asyncio.run(nft.get_token_uri(NFT))
