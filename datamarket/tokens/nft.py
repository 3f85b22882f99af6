"""Data NFT wrapper: role management, metadata and datatoken creation.

Roles are enforced by the NFT contract. This wrapper does not re-check
them before submitting; a rejected call surfaces as PermissionDenied from
the transaction pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import NFT_ABI
from datamarket.errors import QueryFailed
from datamarket.factories.params import Erc20CreateParams, MetadataAndTokenUri, MetadataProof
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt

if TYPE_CHECKING:
    from datamarket.chain.base import ContractCaller, ContractProvider

logger = structlog.get_logger()


@dataclass(frozen=True)
class NftPermissions:
    """Roles one address holds on one data NFT."""

    manager: bool
    deploy_erc20: bool
    update_metadata: bool
    store: bool

    @classmethod
    def from_contract(cls, raw: Any) -> NftPermissions:
        if isinstance(raw, dict):
            return cls(
                manager=bool(raw["manager"]),
                deploy_erc20=bool(raw["deployERC20"]),
                update_metadata=bool(raw["updateMetadata"]),
                store=bool(raw["store"]),
            )
        manager, deploy_erc20, update_metadata, store = raw
        return cls(bool(manager), bool(deploy_erc20), bool(update_metadata), bool(store))


@dataclass(frozen=True)
class NftMetadata:
    """On-chain metadata pointer of a data NFT."""

    decryptor_url: str
    decryptor_address: str
    state: int
    has_metadata: bool


class Nft:
    """Operations on data NFT contracts."""

    def __init__(self, provider: ContractProvider, pipeline: TransactionPipeline):
        self.provider = provider
        self.pipeline = pipeline

    def contract(self, nft: str) -> ContractCaller:
        return self.provider.contract(nft, NFT_ABI)

    async def _read(self, nft: str, method: str, *args: Any) -> Any:
        try:
            return await self.contract(nft).read(method, *args)
        except Exception as e:
            logger.warning("nft_query_failed", nft=nft, method=method, error=str(e))
            raise QueryFailed(method, e) from e

    async def _execute(
        self, nft: str, method: str, args: list, sender: str, estimate_only: bool
    ) -> TxReceipt | int:
        return await self.pipeline.execute(
            self.contract(nft), method, args, sender, estimate_only=estimate_only
        )

    # -------------------------------------------------------------------------
    # Datatokens
    # -------------------------------------------------------------------------

    async def create_erc20(
        self,
        nft: str,
        sender: str,
        params: Erc20CreateParams,
        *,
        estimate_only: bool = False,
    ) -> str | int:
        """Deploy a fungible datatoken from this NFT (ERC20 deployers only).

        Returns:
            Address of the new datatoken, or the gas estimate
        """
        data = params.to_contract()
        result = await self._execute(
            nft,
            "createERC20",
            [data["templateIndex"], data["strings"], data["addresses"], data["uints"], data["bytess"]],
            sender,
            estimate_only,
        )
        if isinstance(result, int):
            return result
        address = result.event_value("TokenCreated", "newTokenAddress")
        logger.info("datatoken_created", nft=nft, datatoken=address, tx_hash=result.tx_hash)
        return address

    # -------------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------------

    async def add_manager(
        self, nft: str, sender: str, manager: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Grant the manager role (NFT owner only)."""
        return await self._execute(nft, "addManager", [manager], sender, estimate_only)

    async def remove_manager(
        self, nft: str, sender: str, manager: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Revoke the manager role (NFT owner only)."""
        return await self._execute(nft, "removeManager", [manager], sender, estimate_only)

    async def add_erc20_deployer(
        self, nft: str, sender: str, deployer: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Allow an address to deploy datatokens (managers only)."""
        return await self._execute(nft, "addToCreateERC20List", [deployer], sender, estimate_only)

    async def remove_erc20_deployer(
        self, nft: str, sender: str, deployer: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Revoke datatoken deployment (managers, or the deployer itself)."""
        return await self._execute(
            nft, "removeFromCreateERC20List", [deployer], sender, estimate_only
        )

    async def add_metadata_updater(
        self, nft: str, sender: str, updater: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        return await self._execute(nft, "addToMetadataList", [updater], sender, estimate_only)

    async def remove_metadata_updater(
        self, nft: str, sender: str, updater: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        return await self._execute(nft, "removeFromMetadataList", [updater], sender, estimate_only)

    async def add_store_updater(
        self, nft: str, sender: str, updater: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        return await self._execute(nft, "addTo725StoreList", [updater], sender, estimate_only)

    async def remove_store_updater(
        self, nft: str, sender: str, updater: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        return await self._execute(nft, "removeFrom725StoreList", [updater], sender, estimate_only)

    async def clean_permissions(
        self, nft: str, sender: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Revoke every role on the NFT, including the owner's manager role."""
        return await self._execute(nft, "cleanPermissions", [], sender, estimate_only)

    async def get_nft_permissions(self, nft: str, address: str) -> NftPermissions:
        return NftPermissions.from_contract(await self._read(nft, "getPermissions", address))

    async def is_erc20_deployer(self, nft: str, address: str) -> bool:
        return bool(await self._read(nft, "isERC20Deployer", address))

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    async def get_nft_owner(self, nft: str, token_id: int = 1) -> str:
        return await self._read(nft, "ownerOf", token_id)

    async def transfer_nft(
        self,
        nft: str,
        sender: str,
        new_owner: str,
        token_id: int = 1,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Transfer the NFT; the contract clears all roles and makes new_owner a manager."""
        return await self._execute(
            nft, "transferFrom", [sender, new_owner, token_id], sender, estimate_only
        )

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    async def set_metadata(
        self,
        nft: str,
        sender: str,
        state: int,
        decryptor_url: str,
        decryptor_address: str,
        flags: bytes,
        data: bytes,
        metadata_hash: bytes,
        proofs: tuple[MetadataProof, ...] = (),
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Publish or update the NFT's metadata (metadata updaters only)."""
        args = [
            state,
            decryptor_url,
            decryptor_address,
            flags,
            data,
            metadata_hash,
            [proof.to_contract() for proof in proofs],
        ]
        return await self._execute(nft, "setMetaData", args, sender, estimate_only)

    async def set_metadata_state(
        self, nft: str, sender: str, state: int, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Change the metadata state.

        States: 0 active, 1 end-of-life, 2 deprecated, 3 revoked,
        4 ordering disabled.
        """
        return await self._execute(nft, "setMetaDataState", [state], sender, estimate_only)

    async def set_token_uri(
        self,
        nft: str,
        sender: str,
        token_uri: str,
        token_id: int = 1,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        return await self._execute(
            nft, "setTokenURI", [token_id, token_uri], sender, estimate_only
        )

    async def set_metadata_and_token_uri(
        self,
        nft: str,
        sender: str,
        update: MetadataAndTokenUri,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Update metadata and token URI in one transaction."""
        return await self._execute(
            nft, "setMetaDataAndTokenURI", [update.to_contract()], sender, estimate_only
        )

    async def get_metadata(self, nft: str) -> NftMetadata:
        decryptor_url, decryptor_address, state, has_metadata = await self._read(
            nft, "getMetaData"
        )
        return NftMetadata(
            decryptor_url=decryptor_url,
            decryptor_address=decryptor_address,
            state=int(state),
            has_metadata=bool(has_metadata),
        )

    async def get_token_uri(self, nft: str, token_id: int = 1) -> str:
        return await self._read(nft, "tokenURI", token_id)


__all__ = ["Nft", "NftPermissions", "NftMetadata"]
