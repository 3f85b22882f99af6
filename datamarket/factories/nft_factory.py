"""NFT factory: deploys data NFTs, datatokens and their pricing contracts.

Template management is restricted to the factory owner, which the
contract enforces; a rejected caller surfaces as PermissionDenied.
Template indexes and states are validated before anything is estimated.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import structlog

from datamarket.chain.abi import NFT_FACTORY_ABI
from datamarket.config import DEFAULT_CONFIG, ClientConfig
from datamarket.constants import ZERO_ADDRESS, same_address
from datamarket.errors import InvalidTemplate, QueryFailed
from datamarket.factories.names import generate_dt_name
from datamarket.factories.params import (
    DispenserCreationParams,
    Erc20CreateParams,
    FreCreationParams,
    NftCreateData,
    PoolCreationParams,
    Template,
    TokenOrder,
)
from datamarket.tx.pipeline import TransactionPipeline
from datamarket.tx.receipt import TxReceipt
from datamarket.units import UnitConverter

if TYPE_CHECKING:
    from datamarket.chain.base import ContractCaller, ContractProvider

logger = structlog.get_logger()


class NftFactory:
    """Interface to the NFT factory contract.

    Example:
        >>> factory = NftFactory(factory_address, provider, pipeline)
        >>> nft = await factory.create_nft(alice, NftCreateData(owner=alice))
    """

    def __init__(
        self,
        address: str,
        provider: ContractProvider,
        pipeline: TransactionPipeline,
        converter: UnitConverter | None = None,
        config: ClientConfig | None = None,
    ):
        self.address = address
        self.provider = provider
        self.pipeline = pipeline
        self.config = config or pipeline.config or DEFAULT_CONFIG
        self.converter = converter or UnitConverter(provider, self.config)
        self.contract: ContractCaller = provider.contract(address, NFT_FACTORY_ABI)

    async def _read(self, method: str, *args: Any) -> Any:
        try:
            return await self.contract.read(method, *args)
        except Exception as e:
            logger.warning("factory_query_failed", factory=self.address, method=method, error=str(e))
            raise QueryFailed(method, e) from e

    async def _execute(
        self, method: str, args: list, sender: str, estimate_only: bool
    ) -> TxReceipt | int:
        return await self.pipeline.execute(
            self.contract, method, args, sender, estimate_only=estimate_only
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_current_nft_count(self) -> int:
        """Number of data NFTs deployed by this factory."""
        return int(await self._read("getCurrentNFTCount"))

    async def get_current_token_count(self) -> int:
        """Number of datatokens deployed through this factory."""
        return int(await self._read("getCurrentTokenCount"))

    async def get_owner(self) -> str:
        return await self._read("owner")

    async def get_current_nft_template_count(self) -> int:
        return int(await self._read("getCurrentNFTTemplateCount"))

    async def get_current_token_template_count(self) -> int:
        return int(await self._read("getCurrentTemplateCount"))

    async def get_nft_template(self, index: int) -> Template:
        """Read an NFT template slot.

        Raises:
            InvalidTemplate: If index is zero or past the last template
        """
        await self._check_index(index, await self.get_current_nft_template_count())
        return Template.from_contract(await self._read("getNFTTemplate", index))

    async def get_token_template(self, index: int) -> Template:
        """Read a datatoken template slot.

        Raises:
            InvalidTemplate: If index is zero or past the last template
        """
        await self._check_index(index, await self.get_current_token_template_count())
        return Template.from_contract(await self._read("getTokenTemplate", index))

    async def check_datatoken(self, datatoken: str) -> bool:
        """Whether the datatoken was deployed by this factory."""
        return bool(await self._read("erc20List", datatoken))

    async def check_nft(self, nft: str) -> str:
        """Return the NFT address if this factory deployed it, else the zero address."""
        return await self._read("erc721List", nft)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    async def _check_index(index: int, count: int) -> None:
        if index == 0:
            raise InvalidTemplate("Template index cannot be ZERO")
        if index < 0 or index > count:
            raise InvalidTemplate(f"Template index {index} doesn't exist (count: {count})")

    # -------------------------------------------------------------------------
    # Data NFTs
    # -------------------------------------------------------------------------

    async def create_nft(
        self, sender: str, nft_data: NftCreateData, *, estimate_only: bool = False
    ) -> str | int:
        """Deploy a data NFT.

        Missing name or symbol are generated. The template must exist and be
        active.

        Returns:
            Address of the new NFT, or the gas estimate

        Raises:
            InvalidTemplate: If the template index is zero, unknown or disabled
        """
        if not nft_data.name or not nft_data.symbol:
            name, symbol = generate_dt_name()
            nft_data = replace(nft_data, name=name, symbol=symbol)

        template = await self.get_nft_template(nft_data.template_index)
        if not template.is_active:
            raise InvalidTemplate(f"Template {nft_data.template_index} is not active")

        args = [
            nft_data.name,
            nft_data.symbol,
            nft_data.template_index,
            ZERO_ADDRESS,
            ZERO_ADDRESS,
            nft_data.token_uri,
            nft_data.transferable,
            nft_data.owner,
        ]
        result = await self._execute("deployERC721Contract", args, sender, estimate_only)
        if isinstance(result, int):
            return result
        address = result.event_value("NFTCreated", "newTokenAddress")
        logger.info("nft_created", nft=address, name=nft_data.name, tx_hash=result.tx_hash)
        return address

    # -------------------------------------------------------------------------
    # Template management (factory owner only)
    # -------------------------------------------------------------------------

    async def add_nft_template(
        self, sender: str, template_address: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        if same_address(template_address, ZERO_ADDRESS):
            raise InvalidTemplate("Template cannot be ZERO address")
        return await self._execute("add721TokenTemplate", [template_address], sender, estimate_only)

    async def disable_nft_template(
        self, sender: str, index: int, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        await self._check_index(index, await self.get_current_nft_template_count())
        return await self._execute("disable721TokenTemplate", [index], sender, estimate_only)

    async def reactivate_nft_template(
        self, sender: str, index: int, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        await self._check_index(index, await self.get_current_nft_template_count())
        return await self._execute("reactivate721TokenTemplate", [index], sender, estimate_only)

    async def add_token_template(
        self, sender: str, template_address: str, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        if same_address(template_address, ZERO_ADDRESS):
            raise InvalidTemplate("Template cannot be ZERO address")
        return await self._execute("addTokenTemplate", [template_address], sender, estimate_only)

    async def disable_token_template(
        self, sender: str, index: int, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Disable a datatoken template.

        Raises:
            InvalidTemplate: If the template is already disabled
        """
        template = await self.get_token_template(index)
        if not template.is_active:
            raise InvalidTemplate(f"Template {index} is already disabled")
        return await self._execute("disableTokenTemplate", [index], sender, estimate_only)

    async def reactivate_token_template(
        self, sender: str, index: int, *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Re-enable a datatoken template.

        Raises:
            InvalidTemplate: If the template is already active
        """
        template = await self.get_token_template(index)
        if template.is_active:
            raise InvalidTemplate(f"Template {index} is already active")
        return await self._execute("reactivateTokenTemplate", [index], sender, estimate_only)

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    async def start_multiple_token_order(
        self, sender: str, orders: Sequence[TokenOrder], *, estimate_only: bool = False
    ) -> TxReceipt | int:
        """Start several datatoken orders in one transaction.

        Fee tokens and datatokens must be approved for the factory first.

        Raises:
            ValueError: If there are more orders than config.max_orders_per_batch
        """
        if len(orders) > self.config.max_orders_per_batch:
            raise ValueError(
                f"Too many orders: {len(orders)} > {self.config.max_orders_per_batch}"
            )
        args = [[order.to_contract() for order in orders]]
        return await self._execute("startMultipleTokenOrder", args, sender, estimate_only)

    # -------------------------------------------------------------------------
    # Combined deployments
    # -------------------------------------------------------------------------

    async def create_nft_with_erc20(
        self,
        sender: str,
        nft_data: NftCreateData,
        erc_params: Erc20CreateParams,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Deploy a data NFT and its first datatoken."""
        args = [nft_data.to_contract(), erc_params.to_contract()]
        return await self._execute("createNftWithErc20", args, sender, estimate_only)

    async def create_nft_erc20_with_pool(
        self,
        sender: str,
        nft_data: NftCreateData,
        erc_params: Erc20CreateParams,
        pool_params: PoolCreationParams,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Deploy a data NFT, a datatoken and a side-staked AMM pool.

        The base token sender must have approved the initial liquidity.
        """
        args = [
            nft_data.to_contract(),
            erc_params.to_contract(),
            await pool_params.to_contract(self.converter),
        ]
        return await self._execute("createNftWithErc20WithPool", args, sender, estimate_only)

    async def create_nft_erc20_with_fixed_rate(
        self,
        sender: str,
        nft_data: NftCreateData,
        erc_params: Erc20CreateParams,
        fre_params: FreCreationParams,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Deploy a data NFT, a datatoken and a fixed-rate exchange."""
        args = [nft_data.to_contract(), erc_params.to_contract(), fre_params.to_contract()]
        return await self._execute("createNftWithErc20WithFixedRate", args, sender, estimate_only)

    async def create_nft_erc20_with_dispenser(
        self,
        sender: str,
        nft_data: NftCreateData,
        erc_params: Erc20CreateParams,
        dispenser_params: DispenserCreationParams,
        *,
        estimate_only: bool = False,
    ) -> TxReceipt | int:
        """Deploy a data NFT, a datatoken and a dispenser.

        If the dispenser step fails on chain, the whole transaction reverts
        after consuming gas.
        """
        args = [nft_data.to_contract(), erc_params.to_contract(), dispenser_params.to_contract()]
        return await self._execute("createNftWithErc20WithDispenser", args, sender, estimate_only)


__all__ = ["NftFactory"]
