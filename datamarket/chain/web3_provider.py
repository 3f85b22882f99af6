"""web3.py implementation of the contract transport protocols.

Makes actual eth_call, eth_estimateGas and eth_sendTransaction requests.
Signing is left to the node or to middleware installed on the AsyncWeb3
instance by the application.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from eth_abi import decode  # type: ignore[attr-defined]
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError
from web3.logs import DISCARD

from datamarket.chain.abi import event_names
from datamarket.chain.base import Abi, TxParams
from datamarket.constants import is_valid_address
from datamarket.errors import SubmissionReverted
from datamarket.tx.receipt import TxEvent, TxReceipt

logger = structlog.get_logger()

# Selector of Error(string), the standard revert payload
_ERROR_STRING_SELECTOR = "0x08c379a0"
_REVERT_PREFIX = "execution reverted"


def decode_revert_reason(error: BaseException) -> str | None:
    """Extract a human-readable revert reason from a web3 exception.

    Prefers the ABI-encoded Error(string) payload when the node returned
    one, then falls back to the message with the node's prefix stripped.
    """
    data = getattr(error, "data", None)
    if isinstance(data, str) and data.startswith(_ERROR_STRING_SELECTOR):
        try:
            (reason,) = decode(["string"], bytes.fromhex(data[len(_ERROR_STRING_SELECTOR) :]))
            return str(reason)
        except Exception as e:
            logger.debug("revert_payload_undecodable", data=data, error=str(e))

    message = getattr(error, "message", None) or str(error)
    if not message:
        return None
    if message.startswith(_REVERT_PREFIX):
        message = message[len(_REVERT_PREFIX) :].lstrip(": ").strip()
    return message or None


def _checksum_args(value: Any) -> Any:
    """Checksum every address nested in call arguments."""
    if isinstance(value, str) and is_valid_address(value):
        return AsyncWeb3.to_checksum_address(value)
    if isinstance(value, dict):
        return {k: _checksum_args(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_checksum_args(v) for v in value)
    return value


def _checksum_tx(tx: TxParams) -> dict[str, Any]:
    params: dict[str, Any] = dict(tx)
    if "from" in params:
        params["from"] = AsyncWeb3.to_checksum_address(params["from"])
    return params


class Web3Contract:
    """Contract bound to one address, called through an AsyncWeb3 instance."""

    def __init__(self, w3: AsyncWeb3, address: str, abi: Abi):
        self.w3 = w3
        self.address = AsyncWeb3.to_checksum_address(address)
        self.abi = abi
        self.contract = w3.eth.contract(address=self.address, abi=abi)

    def _function(self, method: str, args: Sequence[Any]) -> Any:
        return getattr(self.contract.functions, method)(*_checksum_args(list(args)))

    async def read(self, method: str, *args: Any) -> Any:
        return await self._function(method, args).call()

    async def estimate(self, method: str, args: Sequence[Any], tx: TxParams) -> int:
        return int(await self._function(method, args).estimate_gas(_checksum_tx(tx)))

    async def write(self, method: str, args: Sequence[Any], tx: TxParams) -> TxReceipt:
        try:
            tx_hash = await self._function(method, args).transact(_checksum_tx(tx))
        except ContractLogicError as e:
            raise SubmissionReverted(method, decode_revert_reason(e)) from e

        raw = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        return TxReceipt(
            tx_hash=AsyncWeb3.to_hex(raw["transactionHash"]),
            status=int(raw["status"]),
            block_number=raw.get("blockNumber"),
            gas_used=raw.get("gasUsed"),
            events=tuple(self._decode_events(raw)),
        )

    def _decode_events(self, raw: Any) -> list[TxEvent]:
        events: list[TxEvent] = []
        for name in event_names(self.abi):
            decoded = getattr(self.contract.events, name)().process_receipt(raw, errors=DISCARD)
            for log in decoded:
                events.append(
                    TxEvent(
                        name=name,
                        args=dict(log["args"]),
                        address=log.get("address"),
                        log_index=log.get("logIndex"),
                    )
                )
        events.sort(key=lambda e: e.log_index if e.log_index is not None else -1)
        return events


class Web3ContractProvider:
    """ContractProvider backed by web3.py.

    Example:
        >>> provider = Web3ContractProvider.from_url("http://127.0.0.1:8545")
        >>> pool = provider.contract(pool_address, POOL_ABI)
        >>> await pool.read("getSwapFee")
    """

    def __init__(self, w3: AsyncWeb3):
        self.w3 = w3

    @classmethod
    def from_url(cls, rpc_url: str) -> Web3ContractProvider:
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)))

    def contract(self, address: str, abi: Abi) -> Web3Contract:
        return Web3Contract(self.w3, address, abi)

    async def gas_price(self) -> int:
        return int(await self.w3.eth.gas_price)


__all__ = ["Web3Contract", "Web3ContractProvider", "decode_revert_reason"]
