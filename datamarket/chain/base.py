"""Transport protocols for contract interaction.

The client never talks to a node directly. Everything goes through a
ContractProvider, which hands out ContractCaller objects bound to one
contract address. Web3ContractProvider implements both over web3.py;
tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from typing_extensions import TypedDict

from datamarket.tx.receipt import TxReceipt

# Transaction fields, keyed the way JSON-RPC nodes expect them
TxParams = TypedDict(
    "TxParams",
    {"from": str, "gas": int, "gasPrice": int},
    total=False,
)

Abi = list[dict[str, Any]]


class ContractCaller(Protocol):
    """A contract bound to one address."""

    address: str

    async def read(self, method: str, *args: Any) -> Any:
        """Execute a read-only call and return the decoded result."""
        ...

    async def estimate(self, method: str, args: Sequence[Any], tx: TxParams) -> int:
        """Estimate gas for a state-changing call.

        Raises:
            Exception: Any failure; callers decide how to recover
        """
        ...

    async def write(self, method: str, args: Sequence[Any], tx: TxParams) -> TxReceipt:
        """Submit a state-changing call and wait for its receipt.

        A mined-but-reverted transaction is returned with status 0.
        A transaction the node refuses raises.
        """
        ...


class ContractProvider(Protocol):
    """Factory for ContractCaller objects plus chain-wide queries."""

    def contract(self, address: str, abi: Abi) -> ContractCaller:
        ...

    async def gas_price(self) -> int:
        """Current gas price suggested by the node, in wei."""
        ...


__all__ = ["Abi", "ContractCaller", "ContractProvider", "TxParams"]
