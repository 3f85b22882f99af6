"""Transaction receipts with events decoded by name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from datamarket.errors import DataMarketError


class EventNotFound(DataMarketError):
    """Receipt does not contain the expected event."""

    pass


@dataclass(frozen=True)
class TxEvent:
    """A decoded log entry."""

    name: str
    args: dict[str, Any]
    address: str | None = None
    log_index: int | None = None

    def __getitem__(self, key: str | int) -> Any:
        # Positional access follows ABI argument order
        if isinstance(key, int):
            return list(self.args.values())[key]
        return self.args[key]


@dataclass(frozen=True)
class TxReceipt:
    """Outcome of a submitted transaction.

    Attributes:
        tx_hash: 0x-prefixed transaction hash
        status: 1 on success, 0 when the transaction reverted
        block_number: Block the transaction was mined in
        gas_used: Gas consumed
        events: Decoded events in log order
        revert_reason: Reason string when the node reported one
    """

    tx_hash: str
    status: int
    block_number: int | None = None
    gas_used: int | None = None
    events: tuple[TxEvent, ...] = field(default_factory=tuple)
    revert_reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    def get_events(self, name: str) -> list[TxEvent]:
        """Return every event with the given name, in log order."""
        return [event for event in self.events if event.name == name]

    def get_event(self, name: str) -> TxEvent:
        """Return the first event with the given name.

        Raises:
            EventNotFound: If the receipt holds no such event
        """
        for event in self.events:
            if event.name == name:
                return event
        raise EventNotFound(f"event {name} not found in transaction {self.tx_hash}")

    def event_value(self, name: str, key: str | int) -> Any:
        """Return one argument of the first event with the given name."""
        return self.get_event(name)[key]


__all__ = ["EventNotFound", "TxEvent", "TxReceipt"]
