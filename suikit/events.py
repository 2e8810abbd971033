"""Events emitted by transactions and filters for querying them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .base_types import Digest, SuiAddress
from .common import Page, parse_safe_int


@dataclass(frozen=True)
class EventId:
    """Transaction digest and sequence number identifying an event."""

    tx_digest: Digest
    event_seq: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> EventId:
        return cls(
            tx_digest=Digest.from_base58(data["txDigest"]),
            event_seq=parse_safe_int(data["eventSeq"]),
        )

    def to_json(self) -> dict[str, str]:
        return {"txDigest": self.tx_digest.to_base58(), "eventSeq": str(self.event_seq)}


@dataclass
class SuiEvent:
    id: EventId
    package_id: SuiAddress
    transaction_module: str
    sender: SuiAddress
    type: str
    parsed_json: Any = None
    bcs: str = ""
    timestamp_ms: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiEvent:
        timestamp = data.get("timestampMs")
        return cls(
            id=EventId.from_json(data["id"]),
            package_id=SuiAddress.from_hex(data["packageId"]),
            transaction_module=data["transactionModule"],
            sender=SuiAddress.from_hex(data["sender"]),
            type=data["type"],
            parsed_json=data.get("parsedJson"),
            bcs=data.get("bcs", ""),
            timestamp_ms=None if timestamp is None else parse_safe_int(timestamp),
        )


EventPage = Page[SuiEvent]


@dataclass
class EventFilter:
    """Criteria for an event query; every criterion that is set is sent."""

    sender: Optional[SuiAddress] = None
    transaction: Optional[Digest] = None
    package: Optional[SuiAddress] = None
    move_module: Optional[tuple[SuiAddress, str]] = None
    move_event_type: Optional[str] = None
    move_event_field: Optional[tuple[str, Any]] = None
    time_range: Optional[tuple[int, int]] = None  # [start, end) in ms since epoch
    all_of: Optional[list[EventFilter]] = None
    any_of: Optional[list[EventFilter]] = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.sender is not None:
            out["Sender"] = str(self.sender)
        if self.transaction is not None:
            out["Transaction"] = self.transaction.to_base58()
        if self.package is not None:
            out["Package"] = str(self.package)
        if self.move_module is not None:
            package, module = self.move_module
            out["MoveModule"] = {"package": str(package), "module": module}
        if self.move_event_type is not None:
            out["MoveEventType"] = self.move_event_type
        if self.move_event_field is not None:
            path, value = self.move_event_field
            out["MoveEventField"] = {"path": path, "value": value}
        if self.time_range is not None:
            start, end = self.time_range
            out["TimeRange"] = {"startTime": str(start), "endTime": str(end)}
        if self.all_of is not None:
            out["All"] = [f.to_json() for f in self.all_of]
        if self.any_of is not None:
            out["Any"] = [f.to_json() for f in self.any_of]
        return out