"""Transaction blocks, their effects and queries as exchanged over JSON."""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from .base_types import Digest, SuiAddress
from .common import ObjectOwner, Page, parse_safe_int
from .events import SuiEvent
from .objects import SuiObjectRef

T = TypeVar("T")

EXECUTION_STATUS_SUCCESS = "success"
EXECUTION_STATUS_FAILURE = "failure"

SUI_TRANSACTION_BLOCK_KIND_CHANGE_EPOCH = "ChangeEpoch"
SUI_TRANSACTION_BLOCK_KIND_CONSENSUS_COMMIT_PROLOGUE = "ConsensusCommitPrologue"
SUI_TRANSACTION_BLOCK_KIND_GENESIS = "Genesis"
SUI_TRANSACTION_BLOCK_KIND_PROGRAMMABLE_TRANSACTION = "ProgrammableTransaction"

_MESSAGE_VERSION_V1 = "v1"


def _opt(value: Any, parser: Callable[[Any], T]) -> Optional[T]:
    return None if value is None else parser(value)


def _list(value: Any, parser: Callable[[Any], T]) -> list[T]:
    return [parser(item) for item in value or []]


def _check_version(data: dict[str, Any]) -> str:
    version = data.get("messageVersion")
    if version != _MESSAGE_VERSION_V1:
        raise ValueError(f"unsupported message version {version!r}")
    return version


class ExecuteTransactionRequestType(str, enum.Enum):
    WAIT_FOR_EFFECTS_CERT = "WaitForEffectsCert"
    WAIT_FOR_LOCAL_EXECUTION = "WaitForLocalExecution"


@dataclass(frozen=True)
class GasCostSummary:
    computation_cost: int
    storage_cost: int
    storage_rebate: int
    non_refundable_storage_fee: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GasCostSummary:
        return cls(
            computation_cost=parse_safe_int(data["computationCost"]),
            storage_cost=parse_safe_int(data["storageCost"]),
            storage_rebate=parse_safe_int(data["storageRebate"]),
            non_refundable_storage_fee=parse_safe_int(data.get("nonRefundableStorageFee", 0)),
        )


@dataclass(frozen=True)
class ExecutionStatus:
    status: str
    error: str = ""


def _status_from_json(data: dict[str, Any]) -> ExecutionStatus:
    return ExecutionStatus(status=data["status"], error=data.get("error", ""))


@dataclass(frozen=True)
class OwnedObjectRef:
    owner: ObjectOwner
    reference: SuiObjectRef

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> OwnedObjectRef:
        return cls(
            owner=ObjectOwner.from_json(data["owner"]),
            reference=SuiObjectRef.from_json(data["reference"]),
        )


def _modified_at(data: dict[str, Any]) -> tuple[SuiAddress, int]:
    return SuiAddress.from_hex(data["objectId"]), parse_safe_int(data["sequenceNumber"])


@dataclass
class SuiTransactionBlockEffects:
    """Outcome of executing a transaction block."""

    status: ExecutionStatus
    executed_epoch: int
    gas_used: GasCostSummary
    transaction_digest: Digest
    gas_object: OwnedObjectRef
    modified_at_versions: list[tuple[SuiAddress, int]] = field(default_factory=list)
    shared_objects: list[SuiObjectRef] = field(default_factory=list)
    created: list[OwnedObjectRef] = field(default_factory=list)
    mutated: list[OwnedObjectRef] = field(default_factory=list)
    unwrapped: list[OwnedObjectRef] = field(default_factory=list)
    deleted: list[SuiObjectRef] = field(default_factory=list)
    unwrapped_then_deleted: list[SuiObjectRef] = field(default_factory=list)
    wrapped: list[SuiObjectRef] = field(default_factory=list)
    events_digest: Optional[Digest] = None
    dependencies: list[Digest] = field(default_factory=list)
    message_version: str = _MESSAGE_VERSION_V1

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiTransactionBlockEffects:
        version = _check_version(data)
        return cls(
            status=_status_from_json(data["status"]),
            executed_epoch=parse_safe_int(data["executedEpoch"]),
            gas_used=GasCostSummary.from_json(data["gasUsed"]),
            transaction_digest=Digest.from_base58(data["transactionDigest"]),
            gas_object=OwnedObjectRef.from_json(data["gasObject"]),
            modified_at_versions=_list(data.get("modifiedAtVersions"), _modified_at),
            shared_objects=_list(data.get("sharedObjects"), SuiObjectRef.from_json),
            created=_list(data.get("created"), OwnedObjectRef.from_json),
            mutated=_list(data.get("mutated"), OwnedObjectRef.from_json),
            unwrapped=_list(data.get("unwrapped"), OwnedObjectRef.from_json),
            deleted=_list(data.get("deleted"), SuiObjectRef.from_json),
            unwrapped_then_deleted=_list(
                data.get("unwrapped_then_deleted"), SuiObjectRef.from_json
            ),
            wrapped=_list(data.get("wrapped"), SuiObjectRef.from_json),
            events_digest=_opt(data.get("eventsDigest"), Digest.from_base58),
            dependencies=_list(data.get("dependencies"), Digest.from_base58),
            message_version=version,
        )

    def gas_fee(self) -> int:
        """Storage cost minus storage rebate plus computation cost."""
        gas = self.gas_used
        return gas.storage_cost - gas.storage_rebate + gas.computation_cost

    def is_success(self) -> bool:
        return self.status.status == EXECUTION_STATUS_SUCCESS


@dataclass
class TransactionBlockKind:
    """The kind of a transaction block and the fields that kind carries."""

    kind: str
    inputs: list[Any] = field(default_factory=list)
    commands: list[Any] = field(default_factory=list)
    epoch: Optional[int] = None
    storage_charge: Optional[int] = None
    computation_charge: Optional[int] = None
    storage_rebate: Optional[int] = None
    epoch_start_timestamp_ms: Optional[int] = None
    objects: list[SuiAddress] = field(default_factory=list)
    round: Optional[int] = None
    commit_timestamp_ms: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TransactionBlockKind:
        kind = data.get("kind")
        if kind == SUI_TRANSACTION_BLOCK_KIND_PROGRAMMABLE_TRANSACTION:
            return cls(
                kind,
                inputs=list(data.get("inputs") or []),
                commands=list(data.get("transactions") or []),
            )
        if kind == SUI_TRANSACTION_BLOCK_KIND_CHANGE_EPOCH:
            return cls(
                kind,
                epoch=parse_safe_int(data["epoch"]),
                storage_charge=int(data["storage_charge"]),
                computation_charge=int(data["computation_charge"]),
                storage_rebate=int(data["storage_rebate"]),
                epoch_start_timestamp_ms=int(data["epoch_start_timestamp_ms"]),
            )
        if kind == SUI_TRANSACTION_BLOCK_KIND_GENESIS:
            return cls(kind, objects=_list(data.get("objects"), SuiAddress.from_hex))
        if kind == SUI_TRANSACTION_BLOCK_KIND_CONSENSUS_COMMIT_PROLOGUE:
            return cls(
                kind,
                epoch=int(data["epoch"]),
                round=int(data["round"]),
                commit_timestamp_ms=int(data["commit_timestamp_ms"]),
            )
        raise ValueError(f"unknown transaction block kind {kind!r}")


@dataclass
class SuiTransactionBlockData:
    """The input of a transaction block: its kind, sender and gas data."""

    transaction: TransactionBlockKind
    sender: SuiAddress
    gas_payment: list[SuiObjectRef]
    gas_owner: str
    gas_price: int
    gas_budget: int
    message_version: str = _MESSAGE_VERSION_V1

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiTransactionBlockData:
        version = _check_version(data)
        gas = data["gasData"]
        return cls(
            transaction=TransactionBlockKind.from_json(data["transaction"]),
            sender=SuiAddress.from_hex(data["sender"]),
            gas_payment=_list(gas.get("payment"), SuiObjectRef.from_json),
            gas_owner=gas["owner"],
            gas_price=parse_safe_int(gas["price"]),
            gas_budget=parse_safe_int(gas["budget"]),
            message_version=version,
        )


_OBJECT_CHANGE_TYPES = frozenset(
    {"published", "transferred", "mutated", "deleted", "wrapped", "created"}
)


@dataclass
class ObjectChange:
    """One change to an object; ``type`` says which fields are present."""

    type: str
    version: int
    sender: Optional[SuiAddress] = None
    owner: Optional[ObjectOwner] = None
    object_type: Optional[str] = None
    object_id: Optional[SuiAddress] = None
    package_id: Optional[SuiAddress] = None
    previous_version: Optional[int] = None
    digest: Optional[Digest] = None
    modules: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ObjectChange:
        kind = data.get("type")
        if kind not in _OBJECT_CHANGE_TYPES:
            raise ValueError(f"unknown object change type {kind!r}")
        version = parse_safe_int(data["version"])
        if kind == "published":
            return cls(
                kind,
                version,
                package_id=SuiAddress.from_hex(data["packageId"]),
                digest=Digest.from_base58(data["digest"]),
                modules=list(data.get("nodules", data.get("modules")) or []),
            )
        owner_key = "recipient" if kind == "transferred" else "owner"
        return cls(
            kind,
            version,
            sender=SuiAddress.from_hex(data["sender"]),
            owner=_opt(data.get(owner_key), ObjectOwner.from_json),
            object_type=data["objectType"],
            object_id=SuiAddress.from_hex(data["objectId"]),
            previous_version=_opt(data.get("previousVersion"), parse_safe_int),
            digest=_opt(data.get("digest"), Digest.from_base58),
        )


@dataclass(frozen=True)
class BalanceChange:
    """A coin balance change; a positive amount is received, negative is sent."""

    owner: ObjectOwner
    coin_type: str
    amount: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> BalanceChange:
        return cls(
            owner=ObjectOwner.from_json(data["owner"]),
            coin_type=data["coinType"],
            amount=int(data["amount"]),
        )


@dataclass
class SuiTransactionBlockResponse:
    digest: Digest
    transaction: Optional[SuiTransactionBlockData] = None
    tx_signatures: list[str] = field(default_factory=list)
    raw_transaction: bytes = b""
    effects: Optional[SuiTransactionBlockEffects] = None
    events: list[SuiEvent] = field(default_factory=list)
    timestamp_ms: Optional[int] = None
    checkpoint: Optional[int] = None
    confirmed_local_execution: Optional[bool] = None
    object_changes: list[ObjectChange] = field(default_factory=list)
    balance_changes: list[BalanceChange] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiTransactionBlockResponse:
        block = data.get("transaction")
        raw = data.get("rawTransaction")
        return cls(
            digest=Digest.from_base58(data["digest"]),
            transaction=None
            if block is None
            else SuiTransactionBlockData.from_json(block["data"]),
            tx_signatures=list((block or {}).get("txSignatures") or []),
            raw_transaction=base64.b64decode(raw) if raw else b"",
            effects=_opt(data.get("effects"), SuiTransactionBlockEffects.from_json),
            events=_list(data.get("events"), SuiEvent.from_json),
            timestamp_ms=_opt(data.get("timestampMs"), parse_safe_int),
            checkpoint=_opt(data.get("checkpoint"), parse_safe_int),
            confirmed_local_execution=data.get("confirmedLocalExecution"),
            object_changes=_list(data.get("objectChanges"), ObjectChange.from_json),
            balance_changes=_list(data.get("balanceChanges"), BalanceChange.from_json),
            errors=list(data.get("errors") or []),
        )


TransactionBlocksPage = Page[SuiTransactionBlockResponse]


@dataclass
class DevInspectResults:
    effects: SuiTransactionBlockEffects
    events: list[SuiEvent] = field(default_factory=list)
    results: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DevInspectResults:
        return cls(
            effects=SuiTransactionBlockEffects.from_json(data["effects"]),
            events=_list(data.get("events"), SuiEvent.from_json),
            results=[dict(item) for item in data.get("results") or []],
            error=data.get("error"),
        )


@dataclass
class DryRunTransactionBlockResponse:
    effects: SuiTransactionBlockEffects
    input: SuiTransactionBlockData
    events: list[SuiEvent] = field(default_factory=list)
    object_changes: list[ObjectChange] = field(default_factory=list)
    balance_changes: list[BalanceChange] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DryRunTransactionBlockResponse:
        return cls(
            effects=SuiTransactionBlockEffects.from_json(data["effects"]),
            input=SuiTransactionBlockData.from_json(data["input"]),
            events=_list(data.get("events"), SuiEvent.from_json),
            object_changes=_list(data.get("objectChanges"), ObjectChange.from_json),
            balance_changes=_list(data.get("balanceChanges"), BalanceChange.from_json),
        )


@dataclass
class TransactionFilter:
    """Criteria for a transaction query; every criterion that is set is sent.

    ``move_function`` is (package, module, function); empty module or
    function names are left out.
    """

    checkpoint: Optional[int] = None
    move_function: Optional[tuple[SuiAddress, str, str]] = None
    input_object: Optional[SuiAddress] = None
    changed_object: Optional[SuiAddress] = None
    from_address: Optional[SuiAddress] = None
    to_address: Optional[SuiAddress] = None
    from_and_to_address: Optional[tuple[SuiAddress, SuiAddress]] = None
    transaction_kind: Optional[str] = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.checkpoint is not None:
            out["Checkpoint"] = self.checkpoint
        if self.move_function is not None:
            package, module, function = self.move_function
            move: dict[str, str] = {"package": str(package)}
            if module:
                move["module"] = module
            if function:
                move["function"] = function
            out["MoveFunction"] = move
        if self.input_object is not None:
            out["InputObject"] = str(self.input_object)
        if self.changed_object is not None:
            out["ChangedObject"] = str(self.changed_object)
        if self.from_address is not None:
            out["FromAddress"] = str(self.from_address)
        if self.to_address is not None:
            out["ToAddress"] = str(self.to_address)
        if self.from_and_to_address is not None:
            sender, recipient = self.from_and_to_address
            out["FromAndToAddress"] = {"from": str(sender), "to": str(recipient)}
        if self.transaction_kind is not None:
            out["TransactionKind"] = self.transaction_kind
        return out


@dataclass
class SuiTransactionBlockResponseOptions:
    """Which parts of a transaction block a query should return."""

    show_input: bool = False
    show_effects: bool = False
    show_events: bool = False
    show_object_changes: bool = False
    show_balance_changes: bool = False

    def to_json(self) -> dict[str, bool]:
        flags = {
            "showInput": self.show_input,
            "showEffects": self.show_effects,
            "showEvents": self.show_events,
            "showObjectChanges": self.show_object_changes,
            "showBalanceChanges": self.show_balance_changes,
        }
        return {key: True for key, value in flags.items() if value}


@dataclass
class SuiTransactionBlockResponseQuery:
    filter: Optional[TransactionFilter] = None
    options: Optional[SuiTransactionBlockResponseOptions] = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.filter is not None:
            out["filter"] = self.filter.to_json()
        if self.options is not None:
            out["options"] = self.options.to_json()
        return out