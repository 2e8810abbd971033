"""Request and response records for transaction submission and coin metadata."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Optional

from .base_types import Digest, ObjectRef, SuiAddress
from .common import parse_safe_int
from .transactions import SuiTransactionBlockEffects

SUI_COIN_TYPE = "0x2::sui::SUI"


def _object_ref(data: dict[str, Any]) -> ObjectRef:
    return ObjectRef(
        object_id=SuiAddress.from_hex(data["objectId"]),
        version=parse_safe_int(data["version"]),
        digest=Digest.from_base58(data["digest"]),
    )


@dataclass
class TransactionBytes:
    """Unsigned transaction bytes with the gas and input objects they use."""

    gas: list[ObjectRef]
    input_objects: list[dict[str, Any]]
    tx_bytes: bytes

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TransactionBytes:
        return cls(
            gas=[_object_ref(item) for item in data.get("gas") or []],
            input_objects=[dict(item) for item in data.get("inputObjects") or []],
            tx_bytes=base64.b64decode(data.get("txBytes") or ""),
        )


@dataclass(frozen=True)
class MoveModule:
    package: SuiAddress
    module: str

    def to_json(self) -> dict[str, str]:
        return {"package": str(self.package), "module": self.module}


@dataclass(frozen=True)
class TimeRange:
    """Milliseconds since the epoch; start inclusive, end exclusive."""

    start_time: int
    end_time: int


@dataclass
class SenderSignedData:
    transactions: list[dict[str, Any]] = field(default_factory=list)
    sender: Optional[SuiAddress] = None
    gas_payment: Optional[ObjectRef] = None
    gas_budget: int = 0


@dataclass
class CertifiedTransaction:
    transaction_digest: str
    tx_signature: str = ""
    auth_sign_info: Any = None
    data: Optional[SenderSignedData] = None


@dataclass
class ExecuteTransactionResponse:
    certificate: CertifiedTransaction
    effects: Optional[SuiTransactionBlockEffects] = None
    transaction_effects_digest: str = ""
    auth_sign_info: Any = None
    confirmed_local_execution: bool = False

    def transaction_digest(self) -> str:
        return self.certificate.transaction_digest


@dataclass(frozen=True)
class SuiCoinMetadata:
    decimals: int
    description: str
    id: SuiAddress
    name: str
    symbol: str
    icon_url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiCoinMetadata:
        decimals = int(data["decimals"])
        if not 0 <= decimals <= 0xFF:
            raise ValueError(f"decimals {decimals} out of range for u8")
        return cls(
            decimals=decimals,
            description=data.get("description") or "",
            id=SuiAddress.from_hex(data["id"]),
            name=data.get("name") or "",
            symbol=data.get("symbol") or "",
            icon_url=data.get("iconUrl") or "",
        )


@dataclass(frozen=True)
class DevInspectResult:
    err: str = ""
    ok: Any = None


def is_same_string_address(addr1: str, addr2: str) -> bool:
    """Compare two hex addresses ignoring a ``0x`` prefix and leading zeros."""

    def _norm(addr: str) -> str:
        if addr.startswith("0x"):
            addr = addr[2:]
        return addr.lstrip("0")

    return _norm(addr1) == _norm(addr2)