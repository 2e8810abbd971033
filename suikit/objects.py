"""Object data, object queries and dynamic field records as exchanged over JSON."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from .base_types import Digest, DynamicFieldName, DynamicFieldType, ObjectRef, SuiAddress
from .common import ObjectOwner, Page, parse_safe_int

T = TypeVar("T")


def _opt(value: Any, parser: Callable[[Any], T]) -> Optional[T]:
    return None if value is None else parser(value)


@dataclass(frozen=True)
class SuiObjectRef:
    """An object reference as reported by a node: digest, hex id and version."""

    digest: Digest
    object_id: str
    version: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiObjectRef:
        return cls(
            digest=Digest.from_base58(data["digest"]),
            object_id=data["objectId"],
            version=parse_safe_int(data["version"]),
        )


@dataclass
class SuiObjectData:
    """An object as returned by a query; optional parts depend on the request options."""

    object_id: SuiAddress
    version: int
    digest: Digest
    type: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    bcs: Optional[dict[str, Any]] = None
    owner: Optional[ObjectOwner] = None
    previous_transaction: Optional[Digest] = None
    storage_rebate: Optional[int] = None
    display: Any = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiObjectData:
        return cls(
            object_id=SuiAddress.from_hex(data["objectId"]),
            version=parse_safe_int(data["version"]),
            digest=Digest.from_base58(data["digest"]),
            type=data.get("type"),
            content=data.get("content"),
            bcs=data.get("bcs"),
            owner=_opt(data.get("owner"), ObjectOwner.from_json),
            previous_transaction=_opt(data.get("previousTransaction"), Digest.from_base58),
            storage_rebate=_opt(data.get("storageRebate"), parse_safe_int),
            display=data.get("display"),
        )

    def reference(self) -> ObjectRef:
        return ObjectRef(self.object_id, self.version, self.digest)


@dataclass
class SuiObjectDataOptions:
    """Which parts of an object a query should return."""

    show_type: bool = False
    show_content: bool = False
    show_bcs: bool = False
    show_owner: bool = False
    show_previous_transaction: bool = False
    show_storage_rebate: bool = False
    show_display: bool = False

    def to_json(self) -> dict[str, bool]:
        flags = {
            "showType": self.show_type,
            "showContent": self.show_content,
            "showBcs": self.show_bcs,
            "showOwner": self.show_owner,
            "showPreviousTransaction": self.show_previous_transaction,
            "showStorageRebate": self.show_storage_rebate,
            "showDisplay": self.show_display,
        }
        return {key: True for key, value in flags.items() if value}


@dataclass(frozen=True)
class SuiObjectResponseError:
    """Why an object could not be returned; ``code`` names the kind."""

    code: str
    object_id: Optional[SuiAddress] = None
    version: Optional[int] = None
    digest: Optional[Digest] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiObjectResponseError:
        code = data.get("code")
        if code == "notExists":
            return cls(code, object_id=SuiAddress.from_hex(data["object_id"]))
        if code == "deleted":
            return cls(
                code,
                object_id=SuiAddress.from_hex(data["object_id"]),
                version=parse_safe_int(data["version"]),
                digest=Digest.from_base58(data["digest"]),
            )
        if code == "unKnown":
            return cls(code)
        if code == "displayError":
            return cls(code, error=data["error"])
        raise ValueError(f"unknown object response error code {code!r}")


@dataclass
class SuiObjectResponse:
    data: Optional[SuiObjectData] = None
    error: Optional[SuiObjectResponseError] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiObjectResponse:
        return cls(
            data=_opt(data.get("data"), SuiObjectData.from_json),
            error=_opt(data.get("error"), SuiObjectResponseError.from_json),
        )


ObjectsPage = Page[SuiObjectResponse]


@dataclass
class SuiPastObject:
    """The outcome of asking for an object at a given version."""

    status: str
    data: Optional[SuiObjectData] = None
    object_id: Optional[SuiAddress] = None
    object_ref: Optional[SuiObjectRef] = None
    version: Optional[int] = None
    asked_version: Optional[int] = None
    latest_version: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiPastObject:
        status = data.get("status")
        details = data.get("details")
        if status == "VersionFound":
            return cls(status, data=SuiObjectData.from_json(details))
        if status == "ObjectNotExists":
            return cls(status, object_id=SuiAddress.from_hex(details))
        if status == "ObjectDeleted":
            return cls(status, object_ref=SuiObjectRef.from_json(details))
        if status == "VersionNotFound":
            if isinstance(details, dict):
                return cls(status, version=parse_safe_int(details["ObjectId"]))
            object_id, version = details
            return cls(
                status,
                object_id=SuiAddress.from_hex(object_id),
                version=parse_safe_int(version),
            )
        if status == "VersionTooHigh":
            return cls(
                status,
                object_id=SuiAddress.from_hex(details["object_id"]),
                asked_version=parse_safe_int(details["asked_version"]),
                latest_version=parse_safe_int(details["latest_version"]),
            )
        raise ValueError(f"unknown past object status {status!r}")


@dataclass
class SuiObjectDataFilter:
    """Restricts owned-object queries by package, module or struct type."""

    package: Optional[SuiAddress] = None
    move_module: Optional[tuple[SuiAddress, str]] = None
    struct_type: str = ""

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.package is not None:
            out["Package"] = str(self.package)
        if self.move_module is not None:
            package, module = self.move_module
            out["MoveModule"] = {"package": str(package), "module": module}
        if self.struct_type:
            out["StructType"] = self.struct_type
        return out


@dataclass
class SuiObjectResponseQuery:
    filter: Optional[SuiObjectDataFilter] = None
    options: Optional[SuiObjectDataOptions] = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.filter is not None:
            out["filter"] = self.filter.to_json()
        if self.options is not None:
            out["options"] = self.options.to_json()
        return out


@dataclass
class DynamicFieldInfo:
    name: DynamicFieldName
    bcs_name: Digest
    type: DynamicFieldType
    object_type: str
    object_id: SuiAddress
    version: int
    digest: Digest

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DynamicFieldInfo:
        name = data["name"]
        return cls(
            name=DynamicFieldName(type=name["type"], value=name.get("value")),
            bcs_name=Digest.from_base58(data["bcsName"]),
            type=DynamicFieldType(data["type"]),
            object_type=data["objectType"],
            object_id=SuiAddress.from_hex(data["objectId"]),
            version=parse_safe_int(data["version"]),
            digest=Digest.from_base58(data["digest"]),
        )


DynamicFieldPage = Page[DynamicFieldInfo]