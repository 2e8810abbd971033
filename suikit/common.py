"""Shared JSON helpers: safe integers, object owners and pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from .base_types import SuiAddress

_INT64_MIN = -(1 << 63)
_UINT64_MAX = (1 << 64) - 1

T = TypeVar("T")


def parse_safe_int(value: Union[int, str, float]) -> int:
    """Parse a JSON number or numeric string that must fit in 64 bits.

    Fractions are truncated toward zero. Values outside the combined
    int64/uint64 range raise ValueError.
    """
    if isinstance(value, bool):
        raise ValueError(f"json data [{value!r}] is not an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, (str, float)):
        try:
            number = int(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError, OverflowError):
            raise ValueError(f"json data [{value!r}] is not a number") from None
    else:
        raise ValueError(f"json data [{value!r}] is not a number")
    if not _INT64_MIN <= number <= _UINT64_MAX:
        raise ValueError(f"json data [{value!r}] does not fit in 64 bits")
    return number


def _opt_address(value: Any) -> Optional[SuiAddress]:
    return None if value is None else SuiAddress.from_hex(value)


@dataclass(frozen=True)
class ObjectOwner:
    """An owner given either as a plain name (e.g. ``Immutable``) or as an object."""

    name: Optional[str] = None
    address_owner: Optional[SuiAddress] = None
    object_owner: Optional[SuiAddress] = None
    single_owner: Optional[SuiAddress] = None
    shared: bool = False
    initial_shared_version: Optional[int] = None

    @classmethod
    def from_json(cls, value: Any) -> ObjectOwner:
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, dict):
            shared = value.get("Shared")
            version = None
            if shared is not None:
                raw = shared.get("initial_shared_version")
                version = None if raw is None else parse_safe_int(raw)
            return cls(
                address_owner=_opt_address(value.get("AddressOwner")),
                object_owner=_opt_address(value.get("ObjectOwner")),
                single_owner=_opt_address(value.get("SingleOwner")),
                shared=shared is not None,
                initial_shared_version=version,
            )
        raise ValueError("value not json")

    def to_json(self) -> Union[str, dict[str, Any]]:
        if self.name is not None:
            return self.name
        out: dict[str, Any] = {}
        if self.address_owner is not None:
            out["AddressOwner"] = str(self.address_owner)
        if self.object_owner is not None:
            out["ObjectOwner"] = str(self.object_owner)
        if self.single_owner is not None:
            out["SingleOwner"] = str(self.single_owner)
        if self.shared:
            out["Shared"] = {"initial_shared_version": self.initial_shared_version}
        if not out:
            raise ValueError("nil value")
        return out


@dataclass
class Page(Generic[T]):
    """One page of a paginated result."""

    data: list[T] = field(default_factory=list)
    next_cursor: Optional[Any] = None
    has_next_page: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any], item_parser: Callable[[Any], T]) -> Page[T]:
        items = [item_parser(item) for item in data.get("data") or []]
        return cls(
            data=items,
            next_cursor=data.get("nextCursor"),
            has_next_page=bool(data.get("hasNextPage", False)),
        )