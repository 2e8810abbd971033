"""Move resource type strings such as ``0x2::coin::Coin<0x2::sui::SUI>``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base_types import SuiAddress


@dataclass(frozen=True)
class ResourceType:
    address: SuiAddress
    module_name: str
    func_name: str
    sub_type: Optional[ResourceType] = None

    def __str__(self) -> str:
        base = f"{self.address}::{self.module_name}::{self.func_name}"
        return f"{base}<{self.sub_type}>" if self.sub_type is not None else base

    def short_string(self) -> str:
        """Like ``str`` but with addresses' leading zeros trimmed."""
        base = f"{self.address.short_string()}::{self.module_name}::{self.func_name}"
        if self.sub_type is not None:
            return f"{base}<{self.sub_type.short_string()}>"
        return base


def new_resource_type(text: str) -> ResourceType:
    """Parse ``addr::module::name`` with an optional ``<...>`` type parameter."""
    sub_type = None
    lt = text.find("<")
    if lt != -1:
        gt = text.rfind(">")
        if gt != len(text) - 1:
            raise ValueError("invalid type string literal")
        sub_type = new_resource_type(text[lt + 1:gt])
        text = text[:lt]
    parts = text.split("::")
    if len(parts) != 3:
        raise ValueError("invalid type string literal")
    address, module_name, func_name = parts
    return ResourceType(SuiAddress.from_hex(address), module_name, func_name, sub_type)