"""Addresses, digests, object references and well-known identifiers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

ADDRESS_LENGTH = 32


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    zeros = len(data) - len(data.lstrip(b"\x00"))
    number = int.from_bytes(data, "big")
    chars = []
    while number:
        number, rem = divmod(number, 58)
        chars.append(_ALPHABET[rem])
    return "1" * zeros + "".join(reversed(chars))


def b58decode(text: str) -> bytes:
    """Decode a Bitcoin base58 string; raises ValueError on bad characters."""
    number = 0
    for ch in text:
        try:
            number = number * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character {ch!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * zeros + body


@dataclass(frozen=True)
class SuiAddress:
    """A 32-byte account address or object id."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != ADDRESS_LENGTH:
            raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(self.data)}")

    @classmethod
    def from_hex(cls, text: str) -> SuiAddress:
        body = text[2:] if text.startswith(("0x", "0X")) else text
        if len(body) > ADDRESS_LENGTH * 2:
            raise ValueError(f"address hex too long: {text!r}")
        try:
            data = bytes.fromhex(body.rjust(ADDRESS_LENGTH * 2, "0"))
        except ValueError:
            raise ValueError(f"invalid address hex: {text!r}") from None
        return cls(data)

    def short_string(self) -> str:
        """Hex form with leading zeros trimmed, e.g. ``0x2``."""
        return "0x" + (self.data.hex().lstrip("0") or "0")

    def __str__(self) -> str:
        return "0x" + self.data.hex()


ObjectID = SuiAddress


@dataclass(frozen=True)
class Digest:
    """A digest carried as raw bytes and shown in base58."""

    data: bytes

    @classmethod
    def from_base58(cls, text: str) -> Digest:
        return cls(b58decode(text))

    def to_base58(self) -> str:
        return b58encode(self.data)

    def __str__(self) -> str:
        return self.to_base58()


@dataclass(frozen=True)
class ObjectRef:
    """Object id, version and digest, in that wire order."""

    object_id: SuiAddress
    version: int
    digest: Digest


class DynamicFieldType(enum.Enum):
    DYNAMIC_FIELD = "DynamicField"
    DYNAMIC_OBJECT = "DynamicObject"


@dataclass
class DynamicFieldName:
    type: str
    value: Any


def new_address_from_hex(text: str) -> SuiAddress:
    return SuiAddress.from_hex(text)


def new_object_id_from_hex(text: str) -> SuiAddress:
    return SuiAddress.from_hex(text)


def new_digest(text: str) -> Digest:
    return Digest.from_base58(text)


OBJECT_START_VERSION = 1

SUI_SYSTEM_ADDRESS = SuiAddress.from_hex("0x3")
SUI_SYSTEM_PACKAGE_ID = SUI_SYSTEM_ADDRESS
SUI_SYSTEM_STATE_OBJECT_ID = SuiAddress.from_hex("0x5")
SUI_SYSTEM_STATE_OBJECT_SHARED_VERSION = OBJECT_START_VERSION

STAKING_POOL_MODULE_NAME = "staking_pool"
STAKED_SUI_STRUCT_NAME = "StakedSui"
ADD_STAKE_MUL_COIN_FUN_NAME = "request_add_stake_mul_coin"
ADD_STAKE_FUN_NAME = "request_add_stake"
WITHDRAW_STAKE_FUN_NAME = "request_withdraw_stake"
SUI_SYSTEM_MODULE_NAME = "sui_system"