"""Binary Canonical Serialization primitives."""

from __future__ import annotations


class BcsError(ValueError):
    """Raised when data cannot be encoded or decoded."""


class BcsWriter:
    """Accumulates BCS-encoded values."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def _int(self, value: int, size: int) -> None:
        if not 0 <= value < 1 << (8 * size):
            raise BcsError(f"value {value} out of range for u{8 * size}")
        self._buf += value.to_bytes(size, "little")

    def write_u8(self, value: int) -> None:
        self._int(value, 1)

    def write_u16(self, value: int) -> None:
        self._int(value, 2)

    def write_u64(self, value: int) -> None:
        self._int(value, 8)

    def write_bool(self, value: bool) -> None:
        self._buf.append(1 if value else 0)

    def write_uleb128(self, value: int) -> None:
        if value < 0:
            raise BcsError("uleb128 value must be non-negative")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value:
                self._buf.append(byte | 0x80)
            else:
                self._buf.append(byte)
                return

    def write_fixed(self, data: bytes) -> None:
        self._buf += data

    def write_bytes(self, data: bytes) -> None:
        self.write_uleb128(len(data))
        self._buf += data

    def write_str(self, text: str) -> None:
        self.write_bytes(text.encode("utf-8"))

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class BcsReader:
    """Reads BCS-encoded values from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read_fixed(self, size: int) -> bytes:
        end = self._pos + size
        if size < 0 or end > len(self._data):
            raise BcsError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _int(self, size: int) -> int:
        return int.from_bytes(self.read_fixed(size), "little")

    def read_u8(self) -> int:
        return self._int(1)

    def read_u16(self) -> int:
        return self._int(2)

    def read_u64(self) -> int:
        return self._int(8)

    def read_bool(self) -> bool:
        value = self.read_u8()
        if value > 1:
            raise BcsError(f"invalid bool byte {value}")
        return value == 1

    def read_uleb128(self) -> int:
        result = 0
        shift = 0
        while True:
            byte = self.read_u8()
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
            if shift > 63:
                raise BcsError("uleb128 value too large")

    def read_bytes(self) -> bytes:
        return self.read_fixed(self.read_uleb128())

    def read_str(self) -> str:
        try:
            return self.read_bytes().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BcsError("invalid utf-8 string") from exc

    def at_end(self) -> bool:
        return self._pos == len(self._data)