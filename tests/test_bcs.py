import pytest

from suikit.bcs import BcsError, BcsReader, BcsWriter


def test_u64_little_endian():
    w = BcsWriter()
    w.write_u64(1)
    assert w.getvalue() == b"\x01" + b"\x00" * 7


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 2**32, 2**63])
def test_uleb128_round_trip(value):
    w = BcsWriter()
    w.write_uleb128(value)
    r = BcsReader(w.getvalue())
    assert r.read_uleb128() == value
    assert r.at_end()


def test_uleb128_small_is_one_byte():
    w = BcsWriter()
    w.write_uleb128(127)
    assert w.getvalue() == b"\x7f"


def test_mixed_round_trip():
    w = BcsWriter()
    w.write_u8(7)
    w.write_u16(65535)
    w.write_bool(True)
    w.write_str("héllo")
    w.write_bytes(b"\x01\x02")
    w.write_fixed(b"ab")
    r = BcsReader(w.getvalue())
    assert r.read_u8() == 7
    assert r.read_u16() == 65535
    assert r.read_bool() is True
    assert r.read_str() == "héllo"
    assert r.read_bytes() == b"\x01\x02"
    assert r.read_fixed(2) == b"ab"
    assert r.at_end()


def test_out_of_range():
    with pytest.raises(BcsError):
        BcsWriter().write_u8(256)


def test_truncated():
    with pytest.raises(BcsError):
        BcsReader(b"\x01").read_u64()


def test_bad_bool():
    with pytest.raises(BcsError):
        BcsReader(b"\x02").read_bool()