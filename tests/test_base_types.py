import pytest

from suikit.base_types import (
    Digest,
    SuiAddress,
    b58decode,
    b58encode,
    new_address_from_hex,
    new_digest,
    new_object_id_from_hex,
)


def test_new_address_from_hex_short_string():
    assert new_address_from_hex("0x2").short_string() == "0x2"


def test_address_full_string():
    addr = new_address_from_hex("0x1")
    assert str(addr) == "0x" + "0" * 63 + "1"


def test_address_without_prefix_equals_prefixed():
    assert new_address_from_hex("2") == new_object_id_from_hex("0x2")


def test_invalid_address_hex():
    with pytest.raises(ValueError):
        SuiAddress.from_hex("0x123abcg")


def test_address_too_long():
    with pytest.raises(ValueError):
        SuiAddress.from_hex("0x" + "1" * 65)


def test_base58_round_trip():
    raw = b"\x00\x00hello world\xff"
    assert b58decode(b58encode(raw)) == raw


def test_base58_leading_zeros():
    assert b58encode(b"\x00\x00").startswith("11")


def test_base58_invalid_char():
    with pytest.raises(ValueError):
        b58decode("0OIl")


def test_digest_round_trip():
    text = "HvbE2UZny6cP4KukaXetmj4jjpKTDTjVo23XEcu7VgSn"
    digest = new_digest(text)
    assert len(digest.data) == 32
    assert digest.to_base58() == text
    assert Digest.from_base58(text) == digest