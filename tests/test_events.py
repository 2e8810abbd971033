import pytest

from suikit.base_types import Digest, SuiAddress
from suikit.common import Page
from suikit.events import EventFilter, EventId, SuiEvent

DIGEST = "HvbE2UZny6cP4KukaXetmj4jjpKTDTjVo23XEcu7VgSn"
SENDER = "0x7e875ea78ee09f08d72e2676cf84e0f1c8ac61d94fa339cc8e37cace85bebc6e"


def _event_json(**extra):
    data = {
        "id": {"txDigest": DIGEST, "eventSeq": "3"},
        "packageId": "0x2",
        "transactionModule": "pay",
        "sender": SENDER,
        "type": "0x2::coin::CoinEvent",
        "parsedJson": {"amount": "10"},
        "bcs": "abc",
    }
    data.update(extra)
    return data


def test_event_id_round_trip():
    event_id = EventId(Digest.from_base58(DIGEST), 3)
    encoded = event_id.to_json()
    assert encoded == {"txDigest": DIGEST, "eventSeq": "3"}
    assert EventId.from_json(encoded) == event_id


def test_event_id_accepts_number():
    assert EventId.from_json({"txDigest": DIGEST, "eventSeq": 3}).event_seq == 3


def test_event_id_bad_seq():
    with pytest.raises(ValueError):
        EventId.from_json({"txDigest": DIGEST, "eventSeq": "x"})


def test_event_from_json():
    event = SuiEvent.from_json(_event_json(timestampMs="1680000000000"))
    assert event.id.event_seq == 3
    assert event.package_id == SuiAddress.from_hex("0x2")
    assert event.sender == SuiAddress.from_hex(SENDER)
    assert event.parsed_json == {"amount": "10"}
    assert event.timestamp_ms == 1680000000000


def test_event_without_timestamp():
    assert SuiEvent.from_json(_event_json()).timestamp_ms is None


def test_event_page():
    page = Page.from_json(
        {"data": [_event_json()], "hasNextPage": False}, SuiEvent.from_json
    )
    assert len(page.data) == 1
    assert page.data[0].transaction_module == "pay"
    assert page.has_next_page is False


def test_empty_filter():
    assert EventFilter().to_json() == {}


def test_filter_sender_and_type():
    flt = EventFilter(sender=SuiAddress.from_hex(SENDER), move_event_type="0x2::coin::CoinEvent")
    assert flt.to_json() == {"Sender": SENDER, "MoveEventType": "0x2::coin::CoinEvent"}


def test_filter_time_range_and_module():
    addr = SuiAddress.from_hex("0x2")
    flt = EventFilter(time_range=(100, 200), move_module=(addr, "pay"))
    assert flt.to_json() == {
        "TimeRange": {"startTime": "100", "endTime": "200"},
        "MoveModule": {"package": str(addr), "module": "pay"},
    }


def test_filter_nested():
    inner = EventFilter(transaction=Digest.from_base58(DIGEST))
    flt = EventFilter(any_of=[inner], all_of=[EventFilter(move_event_field=("/a", 1))])
    assert flt.to_json() == {
        "All": [{"MoveEventField": {"path": "/a", "value": 1}}],
        "Any": [{"Transaction": DIGEST}],
    }