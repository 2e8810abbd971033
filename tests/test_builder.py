import pytest

from suikit.base_types import Digest, ObjectRef, SuiAddress, new_address_from_hex, new_digest
from suikit.bcs import BcsError
from suikit.builder import BuilderError, ProgrammableTransactionBuilder, encode_pure
from suikit.messages import (
    GasCoin,
    ImmOrOwnedObject,
    Input,
    MakeMoveVec,
    MergeCoins,
    NestedResult,
    ObjectCallArg,
    ProgrammableMoveCall,
    PureArg,
    Result,
    SharedObject,
    SplitCoins,
    TransferObjects,
    decode_transaction_data,
    encode_transaction_data,
)
from suikit.transaction import new_programmable

RECIPIENT_HEX = "0x7e875ea78ee09f08d72e2676cf84e0f1c8ac61d94fa339cc8e37cace85bebc6e"
OBJECT_HEX = "0x13c1c3d0e15b4039cec4291c75b77c972c10c8e8e70ab4ca174cf336917cb4db"
DIGEST_B58 = "HvbE2UZny6cP4KukaXetmj4jjpKTDTjVo23XEcu7VgSn"


def _ref(hex_id, version=1):
    return ObjectRef(SuiAddress.from_hex(hex_id), version, Digest(bytes(32)))


def test_transfer_sui():
    ptb = ProgrammableTransactionBuilder()
    recipient = new_address_from_hex(RECIPIENT_HEX)
    ptb.transfer_sui(recipient, 100000)
    pt = ptb.finish()
    digest = new_digest(DIGEST_B58)
    object_id = SuiAddress.from_hex(OBJECT_HEX)
    tx = new_programmable(
        recipient, [ObjectRef(object_id, 14924029, digest)], pt, 10000000, 1000
    )
    tx_bytes = encode_transaction_data(tx)
    re_tx = decode_transaction_data(tx_bytes)
    assert re_tx == tx
    assert pt.inputs == [
        PureArg(recipient.data),
        PureArg(b"\xa0\x86\x01\x00\x00\x00\x00\x00"),
    ]
    assert pt.commands == [
        SplitCoins(GasCoin(), [Input(1)]),
        TransferObjects([Result(0)], Input(0)),
    ]


def test_transfer_sui_without_amount_sends_gas_coin():
    ptb = ProgrammableTransactionBuilder()
    recipient = new_address_from_hex(RECIPIENT_HEX)
    ptb.transfer_sui(recipient, None)
    pt = ptb.finish()
    assert pt.inputs == [PureArg(recipient.data)]
    assert pt.commands == [TransferObjects([GasCoin()], Input(0))]


def test_encode_pure_values():
    assert encode_pure(1) == b"\x01" + b"\x00" * 7
    assert encode_pure(True) == b"\x01"
    assert encode_pure(b"ab") == b"\x02ab"
    assert encode_pure("hi") == b"\x02hi"
    assert encode_pure([1, 2]) == b"\x02" + encode_pure(1) + encode_pure(2)
    addr = SuiAddress.from_hex("0x2")
    assert encode_pure(addr) == addr.data
    with pytest.raises(BcsError):
        encode_pure(1.5)


def test_pure_deduplicates():
    ptb = ProgrammableTransactionBuilder()
    first = ptb.pure(5)
    second = ptb.pure(6)
    third = ptb.pure(5)
    assert first == Input(0)
    assert second == Input(1)
    assert third == Input(0)
    assert len(ptb.finish().inputs) == 2


def test_force_separate_pure_adds_new_input():
    ptb = ProgrammableTransactionBuilder()
    assert ptb.pure(5) == Input(0)
    assert ptb.force_separate_pure(5) == Input(1)
    assert ptb.force_separate_pure(5) == Input(2)
    assert ptb.finish().inputs == [PureArg(encode_pure(5))] * 3


def test_obj_shared_merges_mutability():
    ptb = ProgrammableTransactionBuilder()
    oid = SuiAddress.from_hex("0x6")
    assert ptb.obj(SharedObject(oid, 1, False)) == Input(0)
    assert ptb.obj(SharedObject(oid, 1, True)) == Input(0)
    assert ptb.obj(SharedObject(oid, 1, False)) == Input(0)
    assert ptb.finish().inputs == [ObjectCallArg(SharedObject(oid, 1, True))]


def test_obj_same_owned_object_reuses_input():
    ptb = ProgrammableTransactionBuilder()
    ref = _ref("0xa")
    assert ptb.obj(ImmOrOwnedObject(ref)) == Input(0)
    assert ptb.obj(ImmOrOwnedObject(ref)) == Input(0)
    assert len(ptb.finish().inputs) == 1


def test_obj_mismatch_raises():
    ptb = ProgrammableTransactionBuilder()
    ptb.obj(ImmOrOwnedObject(_ref("0xa", 1)))
    with pytest.raises(BuilderError, match="mismatched Object argument"):
        ptb.obj(ImmOrOwnedObject(_ref("0xa", 2)))
    with pytest.raises(BuilderError):
        ptb.obj(SharedObject(SuiAddress.from_hex("0xa"), 1, True))


def test_input_dispatches():
    ptb = ProgrammableTransactionBuilder()
    assert ptb.input(PureArg(b"\x01")) == Input(0)
    assert ptb.input(ObjectCallArg(ImmOrOwnedObject(_ref("0xb")))) == Input(1)
    assert ptb.input(PureArg(b"\x01")) == Input(0)
    with pytest.raises(BuilderError):
        ptb.input(None)


def test_command_returns_result_index():
    ptb = ProgrammableTransactionBuilder()
    assert ptb.command(TransferObjects([GasCoin()], Input(0))) == Result(0)
    assert ptb.command(TransferObjects([GasCoin()], Input(0))) == Result(1)


def test_make_obj_list():
    ptb = ProgrammableTransactionBuilder()
    result = ptb.make_obj_list([ImmOrOwnedObject(_ref("0xa")), ImmOrOwnedObject(_ref("0xb"))])
    assert result == Result(0)
    assert ptb.finish().commands == [MakeMoveVec(None, [Input(0), Input(1)])]


def test_transfer_object():
    ptb = ProgrammableTransactionBuilder()
    recipient = SuiAddress.from_hex("0x1")
    ptb.transfer_object(recipient, [_ref("0xa"), _ref("0xb")])
    pt = ptb.finish()
    assert pt.inputs[0] == PureArg(recipient.data)
    assert pt.commands == [TransferObjects([Input(1), Input(2)], Input(0))]


def test_move_call():
    ptb = ProgrammableTransactionBuilder()
    pkg = SuiAddress.from_hex("0x3")
    ptb.move_call(
        pkg,
        "sui_system",
        "request_add_stake",
        [],
        [PureArg(b"\x07"), ObjectCallArg(ImmOrOwnedObject(_ref("0xa")))],
    )
    pt = ptb.finish()
    assert pt.commands == [
        ProgrammableMoveCall(pkg, "sui_system", "request_add_stake", [], [Input(0), Input(1)])
    ]


def test_pay_sui_groups_recipients():
    ptb = ProgrammableTransactionBuilder()
    a = SuiAddress.from_hex("0xa1")
    b = SuiAddress.from_hex("0xb2")
    ptb.pay_sui([a, b, a], [1, 2, 3])
    pt = ptb.finish()
    assert pt.inputs == [
        PureArg(encode_pure(1)),
        PureArg(encode_pure(2)),
        PureArg(encode_pure(3)),
        PureArg(a.data),
        PureArg(b.data),
    ]
    assert pt.commands == [
        SplitCoins(GasCoin(), [Input(0), Input(1), Input(2)]),
        TransferObjects([NestedResult(0, 0), NestedResult(0, 2)], Input(3)),
        TransferObjects([NestedResult(0, 1)], Input(4)),
    ]


def test_pay_mul_internal_mismatch_raises():
    ptb = ProgrammableTransactionBuilder()
    with pytest.raises(BuilderError, match="Got 1 recipients but 2 amounts"):
        ptb.pay_mul_internal([SuiAddress.from_hex("0x1")], [1, 2], GasCoin())


def test_pay_mul_internal_empty_does_nothing():
    ptb = ProgrammableTransactionBuilder()
    ptb.pay_mul_internal([], [], GasCoin())
    pt = ptb.finish()
    assert pt.inputs == [] and pt.commands == []


def test_pay_all_sui():
    ptb = ProgrammableTransactionBuilder()
    recipient = SuiAddress.from_hex("0x1")
    ptb.pay_all_sui(recipient)
    pt = ptb.finish()
    assert pt.inputs == [PureArg(recipient.data)]
    assert pt.commands == [TransferObjects([GasCoin()], Input(0))]


def test_pay_merges_coins():
    ptb = ProgrammableTransactionBuilder()
    recipient = SuiAddress.from_hex("0x1")
    ptb.pay([_ref("0xa"), _ref("0xb")], [recipient], [10])
    pt = ptb.finish()
    assert pt.commands == [
        MergeCoins(Input(0), [Input(1)]),
        SplitCoins(Input(0), [Input(2)]),
        TransferObjects([NestedResult(1, 0)], Input(3)),
    ]


def test_pay_single_coin_skips_merge():
    ptb = ProgrammableTransactionBuilder()
    ptb.pay([_ref("0xa")], [SuiAddress.from_hex("0x1")], [10])
    pt = ptb.finish()
    assert not any(isinstance(c, MergeCoins) for c in pt.commands)
    assert pt.commands[0] == SplitCoins(Input(0), [Input(1)])


def test_pay_empty_coins_raises():
    ptb = ProgrammableTransactionBuilder()
    with pytest.raises(BuilderError, match="coins is empty"):
        ptb.pay([], [], [])


def test_finish_returns_copies():
    ptb = ProgrammableTransactionBuilder()
    ptb.pay_all_sui(SuiAddress.from_hex("0x1"))
    pt = ptb.finish()
    pt.commands.clear()
    assert len(ptb.finish().commands) == 1