"""Transaction, command, argument and object data types with BCS encoding.

Type tags are carried as their already-encoded BCS bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .base_types import Digest, ObjectRef, SuiAddress
from .bcs import BcsError, BcsReader, BcsWriter


@dataclass(frozen=True)
class GasCoin:
    pass


@dataclass(frozen=True)
class Input:
    index: int


@dataclass(frozen=True)
class Result:
    index: int


@dataclass(frozen=True)
class NestedResult:
    result: int
    index: int


Argument = Union[GasCoin, Input, Result, NestedResult]


@dataclass
class ProgrammableMoveCall:
    package: SuiAddress
    module: str
    function: str
    type_arguments: list[bytes] = field(default_factory=list)
    arguments: list[Argument] = field(default_factory=list)


@dataclass
class TransferObjects:
    objects: list[Argument]
    recipient: Argument


@dataclass
class SplitCoins:
    coin: Argument
    amounts: list[Argument]


@dataclass
class MergeCoins:
    target: Argument
    sources: list[Argument]


@dataclass
class Publish:
    modules: list[bytes]
    dependencies: list[SuiAddress]


@dataclass
class MakeMoveVec:
    type_tag: Optional[bytes]
    arguments: list[Argument]


@dataclass
class Upgrade:
    modules: list[bytes]
    dependencies: list[SuiAddress]
    package: SuiAddress
    ticket: Argument


Command = Union[
    ProgrammableMoveCall, TransferObjects, SplitCoins, MergeCoins, Publish, MakeMoveVec, Upgrade
]


@dataclass(frozen=True)
class ImmOrOwnedObject:
    ref: ObjectRef


@dataclass(frozen=True)
class SharedObject:
    id: SuiAddress
    initial_shared_version: int
    mutable: bool


ObjectArg = Union[ImmOrOwnedObject, SharedObject]


@dataclass(frozen=True)
class PureArg:
    data: bytes


@dataclass(frozen=True)
class ObjectCallArg:
    object: ObjectArg


CallArg = Union[PureArg, ObjectCallArg]


@dataclass
class ProgrammableTransaction:
    inputs: list[CallArg] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)


@dataclass
class ConsensusCommitPrologue:
    epoch: int
    round: int
    commit_timestamp_ms: int


TransactionKind = Union[ProgrammableTransaction, ConsensusCommitPrologue]


@dataclass
class GasData:
    payment: list[ObjectRef]
    owner: SuiAddress
    price: int
    budget: int


@dataclass
class TransactionDataV1:
    kind: TransactionKind
    sender: SuiAddress
    gas_data: GasData
    expiration: Optional[int] = None  # epoch, or None for no expiry


@dataclass
class TransactionData:
    v1: TransactionDataV1


@dataclass(frozen=True)
class AddressOwner:
    address: SuiAddress


@dataclass(frozen=True)
class ObjectOwnerKind:
    address: SuiAddress


@dataclass(frozen=True)
class SharedOwner:
    initial_shared_version: int


@dataclass(frozen=True)
class ImmutableOwner:
    pass


Owner = Union[AddressOwner, ObjectOwnerKind, SharedOwner, ImmutableOwner]


@dataclass
class TypeOrigin:
    module_name: str
    struct_name: str
    package: SuiAddress


@dataclass
class UpgradeInfo:
    upgraded_id: SuiAddress
    upgraded_version: int


@dataclass
class MovePackage:
    id: SuiAddress
    version: int
    module_map: dict[str, bytes] = field(default_factory=dict)
    type_origin_table: list[TypeOrigin] = field(default_factory=list)
    linkage_table: dict[SuiAddress, UpgradeInfo] = field(default_factory=dict)


def object_arg_id(obj_arg: ObjectArg) -> SuiAddress:
    """Return the id of the object an argument refers to."""
    if isinstance(obj_arg, ImmOrOwnedObject):
        return obj_arg.ref.object_id
    return obj_arg.id


# ---- encoding ----

def _w_addr(w: BcsWriter, addr: SuiAddress) -> None:
    w.write_fixed(addr.data)


def _w_ref(w: BcsWriter, ref: ObjectRef) -> None:
    _w_addr(w, ref.object_id)
    w.write_u64(ref.version)
    w.write_bytes(ref.digest.data)


def _w_arg(w: BcsWriter, arg: Argument) -> None:
    if isinstance(arg, GasCoin):
        w.write_uleb128(0)
    elif isinstance(arg, Input):
        w.write_uleb128(1)
        w.write_u16(arg.index)
    elif isinstance(arg, Result):
        w.write_uleb128(2)
        w.write_u16(arg.index)
    elif isinstance(arg, NestedResult):
        w.write_uleb128(3)
        w.write_u16(arg.result)
        w.write_u16(arg.index)
    else:
        raise BcsError(f"unknown argument {arg!r}")


def _w_args(w: BcsWriter, args: list[Argument]) -> None:
    w.write_uleb128(len(args))
    for arg in args:
        _w_arg(w, arg)


def _w_modules(w: BcsWriter, modules: list[bytes], deps: list[SuiAddress]) -> None:
    w.write_uleb128(len(modules))
    for module in modules:
        w.write_bytes(module)
    w.write_uleb128(len(deps))
    for dep in deps:
        _w_addr(w, dep)


def _w_command(w: BcsWriter, cmd: Command) -> None:
    if isinstance(cmd, ProgrammableMoveCall):
        w.write_uleb128(0)
        _w_addr(w, cmd.package)
        w.write_str(cmd.module)
        w.write_str(cmd.function)
        w.write_uleb128(len(cmd.type_arguments))
        for tag in cmd.type_arguments:
            w.write_fixed(tag)
        _w_args(w, cmd.arguments)
    elif isinstance(cmd, TransferObjects):
        w.write_uleb128(1)
        _w_args(w, cmd.objects)
        _w_arg(w, cmd.recipient)
    elif isinstance(cmd, SplitCoins):
        w.write_uleb128(2)
        _w_arg(w, cmd.coin)
        _w_args(w, cmd.amounts)
    elif isinstance(cmd, MergeCoins):
        w.write_uleb128(3)
        _w_arg(w, cmd.target)
        _w_args(w, cmd.sources)
    elif isinstance(cmd, Publish):
        w.write_uleb128(4)
        _w_modules(w, cmd.modules, cmd.dependencies)
    elif isinstance(cmd, MakeMoveVec):
        w.write_uleb128(5)
        if cmd.type_tag is None:
            w.write_u8(0)
        else:
            w.write_u8(1)
            w.write_fixed(cmd.type_tag)
        _w_args(w, cmd.arguments)
    elif isinstance(cmd, Upgrade):
        w.write_uleb128(6)
        _w_modules(w, cmd.modules, cmd.dependencies)
        _w_addr(w, cmd.package)
        _w_arg(w, cmd.ticket)
    else:
        raise BcsError(f"unknown command {cmd!r}")


def _w_call_arg(w: BcsWriter, arg: CallArg) -> None:
    if isinstance(arg, PureArg):
        w.write_uleb128(0)
        w.write_bytes(arg.data)
    elif isinstance(arg, ObjectCallArg):
        w.write_uleb128(1)
        obj = arg.object
        if isinstance(obj, ImmOrOwnedObject):
            w.write_uleb128(0)
            _w_ref(w, obj.ref)
        else:
            w.write_uleb128(1)
            _w_addr(w, obj.id)
            w.write_u64(obj.initial_shared_version)
            w.write_bool(obj.mutable)
    else:
        raise BcsError(f"unknown call argument {arg!r}")


def encode_transaction_data(data: TransactionData) -> bytes:
    """BCS-encode transaction data."""
    w = BcsWriter()
    w.write_uleb128(0)  # V1
    v1 = data.v1
    kind = v1.kind
    if isinstance(kind, ProgrammableTransaction):
        w.write_uleb128(0)
        w.write_uleb128(len(kind.inputs))
        for arg in kind.inputs:
            _w_call_arg(w, arg)
        w.write_uleb128(len(kind.commands))
        for cmd in kind.commands:
            _w_command(w, cmd)
    elif isinstance(kind, ConsensusCommitPrologue):
        w.write_uleb128(3)
        w.write_u64(kind.epoch)
        w.write_u64(kind.round)
        w.write_u64(kind.commit_timestamp_ms)
    else:
        raise BcsError(f"unsupported transaction kind {kind!r}")
    _w_addr(w, v1.sender)
    gas = v1.gas_data
    w.write_uleb128(len(gas.payment))
    for ref in gas.payment:
        _w_ref(w, ref)
    _w_addr(w, gas.owner)
    w.write_u64(gas.price)
    w.write_u64(gas.budget)
    if v1.expiration is None:
        w.write_uleb128(0)
    else:
        w.write_uleb128(1)
        w.write_u64(v1.expiration)
    return w.getvalue()


# ---- decoding ----

def _r_addr(r: BcsReader) -> SuiAddress:
    return SuiAddress(r.read_fixed(32))


def _r_ref(r: BcsReader) -> ObjectRef:
    return ObjectRef(_r_addr(r), r.read_u64(), Digest(r.read_bytes()))


def _r_arg(r: BcsReader) -> Argument:
    tag = r.read_uleb128()
    if tag == 0:
        return GasCoin()
    if tag == 1:
        return Input(r.read_u16())
    if tag == 2:
        return Result(r.read_u16())
    if tag == 3:
        return NestedResult(r.read_u16(), r.read_u16())
    raise BcsError(f"invalid argument tag {tag}")


def _r_args(r: BcsReader) -> list[Argument]:
    return [_r_arg(r) for _ in range(r.read_uleb128())]


def _r_modules(r: BcsReader) -> tuple[list[bytes], list[SuiAddress]]:
    modules = [r.read_bytes() for _ in range(r.read_uleb128())]
    deps = [_r_addr(r) for _ in range(r.read_uleb128())]
    return modules, deps


def _r_command(r: BcsReader) -> Command:
    tag = r.read_uleb128()
    if tag == 0:
        package, module, function = _r_addr(r), r.read_str(), r.read_str()
        if r.read_uleb128():
            raise BcsError("decoding type arguments is not supported")
        return ProgrammableMoveCall(package, module, function, [], _r_args(r))
    if tag == 1:
        objects = _r_args(r)
        return TransferObjects(objects, _r_arg(r))
    if tag == 2:
        coin = _r_arg(r)
        return SplitCoins(coin, _r_args(r))
    if tag == 3:
        target = _r_arg(r)
        return MergeCoins(target, _r_args(r))
    if tag == 4:
        return Publish(*_r_modules(r))
    if tag == 5:
        if r.read_u8():
            raise BcsError("decoding type tags is not supported")
        return MakeMoveVec(None, _r_args(r))
    if tag == 6:
        modules, deps = _r_modules(r)
        package = _r_addr(r)
        return Upgrade(modules, deps, package, _r_arg(r))
    raise BcsError(f"invalid command tag {tag}")


def _r_call_arg(r: BcsReader) -> CallArg:
    tag = r.read_uleb128()
    if tag == 0:
        return PureArg(r.read_bytes())
    if tag == 1:
        kind = r.read_uleb128()
        if kind == 0:
            return ObjectCallArg(ImmOrOwnedObject(_r_ref(r)))
        if kind == 1:
            return ObjectCallArg(SharedObject(_r_addr(r), r.read_u64(), r.read_bool()))
        raise BcsError(f"invalid object argument tag {kind}")
    raise BcsError(f"invalid call argument tag {tag}")


def decode_transaction_data(raw: bytes) -> TransactionData:
    """Decode BCS bytes produced by :func:`encode_transaction_data`."""
    r = BcsReader(raw)
    version = r.read_uleb128()
    if version != 0:
        raise BcsError(f"unsupported transaction data version {version}")
    kind_tag = r.read_uleb128()
    kind: TransactionKind
    if kind_tag == 0:
        inputs = [_r_call_arg(r) for _ in range(r.read_uleb128())]
        commands = [_r_command(r) for _ in range(r.read_uleb128())]
        kind = ProgrammableTransaction(inputs, commands)
    elif kind_tag == 3:
        kind = ConsensusCommitPrologue(r.read_u64(), r.read_u64(), r.read_u64())
    else:
        raise BcsError(f"unsupported transaction kind tag {kind_tag}")
    sender = _r_addr(r)
    payment = [_r_ref(r) for _ in range(r.read_uleb128())]
    gas = GasData(payment, _r_addr(r), r.read_u64(), r.read_u64())
    exp_tag = r.read_uleb128()
    if exp_tag == 0:
        expiration = None
    elif exp_tag == 1:
        expiration = r.read_u64()
    else:
        raise BcsError(f"invalid expiration tag {exp_tag}")
    if not r.at_end():
        raise BcsError("trailing bytes after transaction data")
    return TransactionData(TransactionDataV1(kind, sender, gas, expiration))