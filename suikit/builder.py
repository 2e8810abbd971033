"""Incremental construction of programmable transactions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Optional, Union

from .base_types import ObjectRef, SuiAddress
from .bcs import BcsError, BcsWriter
from .messages import (
    Argument,
    CallArg,
    Command,
    GasCoin,
    ImmOrOwnedObject,
    Input,
    MakeMoveVec,
    MergeCoins,
    NestedResult,
    ObjectArg,
    ObjectCallArg,
    ProgrammableMoveCall,
    ProgrammableTransaction,
    PureArg,
    Result,
    SharedObject,
    SplitCoins,
    TransferObjects,
    object_arg_id,
)


class BuilderError(ValueError):
    """Raised when a transaction cannot be assembled as requested."""


def _write_value(w: BcsWriter, value: Any) -> None:
    if isinstance(value, SuiAddress):
        w.write_fixed(value.data)
    elif isinstance(value, bool):
        w.write_bool(value)
    elif isinstance(value, int):
        w.write_u64(value)
    elif isinstance(value, (bytes, bytearray)):
        w.write_bytes(bytes(value))
    elif isinstance(value, str):
        w.write_str(value)
    elif isinstance(value, list):
        w.write_uleb128(len(value))
        for item in value:
            _write_value(w, item)
    elif isinstance(value, tuple):
        for item in value:
            _write_value(w, item)
    else:
        raise BcsError(f"cannot encode pure value of type {type(value).__name__}")


def encode_pure(value: Any) -> bytes:
    """BCS-encode a pure argument.

    Addresses are 32 raw bytes, ints are u64, bytes are vector<u8>, strings
    are UTF-8 vectors, lists are vectors and tuples are structs.
    """
    w = BcsWriter()
    _write_value(w, value)
    return w.getvalue()


_Key = tuple[str, Union[bytes, SuiAddress, int]]


class ProgrammableTransactionBuilder:
    """Collects deduplicated inputs and commands for a programmable transaction."""

    def __init__(self) -> None:
        self._inputs: dict[_Key, CallArg] = {}
        self._commands: list[Command] = []

    @property
    def inputs(self) -> list[CallArg]:
        return list(self._inputs.values())

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    def finish(self) -> ProgrammableTransaction:
        return ProgrammableTransaction(inputs=self.inputs, commands=self.commands)

    def _insert_full(self, key: _Key, value: CallArg) -> int:
        existed = key in self._inputs
        self._inputs[key] = value
        if not existed:
            return len(self._inputs) - 1
        return list(self._inputs).index(key)

    def _pure_bytes(self, data: bytes, force_separate: bool) -> Argument:
        key: _Key = ("forced", len(self._inputs)) if force_separate else ("pure", data)
        return Input(self._insert_full(key, PureArg(data)))

    def force_separate_pure(self, value: Any) -> Argument:
        """Add a pure input that is never merged with an equal one."""
        return self._pure_bytes(encode_pure(value), True)

    def pure(self, value: Any) -> Argument:
        """Add a pure input, reusing an identical one already present."""
        return self._pure_bytes(encode_pure(value), False)

    def obj(self, obj_arg: ObjectArg) -> Argument:
        """Add an object input, merging with an earlier use of the same object."""
        obj_id = object_arg_id(obj_arg)
        key: _Key = ("object", obj_id)
        merged: ObjectArg = obj_arg
        old_value = self._inputs.get(key)
        if old_value is not None:
            if isinstance(old_value, PureArg):
                raise BuilderError("invariant violation! object has Pure argument")
            old = old_value.object
            if (
                isinstance(old, SharedObject)
                and isinstance(obj_arg, SharedObject)
                and old.initial_shared_version == obj_arg.initial_shared_version
            ):
                if object_arg_id(old) != obj_id:
                    raise BuilderError(
                        "invariant violation! object has id does not match call arg"
                    )
                merged = SharedObject(
                    id=obj_id,
                    initial_shared_version=obj_arg.initial_shared_version,
                    mutable=old.mutable or obj_arg.mutable,
                )
            elif old != obj_arg:
                raise BuilderError(
                    f"mismatched Object argument kind for object {obj_id}. "
                    f"{old_value!r} is not compatible with {obj_arg!r}"
                )
        return Input(self._insert_full(key, ObjectCallArg(merged)))

    def input(self, call_arg: CallArg) -> Argument:
        if isinstance(call_arg, PureArg):
            return self._pure_bytes(call_arg.data, False)
        if isinstance(call_arg, ObjectCallArg):
            return self.obj(call_arg.object)
        raise BuilderError("this callArg is nil")

    def make_obj_list(self, objs: Iterable[ObjectArg]) -> Argument:
        args = [self.obj(o) for o in objs]
        return self.command(MakeMoveVec(type_tag=None, arguments=args))

    def command(self, command: Command) -> Argument:
        self._commands.append(command)
        return Result(len(self._commands) - 1)

    def transfer_object(self, recipient: SuiAddress, object_refs: Iterable[ObjectRef]) -> None:
        rec_arg = self.pure(recipient)
        obj_args = [self.obj(ImmOrOwnedObject(ref)) for ref in object_refs]
        self.command(TransferObjects(obj_args, rec_arg))

    def transfer_sui(self, recipient: SuiAddress, amount: Optional[int]) -> None:
        """Send ``amount`` split from gas, or the whole gas coin when None."""
        rec_arg = self.pure(recipient)
        coin_arg: Argument
        if amount is None:
            coin_arg = GasCoin()
        else:
            amt_arg = self.pure(amount)
            coin_arg = self.command(SplitCoins(GasCoin(), [amt_arg]))
        self.command(TransferObjects([coin_arg], rec_arg))

    def move_call(
        self,
        package_id: SuiAddress,
        module: str,
        function: str,
        type_arguments: Sequence[bytes],
        call_args: Iterable[CallArg],
    ) -> None:
        arguments = [self.input(arg) for arg in call_args]
        self.command(
            ProgrammableMoveCall(
                package=package_id,
                module=module,
                function=function,
                type_arguments=list(type_arguments),
                arguments=arguments,
            )
        )

    def pay_sui(self, recipients: Sequence[SuiAddress], amounts: Sequence[int]) -> None:
        self.pay_mul_internal(recipients, amounts, GasCoin())

    def pay_all_sui(self, recipient: SuiAddress) -> None:
        rec_arg = self.pure(recipient)
        self.command(TransferObjects([GasCoin()], rec_arg))

    def pay(
        self,
        coins: Sequence[ObjectRef],
        recipients: Sequence[SuiAddress],
        amounts: Sequence[int],
    ) -> None:
        """Merge ``coins`` into the first one and pay from it."""
        if not coins:
            raise BuilderError("coins is empty")
        first, *rest = coins
        coin_arg = self.obj(ImmOrOwnedObject(first))
        merge_args = [self.obj(ImmOrOwnedObject(ref)) for ref in rest]
        if merge_args:
            self.command(MergeCoins(coin_arg, merge_args))
        self.pay_mul_internal(recipients, amounts, coin_arg)

    def pay_mul_internal(
        self,
        recipients: Sequence[SuiAddress],
        amounts: Sequence[int],
        coin: Argument,
    ) -> None:
        """Split ``coin`` by amounts and send each recipient its parts together."""
        if len(recipients) != len(amounts):
            raise BuilderError(
                f"recipients and amounts mismatch. Got {len(recipients)} recipients "
                f"but {len(amounts)} amounts"
            )
        if not amounts:
            return
        amt_args = []
        by_recipient: dict[SuiAddress, list[int]] = {}
        for i, (recipient, amount) in enumerate(zip(recipients, amounts)):
            amt_args.append(self.pure(amount))
            by_recipient.setdefault(recipient, []).append(i)
        split = self.command(SplitCoins(coin, amt_args))
        if not isinstance(split, Result):
            raise BuilderError("self.command should always give a Argument::Result")
        for recipient, indices in by_recipient.items():
            rec_arg = self.pure(recipient)
            parts = [NestedResult(split.index, j) for j in indices]
            self.command(TransferObjects(parts, rec_arg))