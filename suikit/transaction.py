"""Constructors for programmable transaction data."""

from __future__ import annotations

from collections.abc import Sequence

from .base_types import (
    SUI_SYSTEM_STATE_OBJECT_ID,
    SUI_SYSTEM_STATE_OBJECT_SHARED_VERSION,
    ObjectRef,
    SuiAddress,
)
from .messages import (
    GasData,
    ObjectCallArg,
    ProgrammableTransaction,
    SharedObject,
    TransactionData,
    TransactionDataV1,
)

SUI_SYSTEM_MUT_OBJ = SharedObject(
    id=SUI_SYSTEM_STATE_OBJECT_ID,
    initial_shared_version=SUI_SYSTEM_STATE_OBJECT_SHARED_VERSION,
    mutable=True,
)
SUI_SYSTEM_MUT = ObjectCallArg(SUI_SYSTEM_MUT_OBJ)


def new_programmable_allow_sponsor(
    sender: SuiAddress,
    gas_payment: Sequence[ObjectRef],
    pt: ProgrammableTransaction,
    gas_budget: int,
    gas_price: int,
    sponsor: SuiAddress,
) -> TransactionData:
    """Build transaction data whose gas is owned by ``sponsor``."""
    return TransactionData(
        TransactionDataV1(
            kind=pt,
            sender=sender,
            gas_data=GasData(
                payment=list(gas_payment),
                owner=sponsor,
                price=gas_price,
                budget=gas_budget,
            ),
            expiration=None,
        )
    )


def new_programmable(
    sender: SuiAddress,
    gas_payment: Sequence[ObjectRef],
    pt: ProgrammableTransaction,
    gas_budget: int,
    gas_price: int,
) -> TransactionData:
    """Build transaction data whose gas is paid by the sender."""
    return new_programmable_allow_sponsor(sender, gas_payment, pt, gas_budget, gas_price, sender)