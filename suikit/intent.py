"""Intent wrapping for signed messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from .bcs import BcsWriter
from .messages import TransactionData, encode_transaction_data


class IntentScope(enum.IntEnum):
    TRANSACTION_DATA = 0
    TRANSACTION_EFFECTS = 1
    CHECKPOINT_SUMMARY = 2
    PERSONAL_MESSAGE = 3
    SENDER_SIGNED_TRANSACTION = 4
    PROOF_OF_POSSESSION = 5
    HEADER_DIGEST = 6


class IntentVersion(enum.IntEnum):
    V0 = 0


class AppId(enum.IntEnum):
    SUI = 0
    NARWHAL = 1


@dataclass(frozen=True)
class Intent:
    scope: IntentScope = IntentScope.TRANSACTION_DATA
    version: IntentVersion = IntentVersion.V0
    app_id: AppId = AppId.SUI

    def to_bytes(self) -> bytes:
        return bytes([self.scope, self.version, self.app_id])


def default_intent() -> Intent:
    return Intent(IntentScope.TRANSACTION_DATA, IntentVersion.V0, AppId.SUI)


@dataclass
class IntentMessage:
    value: Union[TransactionData, bytes]
    intent: Intent = field(default_factory=default_intent)

    def to_bytes(self) -> bytes:
        if isinstance(self.value, TransactionData):
            return self.intent.to_bytes() + encode_transaction_data(self.value)
        w = BcsWriter()
        w.write_fixed(self.intent.to_bytes())
        w.write_bytes(bytes(self.value))
        return w.getvalue()