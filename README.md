# suikit

A library of Sui blockchain data types and helpers:

- addresses, object IDs, Base58 digests and well-known system identifiers
  (`suikit.base_types`)
- BCS primitives (`suikit.bcs`) and BCS encoding and decoding of
  transaction data (`suikit.messages`)
- intents and Ed25519 signing (`suikit.intent`, `suikit.crypto`)
- a programmable transaction builder (`suikit.builder`, `suikit.transaction`)
- Move resource type strings (`suikit.move`)
- parsing of JSON-RPC responses and building of queries for objects, events,
  transactions and validators (`suikit.common`, `suikit.objects`,
  `suikit.events`, `suikit.transactions`, `suikit.validator`,
  `suikit.rpc_types`)

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Building and encoding a transfer

```python
from suikit.base_types import ObjectRef, new_address_from_hex, new_digest, new_object_id_from_hex
from suikit.builder import ProgrammableTransactionBuilder
from suikit.messages import decode_transaction_data, encode_transaction_data
from suikit.transaction import new_programmable

recipient = new_address_from_hex(
    "0x7e875ea78ee09f08d72e2676cf84e0f1c8ac61d94fa339cc8e37cace85bebc6e"
)
builder = ProgrammableTransactionBuilder()
builder.transfer_sui(recipient, 100000)
pt = builder.finish()

gas = ObjectRef(
    object_id=new_object_id_from_hex(
        "0x13c1c3d0e15b4039cec4291c75b77c972c10c8e8e70ab4ca174cf336917cb4db"
    ),
    version=14924029,
    digest=new_digest("HvbE2UZny6cP4KukaXetmj4jjpKTDTjVo23XEcu7VgSn"),
)
tx = new_programmable(recipient, [gas], pt, 10000000, 1000)
raw = encode_transaction_data(tx)
assert decode_transaction_data(raw) == tx
```

The builder deduplicates inputs: `pure` reuses an identical pure value that
is already present, `force_separate_pure` never does, and `obj` merges
repeated uses of one object. It also offers `transfer_object`,
`move_call`, `make_obj_list`, `pay`, `pay_sui` and `pay_all_sui`.
Building fails with `BuilderError` when arguments do not fit together, for
example when recipients and amounts differ in number or `pay` gets no coins.

Pure values are encoded by `encode_pure`: addresses as 32 raw bytes, ints as
u64, bytes as `vector<u8>`, strings as UTF-8 vectors, lists as vectors and
tuples as structs.

## Signing

```python
from suikit.crypto import SignatureScheme, SuiKeyPair, new_signature_secure
from suikit.intent import IntentMessage

keypair = SuiKeyPair(SignatureScheme.ED25519, bytes(32))
signature = new_signature_secure(IntentMessage(tx), keypair)
print(signature.to_json())   # base64 of flag byte, signature and public key
```

Only the Ed25519 scheme is supported; other schemes raise `ValueError`.
`use_default_hash` gives the Blake2b-256 digest of transaction data prefixed
with its type name.

## Resource types

```python
from suikit.move import new_resource_type

rt = new_resource_type("0x2::coin::Coin<0x2::sui::SUI>")
print(rt.short_string())   # 0x2::coin::Coin<0x2::sui::SUI>
```

`str(rt)` gives the same with full 32-byte addresses. Malformed strings and
bad addresses raise `ValueError`.

## Parsing responses

Response classes offer `from_json` for the decoded JSON of a node reply,
and query and filter classes offer `to_json` for building requests:

```python
from suikit.transactions import SuiTransactionBlockResponse

response = SuiTransactionBlockResponse.from_json(reply["result"])
if response.effects is not None and response.effects.is_success():
    print(response.effects.gas_fee())
```

`suikit.common.ObjectOwner` reads an owner given either as a plain name such
as `"Immutable"` or as an object, and writes it back the same way.
`suikit.rpc_types.is_same_string_address` compares hex addresses ignoring a
`0x` prefix and leading zeros.

## What it does not do

- It does not talk to a node. There is no RPC client; the package only turns
  replies into objects and queries into JSON that you send yourself.
- It does not select coins for a payment. Choosing which coin objects cover an
  amount and the gas budget is left to the caller.
- Decoding transaction data does not support Move call type arguments or
  typed `MakeMoveVec` commands; those raise `BcsError`. Type tags are passed
  to the builder as already-encoded BCS bytes.