"""
Balance-model DeSo transaction.

Wire layout (version 1):

    inputs            uvarint count, always 0 for balance-model transactions
    outputs           uvarint count, each public_key(33) amount_nanos(uvarint)
    txn_type          uvarint
    metadata          var bytes
    public_key        var bytes (33)
    extra_data        uvarint count, each key(var) value(var), sorted by key
    signature         var bytes (DER, empty while unsigned)
    version           uvarint
    fee_nanos         uvarint
    nonce             expiration_block_height(uvarint) partial_id(uvarint)

The signing digest and the transaction hash are both the double SHA-256 of
the encoding with an empty signature.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Tuple

from ..codec.hashes import sha256d
from ..codec.reader import BinaryReader
from ..codec.writer import BinaryWriter
from ..runtime.errors import EncodingError, ErrorCode
from .extra_data import ExtraDataKV

BALANCE_MODEL_VERSION = 1


@dataclass(frozen=True)
class TransactionOutput:
    public_key: bytes
    amount_nanos: int


@dataclass(frozen=True)
class TransactionNonce:
    expiration_block_height: int = 0
    partial_id: int = 0


@dataclass(frozen=True)
class Transaction:
    """A balance-model transaction. Immutable; use the `with_*` helpers to copy."""
    txn_type: int
    metadata: bytes
    public_key: bytes
    outputs: Tuple[TransactionOutput, ...] = ()
    extra_data: Tuple[ExtraDataKV, ...] = ()
    signature: bytes = b""
    version: int = BALANCE_MODEL_VERSION
    fee_nanos: int = 0
    nonce: TransactionNonce = field(default_factory=TransactionNonce)

    def to_bytes(self, include_signature: bool = True) -> bytes:
        w = BinaryWriter()
        w.uvarint(0)
        w.uvarint(len(self.outputs))
        for out in self.outputs:
            w.bytes(out.public_key)
            w.uvarint(out.amount_nanos)
        w.uvarint(self.txn_type)
        w.len_prefixed_bytes(self.metadata)
        w.len_prefixed_bytes(self.public_key)
        # Stable sort keeps duplicate keys in insertion order
        kvs = sorted(self.extra_data, key=lambda kv: kv.key)
        w.uvarint(len(kvs))
        for kv in kvs:
            w.len_prefixed_bytes(kv.key)
            w.len_prefixed_bytes(kv.value)
        w.len_prefixed_bytes(self.signature if include_signature else b"")
        w.uvarint(self.version)
        w.uvarint(self.fee_nanos)
        w.uvarint(self.nonce.expiration_block_height)
        w.uvarint(self.nonce.partial_id)
        return w.to_bytes()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def signing_digest(self) -> bytes:
        return sha256d(self.to_bytes(include_signature=False))

    @property
    def hash_hex(self) -> str:
        return self.signing_digest().hex()

    def with_signature(self, signature: bytes) -> Transaction:
        return replace(self, signature=signature)

    def with_fee(self, fee_nanos: int) -> Transaction:
        return replace(self, fee_nanos=fee_nanos)

    @classmethod
    def from_bytes(cls, data: bytes) -> Transaction:
        r = BinaryReader(data)
        if r.uvarint() != 0:
            raise EncodingError("UTXO inputs are not supported for balance-model transactions",
                                ErrorCode.INVALID_BINARY)
        outputs: List[TransactionOutput] = []
        for _ in range(r.uvarint()):
            outputs.append(TransactionOutput(public_key=r.bytes(33), amount_nanos=r.uvarint()))
        txn_type = r.uvarint()
        metadata = r.len_prefixed_bytes()
        public_key = r.len_prefixed_bytes()
        extra_data = []
        for _ in range(r.uvarint()):
            key = r.len_prefixed_bytes()
            extra_data.append(ExtraDataKV(key, r.len_prefixed_bytes()))
        signature = r.len_prefixed_bytes()
        version = r.uvarint()
        if version != BALANCE_MODEL_VERSION:
            raise EncodingError(f"Unsupported transaction version {version}", ErrorCode.INVALID_BINARY)
        fee_nanos = r.uvarint()
        nonce = TransactionNonce(expiration_block_height=r.uvarint(), partial_id=r.uvarint())
        if not r.eof:
            raise EncodingError("Trailing bytes after transaction", ErrorCode.INVALID_BINARY)
        return cls(
            txn_type=txn_type,
            metadata=metadata,
            public_key=public_key,
            outputs=tuple(outputs),
            extra_data=tuple(extra_data),
            signature=signature,
            version=version,
            fee_nanos=fee_nanos,
            nonce=nonce,
        )

    @classmethod
    def from_hex(cls, hex_str: str) -> Transaction:
        try:
            data = bytes.fromhex(hex_str)
        except ValueError as e:
            raise EncodingError("Invalid transaction hex", ErrorCode.INVALID_HEX, cause=e)
        return cls.from_bytes(data)


__all__ = [
    "BALANCE_MODEL_VERSION",
    "Transaction",
    "TransactionOutput",
    "TransactionNonce",
]
