"""
Test the balance-model transaction encoding.
"""

import pytest

from deso_social.codec import sha256d
from deso_social.enums import TransactionType
from deso_social.runtime.errors import EncodingError
from deso_social.tx.extra_data import ExtraDataKV
from deso_social.tx.transaction import Transaction, TransactionNonce, TransactionOutput

from helpers import assert_hex_equal, mk_compressed_key, mk_signer


def _tiny() -> Transaction:
    return Transaction(txn_type=int(TransactionType.FOLLOW), metadata=b"\x01", public_key=b"\xaa")


def test_minimal_transaction_layout():
    # inputs outputs type metadata pubkey extra sig version fee nonce(height, id)
    assert_hex_equal(_tiny().to_bytes(), "00 00 09 0101 01aa 00 00 01 00 00 00", "minimal transaction")


def test_full_transaction_round_trip():
    tx = Transaction(
        txn_type=int(TransactionType.SUBMIT_POST),
        metadata=b"\x00\x00\x02{}",
        public_key=mk_compressed_key(1),
        outputs=(TransactionOutput(mk_compressed_key(2), 5000),),
        extra_data=(ExtraDataKV(b"b", b"2"), ExtraDataKV(b"a", b"1")),
        signature=b"\x30\x06\x02\x01\x01\x02\x01\x01",
        fee_nanos=168,
        nonce=TransactionNonce(expiration_block_height=250275, partial_id=42),
    )
    decoded = Transaction.from_hex(tx.to_hex())
    assert decoded.to_bytes() == tx.to_bytes()
    assert decoded.outputs == tx.outputs
    assert decoded.nonce == tx.nonce
    # extra data comes back in wire order
    assert [kv.key for kv in decoded.extra_data] == [b"a", b"b"]


def test_extra_data_is_sorted_stably_by_key():
    tx = Transaction(
        txn_type=9, metadata=b"", public_key=b"",
        extra_data=(ExtraDataKV(b"z", b"1"), ExtraDataKV(b"a", b"2"), ExtraDataKV(b"z", b"0")),
    )
    decoded = Transaction.from_bytes(tx.to_bytes())
    assert decoded.extra_data == (ExtraDataKV(b"a", b"2"), ExtraDataKV(b"z", b"1"), ExtraDataKV(b"z", b"0"))


def test_signing_digest_ignores_signature():
    tx = _tiny()
    signed = tx.with_signature(b"\x30\x00")
    assert signed.signing_digest() == tx.signing_digest() == sha256d(tx.to_bytes())
    assert signed.hash_hex == tx.signing_digest().hex()
    assert signed.to_bytes() != tx.to_bytes()


def test_signer_signs_transaction():
    signer = mk_signer(1)
    tx = _tiny()
    signed = signer.sign_transaction(tx)
    assert signer.verify(signed.signature, tx.signing_digest())
    assert signer.sign_transaction_hex(tx.to_hex()) == signed.to_hex()


def test_decode_rejects_malformed_input():
    data = _tiny().to_bytes()
    with pytest.raises(EncodingError):
        Transaction.from_bytes(data + b"\x00")
    with pytest.raises(EncodingError):
        Transaction.from_bytes(data[:-3])
    with pytest.raises(EncodingError):
        Transaction.from_bytes(b"\x01" + data[1:])
    with pytest.raises(EncodingError):
        Transaction.from_hex("xyz")


def test_decode_rejects_unknown_version():
    tx = Transaction(txn_type=9, metadata=b"", public_key=b"", version=0)
    with pytest.raises(EncodingError):
        Transaction.from_bytes(tx.to_bytes())
