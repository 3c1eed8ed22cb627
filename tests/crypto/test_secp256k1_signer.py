"""
Test secp256k1 signing.

DeSo validators accept deterministic, low-S DER signatures over the double
SHA-256 of the unsigned transaction.
"""

import pytest
from ecdsa import SECP256k1
from ecdsa.util import sigdecode_der

from deso_social.codec import sha256d
from deso_social.crypto.secp256k1 import Secp256k1PrivateKey
from deso_social.runtime.errors import EncodingError, SigningError
from deso_social.signers import Secp256k1Signer

from helpers import mk_private_key, mk_public_key, mk_signer


def test_signature_verifies_and_is_deterministic():
    signer = mk_signer(11)
    digest = sha256d(b"follow")

    first = signer.sign(digest)
    second = signer.sign(digest)

    assert first == second
    assert signer.verify(first, digest)
    assert not signer.verify(first, sha256d(b"unfollow"))


def test_signature_is_low_s():
    signer = mk_signer(12)
    for i in range(8):
        _, s = sigdecode_der(signer.sign(sha256d(bytes([i]))), SECP256k1.order)
        assert s <= SECP256k1.order // 2


def test_signer_rejects_wrong_digest_length():
    with pytest.raises(SigningError):
        mk_signer(1).sign(b"\x00" * 31)


def test_signer_accepts_hex_bytes_and_key():
    key = mk_private_key(5)
    from_hex = Secp256k1Signer(key.to_bytes().hex())
    from_bytes = Secp256k1Signer(key.to_bytes())
    from_key = Secp256k1Signer(key)

    assert from_hex.get_public_key() == from_bytes.get_public_key() == from_key.get_public_key()
    assert from_key.public_key_base58 == mk_public_key(5)
    assert Secp256k1Signer(key, network="testnet").public_key_base58 == mk_public_key(5, "testnet")


def test_private_key_validation():
    with pytest.raises(EncodingError):
        Secp256k1PrivateKey(b"\x01" * 31)
    with pytest.raises(EncodingError):
        Secp256k1PrivateKey.from_hex("not-hex")
