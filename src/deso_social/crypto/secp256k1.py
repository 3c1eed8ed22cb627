"""
SECP256K1 key operations for DeSo.

DeSo identities are secp256k1 keys. The ledger stores public keys in SEC
compressed form (33 bytes) and expects low-S DER signatures over the double
SHA-256 of the unsigned transaction.
"""

from __future__ import annotations
import hashlib
import os
from typing import Optional

from ecdsa import BadSignatureError, MalformedPointError, SECP256k1, SigningKey, VerifyingKey
from ecdsa.util import sigdecode_der, sigencode_der_canonize

from ..runtime.errors import EncodingError, ErrorCode

COMPRESSED_PUBLIC_KEY_LENGTH = 33


class Secp256k1PublicKey:
    """SECP256K1 public key for verification."""

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize public key.

        Args:
            public_key_bytes: SEC encoded public key (33 or 65 bytes)

        Raises:
            EncodingError: If the bytes are not a point on the curve
        """
        try:
            self._vk = VerifyingKey.from_string(public_key_bytes, curve=SECP256k1)
        except (MalformedPointError, ValueError) as e:
            raise EncodingError(
                "Public key is not a valid secp256k1 point",
                ErrorCode.INVALID_PUBLIC_KEY,
                cause=e,
            )

    def to_bytes(self) -> bytes:
        """Get the 33-byte compressed encoding."""
        return self._vk.to_string("compressed")

    def to_uncompressed_bytes(self) -> bytes:
        """Get the 65-byte uncompressed encoding (0x04 || X || Y)."""
        return self._vk.to_string("uncompressed")

    def verify_digest(self, signature: bytes, digest: bytes) -> bool:
        """
        Verify a DER signature over a 32-byte digest.

        Args:
            signature: DER-encoded signature
            digest: 32-byte digest that was signed

        Returns:
            True if signature is valid
        """
        try:
            return self._vk.verify_digest(signature, digest, sigdecode=sigdecode_der)
        except BadSignatureError:
            return False


class Secp256k1PrivateKey:
    """
    SECP256K1 private key.

    Signing is deterministic (RFC 6979) and canonical (low-S), which is what
    DeSo validators accept.
    """

    def __init__(self, private_key_bytes: Optional[bytes] = None):
        """
        Initialize private key.

        Args:
            private_key_bytes: 32-byte private key; random when omitted
        """
        if private_key_bytes is None:
            private_key_bytes = os.urandom(32)
        if len(private_key_bytes) != 32:
            raise EncodingError(f"Private key must be 32 bytes, got {len(private_key_bytes)}")
        self._sk = SigningKey.from_string(private_key_bytes, curve=SECP256k1)

    @classmethod
    def from_hex(cls, private_key_hex: str) -> Secp256k1PrivateKey:
        """Create key from private key hex string."""
        try:
            private_key_bytes = bytes.fromhex(private_key_hex)
        except ValueError as e:
            raise EncodingError("Invalid private key hex", ErrorCode.INVALID_HEX, cause=e)
        return cls(private_key_bytes)

    def public_key(self) -> Secp256k1PublicKey:
        return Secp256k1PublicKey(self._sk.get_verifying_key().to_string("compressed"))

    def sign_digest(self, digest: bytes) -> bytes:
        """
        Sign a 32-byte digest.

        Args:
            digest: Digest to sign

        Returns:
            Low-S DER-encoded signature
        """
        return self._sk.sign_digest_deterministic(
            digest,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_der_canonize,
        )

    def to_bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._sk.to_string()


def compress_public_key(public_key_bytes: bytes) -> bytes:
    """Validate a SEC encoded key and return its 33-byte compressed form."""
    return Secp256k1PublicKey(public_key_bytes).to_bytes()
