"""
Secp256k1 signer for DeSo identities.

Signs the double SHA-256 of the unsigned transaction with a deterministic,
low-S ECDSA signature in DER form.
"""

from typing import Union

from ..crypto.keys import compressed_bytes_to_public_key
from ..crypto.secp256k1 import Secp256k1PrivateKey
from ..runtime.errors import SigningError
from .signer import Signer


class Secp256k1Signer(Signer):
    """Signer backed by a local secp256k1 private key."""

    def __init__(self, private_key: Union[Secp256k1PrivateKey, str, bytes], network: str = "mainnet"):
        """
        Initialize the signer.

        Args:
            private_key: Key object, 32 raw bytes, or 64-char hex seed
            network: Network used when rendering the base58 public key
        """
        if isinstance(private_key, str):
            private_key = Secp256k1PrivateKey.from_hex(private_key)
        elif isinstance(private_key, bytes):
            private_key = Secp256k1PrivateKey(private_key)
        self.private_key = private_key
        self.network = network

    def get_public_key(self) -> bytes:
        return self.private_key.public_key().to_bytes()

    @property
    def public_key_base58(self) -> str:
        return compressed_bytes_to_public_key(self.get_public_key(), self.network)

    def sign(self, digest: bytes) -> bytes:
        if len(digest) != 32:
            raise SigningError(f"Digest must be 32 bytes, got {len(digest)}")
        return self.private_key.sign_digest(digest)

    def verify(self, signature: bytes, digest: bytes) -> bool:
        """Verify a signature against a digest."""
        return self.private_key.public_key().verify_digest(signature, digest)
