"""
Cryptographic primitives for DeSo identities.
"""

from .secp256k1 import Secp256k1PrivateKey, Secp256k1PublicKey, compress_public_key
from .keys import (
    base58check_decode,
    base58check_encode,
    public_key_to_compressed_bytes,
    compressed_bytes_to_public_key,
    MAINNET_PUBLIC_KEY_PREFIX,
    TESTNET_PUBLIC_KEY_PREFIX,
)

__all__ = [
    "Secp256k1PrivateKey",
    "Secp256k1PublicKey",
    "compress_public_key",
    "base58check_decode",
    "base58check_encode",
    "public_key_to_compressed_bytes",
    "compressed_bytes_to_public_key",
    "MAINNET_PUBLIC_KEY_PREFIX",
    "TESTNET_PUBLIC_KEY_PREFIX",
]
