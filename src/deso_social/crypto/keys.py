"""
Base58Check public keys.

A DeSo public key string is Base58Check(prefix || compressed_key) where the
3-byte prefix identifies the network and the checksum is the first four
bytes of the double SHA-256 of the payload.
"""

from __future__ import annotations

from ..codec.hashes import sha256d
from ..runtime.errors import EncodingError, ErrorCode
from .secp256k1 import COMPRESSED_PUBLIC_KEY_LENGTH, compress_public_key

MAINNET_PUBLIC_KEY_PREFIX = bytes([0xCD, 0x14, 0x00])  # BC1YL...
TESTNET_PUBLIC_KEY_PREFIX = bytes([0x11, 0xC2, 0x00])  # tBC...

NETWORK_PREFIXES = {
    "mainnet": MAINNET_PUBLIC_KEY_PREFIX,
    "testnet": TESTNET_PUBLIC_KEY_PREFIX,
}

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {c: i for i, c in enumerate(_B58_ALPHABET)}


def base58_encode(payload: bytes) -> str:
    """Encode raw bytes to Base58 (no checksum)."""
    n = int.from_bytes(payload, "big")
    out = []
    while n > 0:
        n, remainder = divmod(n, 58)
        out.append(_B58_ALPHABET[remainder])
    # Leading zero bytes become leading '1's
    for byte in payload:
        if byte != 0:
            break
        out.append(_B58_ALPHABET[0])
    return "".join(reversed(out))


def base58_decode(s: str) -> bytes:
    """Decode Base58 string to raw bytes (no checksum)."""
    n = 0
    for char in s:
        try:
            n = n * 58 + _B58_INDEX[char]
        except KeyError:
            raise EncodingError(f"Invalid base58 character {char!r}", ErrorCode.INVALID_PUBLIC_KEY)
    result = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    pad = len(s) - len(s.lstrip("1"))
    return b"\x00" * pad + result


def base58check_encode(payload: bytes) -> str:
    """Encode bytes with a 4-byte SHA256d checksum (Base58Check)."""
    return base58_encode(payload + sha256d(payload)[:4])


def base58check_decode(s: str) -> bytes:
    """
    Decode a Base58Check string, verifying the checksum.

    Raises:
        EncodingError: If the string is too short or the checksum is wrong.
    """
    raw = base58_decode(s)
    if len(raw) < 4:
        raise EncodingError("Base58Check string too short", ErrorCode.INVALID_PUBLIC_KEY)
    payload, checksum = raw[:-4], raw[-4:]
    if sha256d(payload)[:4] != checksum:
        raise EncodingError("Base58Check checksum mismatch", ErrorCode.INVALID_PUBLIC_KEY)
    return payload


def public_key_to_compressed_bytes(public_key_base58: str) -> bytes:
    """
    Decode a base58check public key into its 33-byte compressed form.

    The network prefix is stripped and not checked against a particular
    network, so mainnet and testnet keys are both accepted.

    Args:
        public_key_base58: Public key string, e.g. "BC1YL..."

    Returns:
        33-byte SEC compressed public key

    Raises:
        EncodingError: If the string is empty, malformed, or not a curve point
    """
    if not public_key_base58:
        raise EncodingError("Public key is empty", ErrorCode.INVALID_PUBLIC_KEY)
    payload = base58check_decode(public_key_base58)
    if len(payload) != 3 + COMPRESSED_PUBLIC_KEY_LENGTH:
        raise EncodingError(
            f"Invalid public key payload length: {len(payload)}",
            ErrorCode.INVALID_PUBLIC_KEY,
            details={"public_key": public_key_base58},
        )
    return compress_public_key(payload[3:])


def compressed_bytes_to_public_key(public_key: bytes, network: str = "mainnet") -> str:
    """Encode a compressed public key as a base58check string for `network`."""
    try:
        prefix = NETWORK_PREFIXES[network]
    except KeyError:
        raise EncodingError(f"Unknown network {network!r}")
    return base58check_encode(prefix + compress_public_key(public_key))
