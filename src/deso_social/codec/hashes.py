"""
Hash and hex helpers for transaction encoding.

Transactions are identified and signed over the double SHA-256 of their
signature-less encoding.
"""

import hashlib
from typing import Optional

from ..runtime.errors import EncodingError, ErrorCode


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def sha256d(input_bytes: bytes) -> bytes:
    """Double SHA-256, used for transaction hashes and base58 checksums."""
    return sha256_bytes(sha256_bytes(input_bytes))


def hex_to_bytes(hex_str: Optional[str], field: str = "value") -> bytes:
    """
    Decode a hex string; None and "" decode to b"".

    Args:
        hex_str: Hex string without 0x prefix
        field: Field name used in the error message

    Returns:
        Decoded bytes

    Raises:
        EncodingError: If the string is not valid hex
    """
    if not hex_str:
        return b""
    try:
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise EncodingError(
            f"Invalid hex string for {field}",
            ErrorCode.INVALID_HEX,
            details={"field": field},
            cause=e,
        )
