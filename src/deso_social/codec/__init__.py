"""
DeSo Binary Codec Module

Primitive encoding/decoding shared by metadata records and balance-model
transactions.

Key components:
- writer.py: Binary writer with uvarint, boolean and length-prefixed encoders
- reader.py: Binary reader with the matching decoders
- hashes.py: SHA-256 and double SHA-256 helpers
"""

from .hashes import sha256_bytes, sha256d, hex_to_bytes
from .reader import BinaryReader
from .writer import BinaryWriter, uvarint_to_bytes

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "uvarint_to_bytes",
    "sha256_bytes",
    "sha256d",
    "hex_to_bytes",
]
