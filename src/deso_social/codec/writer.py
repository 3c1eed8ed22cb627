"""
Binary Writer for the DeSo wire format.

Implements the primitive encodings used by DeSo transactions and metadata
records: single bytes, booleans, unsigned varints (ULEB128, same as Go
binary.PutUvarint) and length-prefixed byte arrays.
"""

from typing import List

from ..runtime.errors import EncodingError, ErrorCode

MAX_UINT64 = 2 ** 64 - 1


class BinaryWriter:
    """
    Append-only byte buffer with DeSo primitive encoders.

    Every method appends to the buffer; `to_bytes()` returns the result.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """
        Write unsigned 8-bit integer.

        Args:
            v: Integer value to write (0-255)
        """
        self._bb.append(v & 0xFF)

    def boolean(self, v: bool) -> None:
        """Write a boolean as a single 0/1 byte."""
        self.u8(1 if v else 0)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with length prefix using uvarint.

        Args:
            v: Bytes to write with length prefix
        """
        self.uvarint(len(v))
        self.bytes(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Unsigned integer value to encode as varint

        Raises:
            EncodingError: If v is negative or does not fit in 64 bits
        """
        if v < 0 or v > MAX_UINT64:
            raise EncodingError(f"uvarint cannot encode {v}: outside 0..2^64-1", ErrorCode.INVALID_BINARY)
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)

    def __len__(self) -> int:
        return len(self._bb)


def uvarint_to_bytes(v: int) -> bytes:
    """Encode a single unsigned varint."""
    w = BinaryWriter()
    w.uvarint(v)
    return w.to_bytes()
