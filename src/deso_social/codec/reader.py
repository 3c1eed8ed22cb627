"""
Binary Reader for the DeSo wire format.

Mirror of BinaryWriter; used to decode backend-constructed transactions
before they are signed.
"""

import builtins

from ..runtime.errors import EncodingError, ErrorCode


# Longest ULEB128 encoding of a 64-bit value.
MAX_UVARINT_LEN = 10


class BinaryReader:
    """
    Cursor over an immutable byte buffer.

    Reads past the end raise EncodingError rather than returning short data.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True once every byte has been consumed."""
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        if self._off >= len(self._buf):
            raise EncodingError("Buffer overflow: attempting to read beyond end", ErrorCode.INVALID_BINARY)
        val = self._buf[self._off]
        self._off += 1
        return val

    def boolean(self) -> bool:
        """Read a single-byte boolean."""
        return self.u8() != 0

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value

        Raises:
            EncodingError: If the varint is truncated or overflows 64 bits
        """
        x = 0
        s = 0
        for i in range(MAX_UVARINT_LEN):
            b = self.u8()
            if b < 0x80:
                if i == MAX_UVARINT_LEN - 1 and b > 1:
                    raise EncodingError("uvarint overflows 64 bits", ErrorCode.INVALID_BINARY)
                x |= b << s
                break
            x |= (b & 0x7F) << s
            s += 7
        else:
            raise EncodingError("uvarint overflows 64 bits", ErrorCode.INVALID_BINARY)
        return x

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        if self._off + n > len(self._buf):
            raise EncodingError(
                f"Buffer overflow: attempting to read {n} bytes beyond end",
                ErrorCode.INVALID_BINARY,
            )
        out = builtins.bytes(self._buf[self._off : self._off + n])
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        """
        Read bytes with length prefix using uvarint.

        Returns:
            Bytes with length read from uvarint prefix
        """
        n = self.uvarint()
        return self.bytes(n)
