"""
Byte scanning over a pinned buffer using memchr through cffi.
"""

from typing import Optional

from .memchr_cffi import ffi, libc


class ByteScanner:
    """
    Pins a bytes-like object and searches it for single bytes without copying.
    """

    def __init__(self, data: bytes) -> None:
        """
        Args:
            data: Buffer to scan. It must stay unmodified while the scanner is open.
        """
        self._length = len(data)
        self._pin = ffi.from_buffer(data) if self._length else None  # keeps the buffer alive
        self._base = ffi.cast("char *", self._pin) if self._pin is not None else None

    def find(self, byte: int, start: int = 0) -> Optional[int]:
        """Return the offset of the first `byte` at or after `start`, or None.

        Examples:
            >>> ByteScanner(b"ab\\ncd").find(ord("\\n"))
            2
            >>> ByteScanner(b"abcd").find(ord("\\n")) is None
            True
        """
        if self._base is None or start >= self._length:
            return None
        hit = libc.memchr(self._base + start, byte, self._length - start)
        if hit == ffi.NULL:
            return None
        return ffi.cast("char *", hit) - self._base

    def close(self) -> None:
        """Drop the buffer pin."""
        self._base = None
        self._pin = None
        self._length = 0

    def __len__(self) -> int:
        return self._length
