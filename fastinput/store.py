"""
ByteStore: the immutable byte buffer behind a reader.

Loads a byte source completely and keeps a cursor that only moves forward,
handing out views over the consumed ranges.
"""

import logging
from typing import Any, Optional

from .libc.scan import ByteScanner

logger = logging.getLogger(__name__)

BUFFER_SIZE = 8196
NEWLINE = ord("\n")


class ByteStore:
    """
    Owns the full input as `bytes` together with a forward-only read cursor.
    Reading never removes data; it only advances the cursor.
    """

    def __init__(self, source: Any, buffer_size: int = BUFFER_SIZE) -> None:
        """Load `source` to exhaustion.

        Args:
            source: bytes-like object, str, or a file-like object (binary, or text read through its text layer)
            buffer_size: Initial capacity of the load buffer and size of each read (default: 8196)

        Raises:
            ValueError: If buffer_size is not a positive integer
            OSError: Propagated from the source; FastInput wraps it as SourceError
            UnicodeDecodeError: Propagated from a text stream that cannot decode its input
        """
        if not isinstance(buffer_size, int) or buffer_size <= 0:
            raise ValueError(f"buffer_size must be a positive integer, got {buffer_size!r}")
        self._data: bytes = read_to_end(source, buffer_size)
        self._cursor: int = 0
        self._view = memoryview(self._data)
        self._scanner = ByteScanner(self._data)
        logger.debug("Loaded %d bytes (buffer_size=%d)", len(self._data), buffer_size)

    @property
    def cursor(self) -> int:
        return self._cursor

    def has_more(self) -> bool:
        """True until the cursor reaches the end of the data."""
        return self._cursor != len(self._data)

    def find_newline(self) -> Optional[int]:
        """Offset of the next newline at or after the cursor, or None."""
        return self._scanner.find(NEWLINE, self._cursor)

    def take(self, end: int) -> memoryview:
        """Return a view over [cursor, end) and move the cursor to `end`.

        Examples:
            >>> store = ByteStore(b"hello world")
            >>> bytes(store.take(5))
            b'hello'
            >>> store.cursor
            5
        """
        if end < self._cursor or end > len(self._data):
            raise ValueError(f"cannot take up to {end} from cursor {self._cursor} of {len(self._data)}")
        view = self._view[self._cursor:end]
        self._cursor = end
        return view

    def skip(self, n: int) -> None:
        """Advance the cursor by `n` bytes."""
        if n < 0 or self._cursor + n > len(self._data):
            raise ValueError(f"cannot skip {n} bytes from cursor {self._cursor} of {len(self._data)}")
        self._cursor += n

    def release(self) -> None:
        """Exhaust the store and drop the scanner's buffer pin."""
        self._cursor = len(self._data)
        self._scanner.close()

    def __len__(self) -> int:
        """Return the total number of bytes loaded."""
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data


def read_to_end(source: Any, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read every byte `source` produces and return them as immutable bytes.

    Examples:
        >>> read_to_end(b"1 2\\n3 4")
        b'1 2\\n3 4'
        >>> read_to_end("héllo")
        b'h\\xc3\\xa9llo'
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, str):
        return source.encode("utf-8")

    # text streams such as sys.stdin go through their text layer, which may already hold read-ahead data
    if hasattr(source, "readinto"):
        return _readinto_to_end(source, buffer_size)
    return _read_to_end(source, buffer_size)


def _readinto_to_end(raw: Any, buffer_size: int) -> bytes:
    buf = bytearray(buffer_size)
    size = 0
    while True:
        if size == len(buf):
            buf.extend(bytes(len(buf)))
        with memoryview(buf)[size:] as window:
            n = raw.readinto(window)
        if not n:
            break
        size += n
    del buf[size:]
    return bytes(buf)


def _read_to_end(raw: Any, buffer_size: int) -> bytes:
    buf = bytearray()
    while True:
        chunk = raw.read(buffer_size)
        if not chunk:
            break
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        buf += chunk
    return bytes(buf)
