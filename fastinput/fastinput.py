"""fastinput reads known-correct, line oriented input quickly via the FastInput class.

The whole source is loaded once; lines and space separated tokens are then handed out in order and decoded
into the requested types on demand. Aimed at competitive programming style input where malformed input is a
fatal condition rather than something to recover from.
"""

import sys
import warnings
from typing import Any, Iterator, Tuple

from .fastparse import DecodeFailure, decode
from .store import BUFFER_SIZE, ByteStore

# Unicode White_Space; str.strip() would also remove the U+001C..U+001F separators
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class FastInputException(Exception):
    """Exception raised when FastInput cannot satisfy a read."""

    def __init__(self, msg: str) -> None:
        """Initialize FastInputException with an error message.

        Args:
            msg: The error message
        """
        super().__init__(msg)
        self._msg: str = msg

    def __str__(self) -> str:
        """Return the error message."""
        return self._msg



class ExhaustedError(FastInputException, EOFError):
    """A line was requested after all input was consumed."""


class ArityError(FastInputException, ValueError):
    """A line held fewer tokens than the read required."""


class DecodeError(FastInputException, ValueError):
    """A token, or the line bytes themselves, could not be decoded."""


class SourceError(FastInputException):
    """The byte source failed while it was being read."""


def split_tokens(line: str) -> Iterator[str]:
    """Lazily split `line` on single spaces, keeping empty tokens between repeated spaces.

    Examples:
        >>> list(split_tokens("a  b"))
        ['a', '', 'b']
        >>> list(split_tokens(""))
        ['']
    """
    start = 0
    while True:
        end = line.find(" ", start)
        if end < 0:
            yield line[start:]
            return
        yield line[start:end]
        start = end + 1


class FastInput:
    """Reads all input up front and parses lines and tokens from it on demand.

    Every read consumes whole lines: `next_line` returns the raw text, `next_split` its tokens, and the typed
    readers decode tokens into the types passed in. Types are anything `fastparse.decode` understands: `int`,
    `float`, `bool`, `str`, `Str`, the fixed-width markers such as `u32` or `i64`, `FastParse` subclasses, or
    types with a registered parser. Only `\\n` line endings are recognised.

    Reads raise a `FastInputException` subclass when the input does not match what was asked for:
        ExhaustedError: no line is left to read; check `has_more()` first
        ArityError: the line has fewer tokens than requested
        DecodeError: a token is not valid for its type
        SourceError: the source failed while being loaded

    Example:
        >>> reader = FastInput.with_reader(b"1 2\\n3 4")
        >>> reader.next_tuple(int, int)
        (1, 2)
        >>> reader.next_tuple(int, int)
        (3, 4)
        >>> reader.has_more()
        False
    """

    def __init__(self, source=None, buffer_size=BUFFER_SIZE, strict_utf8=False):
        """Load the whole source; blocks until it reports end of data.

        Args:
            source: Byte source to read; standard input when None. (default: None)
            buffer_size (int): Initial capacity of the input buffer (default: 8196)
            strict_utf8 (bool): Raise DecodeError on invalid UTF-8 instead of substituting U+FFFD (default: False)
        """
        if source is None:
            source = sys.stdin
        try:
            self._store = ByteStore(source, buffer_size=buffer_size)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Failed to read input: {e}") from e
        self._errors = "strict" if strict_utf8 else "replace"

    @classmethod
    def with_buffer_size(cls, buffer_size, **kwargs):
        """Read standard input using an initial buffer of `buffer_size` bytes."""
        return cls(None, buffer_size=buffer_size, **kwargs)

    @classmethod
    def with_reader(cls, reader, **kwargs):
        """Read from `reader`: a bytes-like object, str, or file-like object."""
        return cls(reader, **kwargs)

    def has_more(self) -> bool:
        """Checks whether any unread data remains; trailing bytes without a newline still count."""
        return self._store.has_more()

    # alias kept from the original API
    has_next_line = has_more

    def next_line(self) -> str:
        """Reads the next line and returns it without its newline.

        Raises:
            ExhaustedError: If there is no more data. See `has_more`.
            DecodeError: If the line is not valid UTF-8 and `strict_utf8` is set.
        """
        if not self._store.has_more():
            raise ExhaustedError(f"No more lines: all {len(self._store)} bytes of input were consumed")
        newline = self._store.find_newline()
        if newline is None:
            raw = self._store.take(len(self._store))
        else:
            raw = self._store.take(newline)
            self._store.skip(1)
        try:
            return str(raw, "utf-8", self._errors)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Line is not valid UTF-8: {e}") from e

    def lines(self) -> Iterator[str]:
        """Yields the remaining lines until the input is exhausted."""
        while self.has_more():
            yield self.next_line()

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def next_split(self) -> Iterator[str]:
        """Reads the next line and returns a lazy iterator over its space separated tokens.

        The line is trimmed of Unicode whitespace first and then split on every single space, so repeated spaces produce empty
        tokens and an empty line produces one empty token.

        Raises:
            ExhaustedError: If there is no more data. See `has_more`.
        """
        return split_tokens(self.next_line().strip(WHITESPACE))

    def next_as_iter(self, type_) -> Iterator[Any]:
        """Reads the next line and returns a lazy iterator of its tokens decoded as `type_`.

        Example:
            >>> FastInput.with_reader(b"1 2 3").next_as_iter(int)  # doctest: +ELLIPSIS
            <generator object ...>

        Raises:
            ExhaustedError: If there is no more data. See `has_more`.
            DecodeError: While iterating, if a token is not a valid `type_`.
        """
        return self._decode_each(type_, self.next_split())

    def next(self, type_) -> Any:
        """Reads a line and returns its first token decoded as `type_`.

        Raises:
            ExhaustedError: If there is no more data. See `has_more`.
            ArityError: If the line has no token.
            DecodeError: If the token is not a valid `type_`.
        """
        return self.next_group(type_)[0]

    def next_group(self, *types) -> Tuple[Any, ...]:
        """Reads a line and decodes its first `len(types)` tokens positionally; extra tokens are ignored.

        Raises:
            ExhaustedError: If there is no more data. See `has_more`.
            ArityError: If the line has fewer tokens than types.
            DecodeError: If a token is not valid for its type.
        """
        tokens = self.next_split()
        values = []
        for position, type_ in enumerate(types):
            token = next(tokens, None)
            if token is None:
                raise ArityError(f"Expected {len(types)} tokens on the line but found only {position}")
            values.append(self._decode(type_, token))
        return tuple(values)

    def next_tuple(self, t1, t2) -> Tuple[Any, Any]:
        """Reads two space separated elements and returns them decoded as a pair.

        Example:
            >>> FastInput.with_reader(b"21 1.85").next_tuple(int, float)
            (21, 1.85)
        """
        return self.next_group(t1, t2)

    def next_triple(self, t1, t2, t3) -> Tuple[Any, Any, Any]:
        """Reads three space separated elements and returns them decoded as a triple."""
        return self.next_group(t1, t2, t3)

    def next_quad(self, t1, t2, t3, t4) -> Tuple[Any, Any, Any, Any]:
        """Reads four space separated elements and returns them decoded as a quad."""
        return self.next_group(t1, t2, t3, t4)

    def next_quintuple(self, t1, t2, t3, t4, t5) -> Tuple[Any, Any, Any, Any, Any]:
        """Reads five space separated elements and returns them decoded as a quintuple."""
        return self.next_group(t1, t2, t3, t4, t5)

    def next_str_tuple(self) -> Tuple[str, str]:
        """Returns the next line as a pair of strings.

        Deprecated: use `next_tuple(Str, Str)`.
        """
        warnings.warn("next_str_tuple is deprecated, use next_tuple(Str, Str)", DeprecationWarning, stacklevel=2)
        return self.next_group(str, str)

    def next_str_triple(self) -> Tuple[str, str, str]:
        """Returns the next line as a triple of strings.

        Deprecated: use `next_triple(Str, Str, Str)`.
        """
        warnings.warn(
            "next_str_triple is deprecated, use next_triple(Str, Str, Str)", DeprecationWarning, stacklevel=2
        )
        return self.next_group(str, str, str)

    def _decode(self, type_, token):
        try:
            return decode(type_, token)
        except DecodeFailure as e:
            raise DecodeError(str(e)) from e

    def _decode_each(self, type_, tokens):
        for token in tokens:
            yield self._decode(type_, token)

    def close(self) -> None:
        """Exhausts the reader and releases its buffer; every later read raises ExhaustedError."""
        self._store.release()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures close() is always called"""
        self.close()
        return False
