"""
Typed decoding of tokens.

`decode(type_, text)` turns one token into a value of the requested type. The
set of supported types is open: register a parser function for any type, or
subclass `FastParse` and implement `fparse`.
"""

import logging
import re
import reprlib
import struct
from abc import ABCMeta, abstractmethod
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

_SIGNED = re.compile(r"[+-]?[0-9]+\Z")
_UNSIGNED = re.compile(r"\+?[0-9]+\Z")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)\Z",
    re.IGNORECASE,
)

_parsers: Dict[type, Callable[[str], Any]] = {}

# tokens are cut down in error messages
_short = reprlib.Repr()
_short.maxstring = 60

# int() refuses longer numerals under the interpreter's int/str digit limit
_DIGIT_CHUNK = 4000


class DecodeFailure(ValueError):
    """Raised by parsers when a token does not decode into the requested type."""


def _to_int(s: str) -> int:
    """Convert a numeral already matched by `_SIGNED`, however many digits it has."""
    if len(s) <= _DIGIT_CHUNK:
        return int(s)
    sign = -1 if s[0] == "-" else 1
    digits = s.lstrip("+-")
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return sign * value


class FastParse(metaclass=ABCMeta):
    """Interface for types that know how to build a value from a token."""

    @classmethod
    @abstractmethod
    def fparse(cls, s: str) -> Any:
        """Parse a value from the token text `s`."""
        pass


class Str(str, FastParse):
    """Token text taken verbatim.

    The identity decode: the token is wrapped as is, without any conversion.
    Being a `str`, it compares, hashes and formats like the text it holds.

    Examples:
        >>> name = Str.fparse("Jakub")
        >>> name == "Jakub"
        True
        >>> name.value
        'Jakub'
    """

    @classmethod
    def fparse(cls, s: str) -> "Str":
        return cls(s)

    @property
    def value(self) -> str:
        """The wrapped text as a plain `str`."""
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"Str({str.__repr__(self)})"


class FixedInt(FastParse):
    """Base for fixed-width integer markers; decoded values are plain `int`."""

    bits = 64
    signed = True

    @classmethod
    def bounds(cls):
        if cls.signed:
            return -(1 << (cls.bits - 1)), (1 << (cls.bits - 1)) - 1
        return 0, (1 << cls.bits) - 1

    @classmethod
    def fparse(cls, s: str) -> int:
        pattern = _SIGNED if cls.signed else _UNSIGNED
        if not pattern.match(s):
            raise DecodeFailure(f"invalid digit found in {_short.repr(s)} for {cls.__name__}")
        value = _to_int(s)
        low, high = cls.bounds()
        if not low <= value <= high:
            raise DecodeFailure(f"{_short.repr(s)} is out of range for {cls.__name__} [{low}, {high}]")
        return value


class i8(FixedInt):
    bits, signed = 8, True


class i16(FixedInt):
    bits, signed = 16, True


class i32(FixedInt):
    bits, signed = 32, True


class i64(FixedInt):
    bits, signed = 64, True


class i128(FixedInt):
    bits, signed = 128, True


class isize(FixedInt):
    bits, signed = 64, True


class u8(FixedInt):
    bits, signed = 8, False


class u16(FixedInt):
    bits, signed = 16, False


class u32(FixedInt):
    bits, signed = 32, False


class u64(FixedInt):
    bits, signed = 64, False


class u128(FixedInt):
    bits, signed = 128, False


class usize(FixedInt):
    bits, signed = 64, False


class f64(FastParse):
    """Double precision float marker; decoded values are `float`."""

    @classmethod
    def fparse(cls, s: str) -> float:
        if not _FLOAT.match(s):
            raise DecodeFailure(f"invalid float literal {_short.repr(s)}")
        return float(s)


class f32(f64):
    """Single precision float marker; the value is rounded to 32 bits."""

    @classmethod
    def fparse(cls, s: str) -> float:
        value = super().fparse(s)
        try:
            return struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            return float("inf") if value > 0 else float("-inf")


def _parse_int(s: str) -> int:
    if not _SIGNED.match(s):
        raise DecodeFailure(f"invalid digit found in {_short.repr(s)}")
    return _to_int(s)


def _parse_bool(s: str) -> bool:
    if s == "true":
        return True
    if s == "false":
        return False
    raise DecodeFailure(f"provided string was not `true` or `false`: {_short.repr(s)}")


def register_parser(type_: type, func: Callable[[str], Any]) -> None:
    """Use `func` to decode tokens requested as `type_`.

    Registered parsers take precedence over `FastParse.fparse` and the
    type's own constructor. A `ValueError`, `TypeError`,
    `ArithmeticError` or `LookupError` raised by `func` is reported as a
    `DecodeFailure`.

    Args:
        type_: The type callers pass to the reader
        func: Callable taking the token text and returning the value
    """
    _parsers[type_] = func
    logger.debug("Registered parser for %s", getattr(type_, "__name__", type_))


def unregister_parser(type_: type) -> None:
    """Remove a parser added with `register_parser`."""
    try:
        del _parsers[type_]
    except KeyError:
        raise KeyError(f"No parser registered for {type_!r}")
    logger.debug("Removed parser for %s", getattr(type_, "__name__", type_))


def parser_for(type_: Any) -> Callable[[str], Any]:
    """Resolve the parse function used for `type_`."""
    func = _parsers.get(type_)
    if func is not None:
        return func
    fparse = getattr(type_, "fparse", None)
    if callable(fparse):
        return fparse
    if callable(type_):
        return type_
    raise TypeError(f"{type_!r} cannot be used to decode tokens")


def decode(type_: Any, s: str) -> Any:
    """Decode the token `s` into `type_`.

    Raises:
        DecodeFailure: If the token is not a valid `type_`
        TypeError: If `type_` has no parser and is not callable

    Examples:
        >>> decode(int, "-123")
        -123
        >>> decode(u8, "255")
        255
        >>> decode(bool, "true")
        True
    """
    parse = parser_for(type_)
    try:
        return parse(s)
    except DecodeFailure:
        raise
    except (ValueError, TypeError, ArithmeticError, LookupError) as e:
        raise DecodeFailure(f"cannot decode {_short.repr(s)} as {getattr(type_, '__name__', type_)}: {e}") from e


register_parser(int, _parse_int)
register_parser(float, f64.fparse)
register_parser(bool, _parse_bool)
register_parser(str, str)
