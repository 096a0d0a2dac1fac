"""fastinput reads whitespace and line delimited input, such as competitive programming judge input, via the
FastInput class.

The source is loaded once at construction; lines and space separated tokens are decoded into the requested
types on demand. Custom types plug in through FastParse or register_parser.
"""

from fastinput.fastinput import (
    ArityError,
    DecodeError,
    ExhaustedError,
    FastInput,
    FastInputException,
    SourceError,
)
from fastinput.fastparse import (
    DecodeFailure,
    FastParse,
    Str,
    decode,
    f32,
    f64,
    i8,
    i16,
    i32,
    i64,
    i128,
    isize,
    register_parser,
    u8,
    u16,
    u32,
    u64,
    u128,
    unregister_parser,
    usize,
)
from fastinput.store import BUFFER_SIZE

__all__ = [
    "FastInput",
    "FastInputException",
    "ExhaustedError",
    "ArityError",
    "DecodeError",
    "SourceError",
    "FastParse",
    "DecodeFailure",
    "Str",
    "decode",
    "register_parser",
    "unregister_parser",
    "BUFFER_SIZE",
    "i8",
    "i16",
    "i32",
    "i64",
    "i128",
    "isize",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    "usize",
    "f32",
    "f64",
]
