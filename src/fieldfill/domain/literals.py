"""Scalar literal parsers.

Stricter than the builtin constructors: no surrounding whitespace, no
digit-group underscores, base 10 only. Every parser raises
:class:`LiteralError` on malformed input.
"""

from __future__ import annotations

import re
import struct

from fieldfill.domain.errors import LiteralError

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_SIGNED = re.compile(r"^[+-]?[0-9]+$")
_UNSIGNED = re.compile(r"^[0-9]+$")
_FLOAT = re.compile(
    r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)$",
    re.IGNORECASE,
)


def parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise LiteralError("bool", text)


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a signed base-10 integer that fits in *bits*."""
    if not _SIGNED.match(text):
        raise LiteralError("int", text)
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise LiteralError("int", text, f"out of range for int{bits}")
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """Parse an unsigned base-10 integer that fits in *bits*."""
    if not _UNSIGNED.match(text):
        raise LiteralError("uint", text)
    value = int(text)
    if value >= 1 << bits:
        raise LiteralError("uint", text, f"out of range for uint{bits}")
    return value


def parse_float(text: str, bits: int = 64) -> float:
    """Parse a base-10 float; 32-bit widths are rounded to single precision."""
    if not _FLOAT.match(text):
        raise LiteralError("float", text)
    value = float(text)
    if bits == 32:
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError as exc:
            raise LiteralError("float", text, "out of range for float32") from exc
    return value
