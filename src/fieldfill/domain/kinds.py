"""Value kinds and the type classifier.

Every field type hint is reduced to a :class:`TypeInfo`: one member of the
closed :class:`ValueKind` set, the exact declared type (used for override
lookup), an optional numeric width, and the element type for sequences.

Sized numeric marker types are ``NewType`` aliases so records can declare
width and signedness without a runtime cost::

    @dataclass
    class Limits:
        retries: UInt8 = tagged("3")
        ratio: Float32 = tagged("0.25")
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any, NewType

from pydantic import BaseModel


class ValueKind(StrEnum):
    """Closed set of coercion kinds."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STR = "str"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    RECORD = "record"
    # Types with no kind strategy; reachable only through an exact-type override.
    OPAQUE = "opaque"


Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt = NewType("UInt", int)
UInt8 = NewType("UInt8", int)
UInt16 = NewType("UInt16", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

# marker -> (kind, bits)
_NUMERIC_MARKERS: dict[object, tuple[ValueKind, int]] = {
    int: (ValueKind.INT, 64),
    Int8: (ValueKind.INT, 8),
    Int16: (ValueKind.INT, 16),
    Int32: (ValueKind.INT, 32),
    Int64: (ValueKind.INT, 64),
    UInt: (ValueKind.UINT, 64),
    UInt8: (ValueKind.UINT, 8),
    UInt16: (ValueKind.UINT, 16),
    UInt32: (ValueKind.UINT, 32),
    UInt64: (ValueKind.UINT, 64),
    float: (ValueKind.FLOAT, 64),
    Float32: (ValueKind.FLOAT, 32),
    Float64: (ValueKind.FLOAT, 64),
}

# Exact types whose kind is fixed regardless of their Python base class.
_EXACT_KINDS: dict[type, ValueKind] = {
    timedelta: ValueKind.INT,
    datetime: ValueKind.OPAQUE,
}


@dataclass(frozen=True)
class TypeInfo:
    """Classified field type."""

    kind: ValueKind
    exact: Any  # the declared type (NewType markers are kept as-is)
    bits: int = 0
    element: TypeInfo | None = None

    @property
    def is_record_sequence(self) -> bool:
        return (
            self.kind is ValueKind.SEQUENCE
            and self.element is not None
            and self.element.kind is ValueKind.RECORD
        )


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and pydantic model classes."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances."""
    return is_record_type(type(value))


def _unwrap(hint: Any) -> Any:
    """Strip ``Annotated`` and ``X | None`` wrappers."""
    while True:
        origin = typing.get_origin(hint)
        if origin is typing.Annotated:
            hint = typing.get_args(hint)[0]
            continue
        if origin is typing.Union or origin is types.UnionType:
            members = [a for a in typing.get_args(hint) if a is not type(None)]
            if len(members) == 1:
                hint = members[0]
                continue
        return hint


def classify(hint: Any) -> TypeInfo:
    """Reduce a resolved type hint to a :class:`TypeInfo`."""
    hint = _unwrap(hint)

    if hint in _NUMERIC_MARKERS:
        kind, bits = _NUMERIC_MARKERS[hint]
        return TypeInfo(kind=kind, exact=hint, bits=bits)
    if hint is bool:
        return TypeInfo(kind=ValueKind.BOOL, exact=bool)
    if hint is str:
        return TypeInfo(kind=ValueKind.STR, exact=str)
    if hint is bytes:
        return TypeInfo(kind=ValueKind.BYTES, exact=bytes)
    if isinstance(hint, type) and hint in _EXACT_KINDS:
        return TypeInfo(kind=_EXACT_KINDS[hint], exact=hint, bits=64)

    origin = typing.get_origin(hint)
    if hint is list or origin is list:
        args = typing.get_args(hint)
        element = classify(args[0]) if args else TypeInfo(kind=ValueKind.STR, exact=str)
        return TypeInfo(kind=ValueKind.SEQUENCE, exact=list, element=element)

    if is_record_type(hint):
        return TypeInfo(kind=ValueKind.RECORD, exact=hint)
    return TypeInfo(kind=ValueKind.OPAQUE, exact=hint)


def is_zero(info: TypeInfo, value: Any) -> bool:
    """Whether *value* is the zero value for its declared type.

    ``None`` is the zero value of every kind. Byte sequences are zero only
    when ``None``; an empty ``b""`` counts as set.
    """
    if value is None:
        return True
    match info.kind:
        case ValueKind.BOOL:
            return value is False
        case ValueKind.INT if info.exact is timedelta:
            return bool(value == timedelta(0))
        case ValueKind.INT | ValueKind.UINT | ValueKind.FLOAT:
            return bool(value == 0)
        case ValueKind.STR:
            return value == ""
        case ValueKind.SEQUENCE:
            return len(value) == 0
        case _:
            return False


def zero_value(info: TypeInfo) -> Any:
    """Fresh zero value for *info*, used to seed list elements."""
    match info.kind:
        case ValueKind.BOOL:
            return False
        case ValueKind.INT if info.exact is timedelta:
            return timedelta(0)
        case ValueKind.INT | ValueKind.UINT:
            return 0
        case ValueKind.FLOAT:
            return 0.0
        case ValueKind.STR:
            return ""
        case ValueKind.SEQUENCE:
            return []
        case _:
            return None
