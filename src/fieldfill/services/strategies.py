"""Coercion strategies: annotation string -> field value.

A strategy receives a :class:`Coercion` and returns the value to write, or
raises :class:`~fieldfill.domain.errors.LiteralError`. Strategies are
registered by :class:`ValueKind` and, with higher priority, by exact
declared type (``timedelta``, ``datetime``).

Nested records and lists of records are not strategies; the walker
descends into them directly.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from fieldfill.domain.durations import parse_duration
from fieldfill.domain.errors import LiteralError
from fieldfill.domain.kinds import TypeInfo, ValueKind, zero_value
from fieldfill.domain.literals import parse_bool, parse_float, parse_int, parse_uint
from fieldfill.domain.offsets import substitute_offsets
from fieldfill.domain.selectors import resolve_selector
from fieldfill.domain.timestamps import parse_timestamp

if TYPE_CHECKING:
    from fieldfill.services.filler import Filler

logger = logging.getLogger(__name__)

# "-," is the escape for a bare "-" annotation.
HYPHEN_ESCAPE = "-,"

_SEQUENCE_LITERAL = re.compile(r"^\[(.*)\]$", re.DOTALL)
_COMMA_SENTINEL = "__orcomma__"


@dataclass(frozen=True)
class Coercion:
    """Everything a strategy may consult."""

    filler: Filler
    info: TypeInfo
    annotation: str


Strategy = Callable[[Coercion], Any]


def coerce_bool(c: Coercion) -> bool:
    return parse_bool(c.annotation)


def coerce_int(c: Coercion) -> int:
    return parse_int(c.annotation, c.info.bits or 64)


def coerce_uint(c: Coercion) -> int:
    return parse_uint(c.annotation, c.info.bits or 64)


def coerce_float(c: Coercion) -> float:
    return parse_float(c.annotation, c.info.bits or 64)


def coerce_str(c: Coercion) -> str:
    """Selector substitution first; offsets only when the selector changed nothing."""
    text = "-" if c.annotation == HYPHEN_ESCAPE else c.annotation
    resolved = resolve_selector(text, c.filler.lookup, c.filler.implicit_env_key)
    if resolved == text:
        resolved = substitute_offsets(text, c.filler.clock())
    return resolved


def coerce_bytes(c: Coercion) -> bytes:
    try:
        return c.annotation.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise LiteralError("bytes", c.annotation, exc.reason) from exc


def coerce_sequence(c: Coercion) -> list[Any]:
    """``[a,b,c]`` -> list, each element coerced with the element kind's strategy.

    ``|,`` keeps a literal comma inside an element. Elements that fail to
    parse become the element's zero value.
    """
    match = _SEQUENCE_LITERAL.match(c.annotation)
    if match is None:
        raise LiteralError("sequence", c.annotation, "expected [item,...]")
    body = match.group(1)
    if body == "":
        return []

    element = c.info.element or TypeInfo(kind=ValueKind.STR, exact=str)
    strategy = c.filler.strategy_for(element)
    if strategy is None:
        raise LiteralError("sequence", c.annotation, f"no strategy for {element.kind} elements")

    items: list[Any] = []
    for raw in body.replace("|,", _COMMA_SENTINEL).split(","):
        item = raw.replace(_COMMA_SENTINEL, ",")
        try:
            items.append(strategy(Coercion(filler=c.filler, info=element, annotation=item)))
        except LiteralError as exc:
            logger.debug("Sequence element %r left at zero value: %s", item, exc)
            items.append(zero_value(element))
    return items


def coerce_duration(c: Coercion) -> timedelta:
    return parse_duration(c.annotation)


def coerce_timestamp(c: Coercion) -> datetime:
    return parse_timestamp(c.annotation)


KIND_STRATEGIES: Mapping[ValueKind, Strategy] = {
    ValueKind.BOOL: coerce_bool,
    ValueKind.INT: coerce_int,
    ValueKind.UINT: coerce_uint,
    ValueKind.FLOAT: coerce_float,
    ValueKind.STR: coerce_str,
    ValueKind.BYTES: coerce_bytes,
    ValueKind.SEQUENCE: coerce_sequence,
}

TYPE_STRATEGIES: Mapping[Any, Strategy] = {
    timedelta: coerce_duration,
    datetime: coerce_timestamp,
}
