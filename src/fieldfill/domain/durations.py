"""Duration expressions: ``"300ms"``, ``"-1.5h"``, ``"2h45m"``.

A possibly signed sequence of decimal numbers, each with an optional
fraction and a mandatory unit suffix. Valid units are ``ns``, ``us``
(``µs``/``μs``), ``ms``, ``s``, ``m`` and ``h``. A bare ``"0"`` is also
accepted. Precision below one microsecond is truncated.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal

from fieldfill.domain.errors import DurationError

# Unit -> nanoseconds
UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]+)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration expression, raising :class:`DurationError` if malformed."""
    rest = text
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if rest == "":
        raise DurationError(text)

    total_ns = Decimal(0)
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None:
            raise DurationError(text)
        number, unit = match.groups()
        if number in ("", "."):
            raise DurationError(text, "missing number")
        if unit not in UNITS:
            raise DurationError(text, f"unknown unit {unit!r}")
        total_ns += Decimal(number) * UNITS[unit]
        pos = match.end()

    micros = int(total_ns // 1000)
    if negative:
        micros = -micros
    try:
        return timedelta(microseconds=micros)
    except OverflowError as exc:
        raise DurationError(text, "out of range") from exc
