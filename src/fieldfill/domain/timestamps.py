"""Timestamp annotations: a value followed by its layout.

Layouts use reference-time notation (the reference moment is
``Mon Jan 2 15:04:05 MST 2006``), e.g. ``2006-01-02`` or ``02/01/2006 15:04``.

Token splitting::

    "2024-03-01 10:30:00"                  -> 2 tokens, default layout,
                                              the whole input is the value
    "01/03/2024 10:30 02/01/2006 15:04"    -> 4 tokens, first half is the
                                              value, second half the layout
    "2024-03-01"                           -> error, no layout

The two-token case parses the whole input (not only the first token)
against :data:`DEFAULT_LAYOUT`. With three or more tokens the split is at
``len(tokens) // 2``.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from fieldfill.domain.errors import TimestampError

DEFAULT_LAYOUT = "2006-01-02 15:04:05"

_LAYOUT_TOKENS: dict[str, str] = {
    "January": "%B",
    "Monday": "%A",
    "Jan": "%b",
    "Mon": "%a",
    "MST": "%Z",
    "2006": "%Y",
    "Z07:00": "%z",
    "Z0700": "%z",
    "-07:00": "%z",
    "-0700": "%z",
    "002": "%j",
    "01": "%m",
    "02": "%d",
    "_2": "%d",
    "03": "%I",
    "04": "%M",
    "05": "%S",
    "06": "%y",
    "15": "%H",
    "PM": "%p",
    "pm": "%p",
    "1": "%m",
    "2": "%d",
    "3": "%I",
    "4": "%M",
    "5": "%S",
}

_FRACTION = r"[.,](?:0{1,6}|9{1,6})(?![0-9])"
_LAYOUT_PATTERN = re.compile(
    _FRACTION + "|" + "|".join(re.escape(t) for t in _LAYOUT_TOKENS)
)


def layout_to_strptime(layout: str) -> str:
    """Translate a reference-time layout into a ``strptime`` format."""
    out: list[str] = []
    pos = 0
    for match in _LAYOUT_PATTERN.finditer(layout):
        out.append(layout[pos : match.start()].replace("%", "%%"))
        token = match.group(0)
        if token[0] in ".,":
            out.append(f"{token[0]}%f")
        else:
            out.append(_LAYOUT_TOKENS[token])
        pos = match.end()
    out.append(layout[pos:].replace("%", "%%"))
    return "".join(out)


def split_timestamp(text: str) -> tuple[str, str]:
    """Return ``(value, layout)`` for a timestamp annotation."""
    tokens = text.split()
    if len(tokens) < 2:
        raise TimestampError(text, "expected a value and a layout")
    if len(tokens) == 2:
        return text, DEFAULT_LAYOUT
    half = len(tokens) // 2
    return " ".join(tokens[:half]), " ".join(tokens[half:])


def parse_timestamp(text: str) -> datetime:
    """Parse a timestamp annotation. Results without a zone are UTC."""
    value, layout = split_timestamp(text)
    try:
        parsed = datetime.strptime(value, layout_to_strptime(layout))
    except ValueError as exc:
        raise TimestampError(text, str(exc)) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
