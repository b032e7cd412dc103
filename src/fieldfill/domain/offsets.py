"""Relative date/time placeholders.

``{{date:Y,M,D}}`` expands to today shifted by years, months and days
(``YYYY-MM-DD``); ``{{time:H,M,S}}`` expands to the current time shifted by
hours, minutes and seconds (``HH:MM:SS``). Fields may be negative or empty
(empty means 0). Placeholders with any other tag are left as-is.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

_PLACEHOLDER = re.compile(r"\{\{(\w+):(-?\d*),(-?\d*),(-?\d*)\}\}", re.ASCII)


def _as_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def add_date(moment: datetime, years: int, months: int, days: int) -> datetime:
    """Calendar arithmetic where day overflow rolls into the next month.

    Jan 31 plus one month is Mar 2 (or Mar 3 in a non-leap year), not the
    last day of February.
    """
    month_index = moment.month - 1 + months
    year = moment.year + years + month_index // 12
    month = month_index % 12 + 1
    first = moment.replace(year=year, month=month, day=1)
    return first + timedelta(days=moment.day - 1 + days)


def add_clock(moment: datetime, hours: int, minutes: int, seconds: int) -> datetime:
    return moment + timedelta(hours=hours, minutes=minutes, seconds=seconds)


def substitute_offsets(text: str, now: datetime | None = None) -> str:
    """Replace every recognized placeholder in *text*.

    All placeholders are evaluated against a single clock reading.
    """
    moment = now if now is not None else datetime.now()

    def _expand(match: re.Match[str]) -> str:
        tag = match.group(1)
        a, b, c = (_as_int(match.group(i)) for i in (2, 3, 4))
        try:
            if tag == "date":
                return add_date(moment, a, b, c).strftime("%Y-%m-%d")
            if tag == "time":
                return add_clock(moment, a, b, c).strftime("%H:%M:%S")
        except (ValueError, OverflowError):
            # Shifted outside the representable calendar range.
            pass
        return match.group(0)

    return _PLACEHOLDER.sub(_expand, text)
