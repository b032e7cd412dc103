"""Exception hierarchy for default resolution.

Parsers raise; only the walker's lenient mode absorbs the failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldfill.services.result import FillReport


class FieldFillError(Exception):
    """Base class for all fieldfill errors."""


class LiteralError(FieldFillError, ValueError):
    """An annotation could not be parsed as a literal of the requested kind."""

    def __init__(self, kind: str, text: str, reason: str | None = None) -> None:
        self.kind = kind
        self.text = text
        msg = f"invalid {kind} literal: {text!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class DurationError(LiteralError):
    """Malformed duration expression."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        super().__init__("duration", text, reason)


class TimestampError(LiteralError):
    """Malformed timestamp, or a timestamp that does not match its layout."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        super().__init__("timestamp", text, reason)


class FillError(FieldFillError):
    """Raised in strict mode when at least one field could not be defaulted."""

    def __init__(self, report: FillReport) -> None:
        self.report = report
        failed = ", ".join(o.path for o in report.errors)
        super().__init__(f"{len(report.errors)} field(s) could not be defaulted: {failed}")
