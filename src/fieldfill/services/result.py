"""FillReport and FieldOutcome: what a fill pass did, field by field.

INVARIANT: every visited annotated field produces exactly one outcome.
Nested records contribute their own outcomes under a dotted path
(``server.tls.cert``); list elements use ``[i]`` (``routes[0].path``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class OutcomeStatus(StrEnum):
    DEFAULTED = "defaulted"
    SKIPPED = "skipped"
    ERROR = "error"


class FieldOutcome(BaseModel):
    """Result of considering one field."""

    model_config = {"frozen": True}

    path: str
    kind: str
    status: OutcomeStatus
    value: str | None = None  # repr() of the written value
    error: str | None = None


class FillReport(BaseModel):
    """Aggregated outcomes of one fill pass.

    Attributes:
        record: Qualified name of the top-level record type.
        outcomes: One entry per annotated field, in traversal order.
    """

    model_config = {"frozen": True}

    record: str
    outcomes: list[FieldOutcome] = Field(default_factory=list)

    @property
    def defaulted(self) -> list[FieldOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.DEFAULTED]

    @property
    def errors(self) -> list[FieldOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.ERROR]

    @property
    def ok(self) -> bool:
        return not self.errors

    def get(self, path: str) -> FieldOutcome | None:
        for outcome in self.outcomes:
            if outcome.path == path:
                return outcome
        return None


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class CommandResult(BaseModel):
    """Return type of the CLI-facing operations (``resolve``, ``fill``).

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name.
        data: Operation-specific payload, JSON-compatible.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: CommandError | None = None
