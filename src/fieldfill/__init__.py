"""fieldfill: annotation-driven defaults for dataclasses and pydantic models."""

from __future__ import annotations

__version__ = "0.3.0"

from fieldfill.domain.errors import FieldFillError, FillError, LiteralError, TimestampError
from fieldfill.domain.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from fieldfill.infrastructure.overlay import overlay
from fieldfill.services.filler import (
    Filler,
    apply_defaults,
    get_default_filler,
    reset_default_fillers,
)
from fieldfill.services.result import FieldOutcome, FillReport, OutcomeStatus
from fieldfill.services.schema import Tags, tagged

__all__ = [
    "FieldFillError",
    "FieldOutcome",
    "FillError",
    "FillReport",
    "Filler",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "LiteralError",
    "OutcomeStatus",
    "Tags",
    "TimestampError",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "__version__",
    "apply_defaults",
    "get_default_filler",
    "overlay",
    "reset_default_fillers",
    "tagged",
]
