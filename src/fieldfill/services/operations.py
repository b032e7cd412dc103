"""CLI-facing operations returning CommandResult.

INVARIANT: these functions never raise for bad input; every failure is a
``CommandResult(ok=False, ...)`` with a stable error code.
"""

from __future__ import annotations

import importlib
import logging
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from fieldfill.domain.errors import FillError, LiteralError
from fieldfill.domain.kinds import UInt, is_record_type
from fieldfill.services.filler import Filler
from fieldfill.services.result import CommandError, CommandResult

logger = logging.getLogger(__name__)

KIND_HINTS: dict[str, Any] = {
    "bool": bool,
    "int": int,
    "uint": UInt,
    "float": float,
    "str": str,
    "bytes": bytes,
    "duration": timedelta,
    "timestamp": datetime,
}


def _error(op: str, code: str, message: str, **detail: Any) -> CommandResult:
    return CommandResult(
        ok=False, op=op, error=CommandError(code=code, message=message, detail=detail)
    )


def resolve_annotation(
    filler: Filler,
    annotation: str,
    *,
    kind: str = "str",
    as_list: bool = False,
) -> CommandResult:
    """Evaluate one annotation the way a field of *kind* would be defaulted."""
    op = "resolve"
    hint = KIND_HINTS.get(kind)
    if hint is None:
        return _error(op, "UNKNOWN_KIND", f"Unknown kind: {kind}", choices=sorted(KIND_HINTS))
    if as_list:
        hint = list[hint]  # type: ignore[valid-type]

    try:
        value = filler.resolve(annotation, hint)
    except LiteralError as exc:
        return _error(op, "INVALID_LITERAL", str(exc), kind=exc.kind, text=exc.text)

    if isinstance(value, bytes):
        value = value.decode("utf-8")
    return CommandResult(
        ok=True,
        op=op,
        data={
            "annotation": annotation,
            "kind": f"list[{kind}]" if as_list else kind,
            "value": to_jsonable_python(value),
        },
    )


def load_record_type(target: str) -> type:
    """Import ``package.module:ClassName``.

    Raises:
        ValueError: If *target* is malformed or does not name a record type.
        ImportError: If the module cannot be imported.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"expected MODULE:CLASS, got {target!r}"
        raise ValueError(msg)
    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"{module_name} has no attribute {attr_path!r}"
            raise ValueError(msg) from exc
    if not is_record_type(obj):
        msg = f"{target} is not a dataclass or pydantic model"
        raise ValueError(msg)
    return obj


def fill_record(filler: Filler, target: str) -> CommandResult:
    """Instantiate the record type named by *target* with no arguments and fill it."""
    op = "fill"
    try:
        record_type = load_record_type(target)
    except ImportError as exc:
        return _error(op, "IMPORT_FAILED", str(exc), target=target)
    except ValueError as exc:
        return _error(op, "INVALID_TARGET", str(exc), target=target)

    try:
        record = record_type()
    except (TypeError, ValidationError) as exc:
        return _error(op, "NOT_CONSTRUCTIBLE", str(exc), target=target)

    try:
        report = filler.fill(record)
    except FillError as exc:
        logger.debug("Strict fill of %s failed", target)
        return _error(
            op,
            "FILL_FAILED",
            str(exc),
            target=target,
            outcomes=exc.report.model_dump(mode="json")["outcomes"],
        )

    return CommandResult(
        ok=True,
        op=op,
        data={
            "record": target,
            "values": to_jsonable_python(record, bytes_mode="utf8"),
            "outcomes": report.model_dump(mode="json")["outcomes"],
        },
    )
