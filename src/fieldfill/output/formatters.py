"""Human/JSON rendering of CommandResult."""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fieldfill.services.result import CommandResult


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _format_outcomes(outcomes: list[dict[str, Any]]) -> list[str]:
    lines = ["  report:"]
    for outcome in outcomes:
        line = f"    {outcome['status']:<9} {outcome['path']}"
        if outcome.get("value") is not None:
            line += f" = {outcome['value']}"
        if outcome.get("error"):
            line += f"  ({outcome['error']})"
        lines.append(line)
    return lines


def format_result(result: CommandResult, *, json_output: bool = False) -> str:
    """Format a CommandResult for display.

    Args:
        result: The result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        lines = [f"ERROR: {result.op} - {error_msg}"]
        outcomes = result.error.detail.get("outcomes") if result.error else None
        if outcomes:
            lines.extend(_format_outcomes(outcomes))
        return "\n".join(lines)

    lines = [f"OK: {result.op}"]
    for key, value in result.data.items():
        if key == "outcomes":
            lines.extend(_format_outcomes(value))
        else:
            lines.append(f"  {key}: {_format_value(value)}")
    return "\n".join(lines)
