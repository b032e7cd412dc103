"""Tests for format_result."""

import json

from fieldfill.output.formatters import format_result
from fieldfill.services.result import CommandError, CommandResult


def _ok(op: str = "test", **data: object) -> CommandResult:
    return CommandResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail", **detail: object) -> CommandResult:
    return CommandResult(
        ok=False,
        op=op,
        error=CommandError(code="ERR", message=msg, detail=dict(detail)),
    )


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        data = json.loads(format_result(_ok("resolve", value="x"), json_output=True))
        assert data["ok"] is True
        assert data["op"] == "resolve"
        assert data["data"]["value"] == "x"

    def test_json_mode_error(self) -> None:
        data = json.loads(format_result(_err("fill", "Bad"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"


class TestFormatResultHuman:
    def test_success(self) -> None:
        output = format_result(_ok("resolve", annotation="1s", value=[1, 2]))
        assert output.splitlines() == ["OK: resolve", "  annotation: 1s", "  value: [1,2]"]

    def test_error(self) -> None:
        assert format_result(_err("fill", "Bad")) == "ERROR: fill - Bad"

    def test_outcomes_table(self) -> None:
        outcomes = [
            {"path": "port", "status": "defaulted", "value": "8080", "error": None},
            {"path": "name", "status": "skipped", "value": None, "error": None},
        ]
        lines = format_result(_ok("fill", outcomes=outcomes)).splitlines()
        assert lines[1] == "  report:"
        assert lines[2] == "    defaulted port = 8080"
        assert lines[3] == "    skipped   name"

    def test_error_outcomes_table(self) -> None:
        outcomes = [{"path": "port", "status": "error", "value": None, "error": "bad int"}]
        lines = format_result(_err("fill", "1 failed", outcomes=outcomes)).splitlines()
        assert lines[0] == "ERROR: fill - 1 failed"
        assert lines[2] == "    error     port  (bad int)"
