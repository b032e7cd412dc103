"""Tests for the CLI-facing resolve/fill operations."""

from __future__ import annotations

import pytest

from fieldfill.services.filler import Filler
from fieldfill.services.operations import fill_record, load_record_type, resolve_annotation
from tests.records import ServiceConfig


class TestResolveAnnotation:
    def test_string(self, filler: Filler) -> None:
        result = resolve_annotation(filler, "{{date:0,0,1}}")
        assert result.ok
        assert result.data == {"annotation": "{{date:0,0,1}}", "kind": "str", "value": "2024-01-02"}

    def test_list_kind(self, filler: Filler) -> None:
        result = resolve_annotation(filler, "[1,2]", kind="int", as_list=True)
        assert result.data["kind"] == "list[int]"
        assert result.data["value"] == [1, 2]

    def test_bytes_rendered_as_text(self, filler: Filler) -> None:
        result = resolve_annotation(filler, "raw", kind="bytes")
        assert result.data["value"] == "raw"

    def test_invalid_literal(self, filler: Filler) -> None:
        result = resolve_annotation(filler, "nope", kind="int")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_LITERAL"
        assert result.error.detail == {"kind": "int", "text": "nope"}

    def test_unknown_kind(self, filler: Filler) -> None:
        result = resolve_annotation(filler, "x", kind="complex")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_KIND"


class TestLoadRecordType:
    def test_loads(self) -> None:
        assert load_record_type("tests.records:ServiceConfig") is ServiceConfig

    @pytest.mark.parametrize("target", ["tests.records", "tests.records:", ":X"])
    def test_malformed(self, target: str) -> None:
        with pytest.raises(ValueError):
            load_record_type(target)

    def test_not_a_record(self) -> None:
        with pytest.raises(ValueError):
            load_record_type("fieldfill.services.operations:KIND_HINTS")


class TestFillRecord:
    def test_success(self, filler: Filler) -> None:
        result = fill_record(filler, "tests.records:ServiceConfig")
        assert result.ok
        assert result.data["values"] == {"host": "localhost", "port": 8080, "level": "debug"}
        assert [o["status"] for o in result.data["outcomes"]] == ["defaulted"] * 3

    def test_missing_module(self, filler: Filler) -> None:
        result = fill_record(filler, "no_such_module_xyz:Thing")
        assert result.error is not None
        assert result.error.code == "IMPORT_FAILED"

    def test_missing_attribute(self, filler: Filler) -> None:
        result = fill_record(filler, "tests.records:Nope")
        assert result.error is not None
        assert result.error.code == "INVALID_TARGET"

    def test_strict_failure(self) -> None:
        result = fill_record(Filler(strict=True), "tests.records:StrictConfig")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FILL_FAILED"
        assert result.error.detail["outcomes"][0]["path"] == "port"
