"""Tests for scalar literal parsers."""

from __future__ import annotations

import math

import pytest

from fieldfill.domain.errors import LiteralError
from fieldfill.domain.literals import parse_bool, parse_float, parse_int, parse_uint


class TestParseBool:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text: str) -> None:
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text: str) -> None:
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "", "tRuE", " true"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(LiteralError):
            parse_bool(text)


class TestParseInt:
    def test_signed(self) -> None:
        assert parse_int("-42") == -42
        assert parse_int("+7") == 7

    def test_width_bounds(self) -> None:
        assert parse_int("127", 8) == 127
        assert parse_int("-128", 8) == -128
        with pytest.raises(LiteralError):
            parse_int("128", 8)

    @pytest.mark.parametrize("text", ["1_000", " 1", "1.0", "0x10", "", "9223372036854775808"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(LiteralError):
            parse_int(text)


class TestParseUint:
    def test_valid(self) -> None:
        assert parse_uint("255", 8) == 255
        assert parse_uint("18446744073709551615") == 2**64 - 1

    @pytest.mark.parametrize("text", ["-1", "+1", "256"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(LiteralError):
            parse_uint(text, 8)


class TestParseFloat:
    def test_forms(self) -> None:
        assert parse_float("1.5") == 1.5
        assert parse_float("-2e3") == -2000.0
        assert parse_float(".25") == 0.25
        assert math.isinf(parse_float("inf"))
        assert math.isnan(parse_float("NaN"))

    def test_float32_rounds(self) -> None:
        value = parse_float("0.1", 32)
        assert value != 0.1
        assert value == pytest.approx(0.1, rel=1e-7)

    def test_float32_overflow(self) -> None:
        with pytest.raises(LiteralError):
            parse_float("1e300", 32)

    @pytest.mark.parametrize("text", ["1_0", "abc", "", "1.0f"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(LiteralError):
            parse_float(text)
