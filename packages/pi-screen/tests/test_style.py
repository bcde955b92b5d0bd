"""Tests for pi.screen.style -- declaration parsing and the typed style."""

from __future__ import annotations

from fractions import Fraction

import pytest

from pi.screen.style import Offset, Style, StyleSheet, parse_declarations


# ---------------------------------------------------------------------------
# parse_declarations
# ---------------------------------------------------------------------------


class TestParseDeclarations:
    """Permissive ``key: value;`` parsing."""

    def test_basic_pairs(self) -> None:
        assert parse_declarations("position: fixed; top: 0;") == {
            "position": "fixed",
            "top": "0",
        }

    def test_keys_and_values_are_trimmed(self) -> None:
        assert parse_declarations("  text-align :   right  ") == {"text-align": "right"}

    def test_last_write_wins(self) -> None:
        assert parse_declarations("top: 1; top: 5") == {"top": "5"}

    def test_missing_colon_is_dropped(self) -> None:
        assert parse_declarations("top 1; left: 2") == {"left": "2"}

    def test_extra_colon_is_dropped(self) -> None:
        assert parse_declarations("top: 1: 2; left: 2") == {"left": "2"}

    def test_garbage_never_raises(self) -> None:
        assert parse_declarations("bad;;;::") == {}

    def test_empty_string(self) -> None:
        assert parse_declarations("") == {}

    def test_empty_key_is_dropped(self) -> None:
        assert parse_declarations(": 5") == {}


# ---------------------------------------------------------------------------
# Offset
# ---------------------------------------------------------------------------


class TestOffset:
    """Literal and percentage offsets."""

    def test_literal(self) -> None:
        offset = Offset.parse("5")
        assert offset == Offset(Fraction(5))
        assert offset.resolve(80) == 5

    def test_percentage_rounds_up(self) -> None:
        offset = Offset.parse("10%")
        assert offset is not None
        assert offset.percent
        # 24 * 0.10 = 2.4 -> 3
        assert offset.resolve(24) == 3

    def test_exact_percentage(self) -> None:
        assert Offset.parse("50%").resolve(80) == 40

    def test_fractional_percentage(self) -> None:
        # 80 * 12.5% = 10 exactly
        assert Offset.parse("12.5%").resolve(80) == 10

    @pytest.mark.parametrize("pct", [7, 14, 29, 57])
    def test_percentage_has_no_float_drift(self, pct: int) -> None:
        assert Offset.parse(f"{pct}%").resolve(100) == pct

    def test_percentage_is_monotonic(self) -> None:
        values = [Offset.parse(f"{p}%").resolve(37) for p in range(0, 101)]
        assert values == sorted(values)

    def test_garbage_is_none(self) -> None:
        assert Offset.parse("abc") is None
        assert Offset.parse("%") is None
        assert Offset.parse(None) is None

    def test_literal_is_truncated(self) -> None:
        assert Offset.parse("3.7").resolve(80) == 3


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


class TestStyle:
    """Typed view derived from declarations."""

    def test_defaults(self) -> None:
        style = Style.from_declarations({})
        assert style.position == "static"
        assert not style.fixed
        assert style.text_align == "left"
        assert style.top is None
        assert style.max_width is None

    def test_fixed(self) -> None:
        style = Style.from_declarations({"position": "fixed", "top": "2"})
        assert style.fixed
        assert style.top == Offset(Fraction(2))

    def test_unknown_position_is_static(self) -> None:
        assert Style.from_declarations({"position": "absolute"}).position == "static"

    def test_unknown_text_align_falls_back_to_left(self) -> None:
        assert Style.from_declarations({"text-align": "justify"}).text_align == "left"

    def test_maxima(self) -> None:
        style = Style.from_declarations({"max-width": "50", "max-height": "x"})
        assert style.max_width == 50
        assert style.max_height is None


# ---------------------------------------------------------------------------
# StyleSheet
# ---------------------------------------------------------------------------


class TestStyleSheet:
    """Raw declarations plus their typed style."""

    def test_parse_and_get(self) -> None:
        sheet = StyleSheet.parse("middle: 50%; text-align: center")
        assert sheet.get("middle") == "50%"
        assert sheet.get("top") is None
        assert sheet.style.text_align == "center"
        assert len(sheet) == 2

    def test_merged_overrides_matching_keys_only(self) -> None:
        base = StyleSheet.parse("top: 1; left: 2")
        merged = base.merged(StyleSheet.parse("top: 3"))
        assert merged.as_dict() == {"top": "3", "left": "2"}
        # The original is untouched
        assert base.get("top") == "1"

    def test_as_dict_is_a_copy(self) -> None:
        sheet = StyleSheet.parse("top: 1")
        sheet.as_dict()["top"] = "9"
        assert sheet.get("top") == "1"

    def test_equality(self) -> None:
        assert StyleSheet.parse("top: 1") == StyleSheet({"top": "1"})
