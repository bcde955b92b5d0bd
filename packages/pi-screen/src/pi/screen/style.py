"""Style declarations for screen elements.

A style is written as a CSS-like declaration string::

    "position: fixed; top: 0; right: 10%; text-align: center"

Parsing is permissive: a declaration that does not split into exactly one
key and one value is dropped, never reported. The raw string mapping is
kept for ``get_style`` lookups, and a typed :class:`Style` is derived from
it once per assignment so the layout code never re-parses strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Literal, Mapping, get_args

__all__ = [
    "Offset",
    "PositionMode",
    "Style",
    "StyleSheet",
    "TextAlign",
    "parse_declarations",
]

PositionMode = Literal["static", "fixed"]
TextAlign = Literal["left", "center", "right"]

_TEXT_ALIGNS: tuple[str, ...] = get_args(TextAlign)


def parse_declarations(text: str) -> dict[str, str]:
    """Parse ``key: value; key: value`` into a dict.

    Later declarations of the same key win. Candidates without a colon, or
    with more than one, are skipped, as are empty keys.
    """
    result: dict[str, str] = {}
    for candidate in text.split(";"):
        tokens = candidate.split(":")
        if len(tokens) != 2:
            continue
        key = tokens[0].strip()
        if not key:
            continue
        result[key] = tokens[1].strip()
    return result


# ---------------------------------------------------------------------------
# Typed values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Offset:
    """An edge offset: a literal cell count or a percentage of an extent."""

    value: Fraction
    percent: bool = False

    @classmethod
    def parse(cls, raw: str | None) -> Offset | None:
        """Parse ``"5"`` or ``"12.5%"``; anything else yields ``None``."""
        if raw is None:
            return None
        raw = raw.strip()
        percent = raw.endswith("%")
        if percent:
            raw = raw[:-1].rstrip()
        try:
            value = Fraction(raw)
        except (ValueError, ZeroDivisionError):
            return None
        return cls(value, percent)

    def resolve(self, extent: int) -> int:
        """Return the offset in cells against *extent*.

        Percentages are rounded up; literals are truncated to an integer.
        """
        if self.percent:
            return math.ceil(extent * self.value / 100)
        return int(self.value)


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Style:
    """Typed view of the style properties the layout engine understands."""

    position: PositionMode = "static"
    top: Offset | None = None
    bottom: Offset | None = None
    left: Offset | None = None
    middle: Offset | None = None
    right: Offset | None = None
    text_align: TextAlign = "left"
    max_width: int | None = None
    max_height: int | None = None

    @property
    def fixed(self) -> bool:
        return self.position == "fixed"

    @classmethod
    def from_declarations(cls, declarations: Mapping[str, str]) -> Style:
        align = declarations.get("text-align", "left")
        if align not in _TEXT_ALIGNS:
            align = "left"
        position = "fixed" if declarations.get("position") == "fixed" else "static"
        return cls(
            position=position,  # type: ignore[arg-type]
            top=Offset.parse(declarations.get("top")),
            bottom=Offset.parse(declarations.get("bottom")),
            left=Offset.parse(declarations.get("left")),
            middle=Offset.parse(declarations.get("middle")),
            right=Offset.parse(declarations.get("right")),
            text_align=align,  # type: ignore[arg-type]
            max_width=_parse_int(declarations.get("max-width")),
            max_height=_parse_int(declarations.get("max-height")),
        )


# ---------------------------------------------------------------------------
# StyleSheet
# ---------------------------------------------------------------------------


class StyleSheet:
    """The declarations assigned to one element plus their typed form."""

    def __init__(self, declarations: Mapping[str, str] | None = None) -> None:
        self._declarations: dict[str, str] = dict(declarations or {})
        self.style = Style.from_declarations(self._declarations)

    @classmethod
    def parse(cls, text: str) -> StyleSheet:
        return cls(parse_declarations(text))

    def merged(self, other: StyleSheet) -> StyleSheet:
        """Return a sheet where *other*'s keys override this sheet's."""
        return StyleSheet({**self._declarations, **other._declarations})

    def get(self, key: str) -> str | None:
        return self._declarations.get(key)

    def as_dict(self) -> dict[str, str]:
        return dict(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyleSheet):
            return NotImplemented
        return self._declarations == other._declarations

    def __repr__(self) -> str:
        body = "; ".join(f"{k}: {v}" for k, v in self._declarations.items())
        return f"StyleSheet({body!r})"
