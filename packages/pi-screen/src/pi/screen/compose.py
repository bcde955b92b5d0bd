"""Compose one text line with its colors into an SGR-wrapped string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["Line", "Palette", "SGR_RESET", "compose_line"]

SGR_RESET = "\x1b[0m"


class Palette(Protocol):
    """Maps symbolic color names to SGR parameter codes.

    Unknown names resolve to an empty string.
    """

    def get_fg_color(self, name: str) -> str: ...

    def get_bg_color(self, name: str) -> str: ...


@dataclass(frozen=True)
class Line:
    """A single line of element text with optional color tags."""

    text: str
    color: str | None = None
    background: str | None = None


def compose_line(line: Line, palette: Palette) -> str:
    """Return *line*'s text, wrapped in SGR set/reset codes if it has a color tag.

    Codes are joined as the palette returns them, so an unknown name still
    contributes its empty code.
    """
    codes: list[str] = []
    if line.color is not None:
        codes.append(palette.get_fg_color(line.color))
    if line.background is not None:
        codes.append(palette.get_bg_color(line.background))

    if not codes:
        return line.text
    return f"\x1b[{';'.join(codes)}m{line.text}{SGR_RESET}"
