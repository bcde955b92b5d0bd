"""Position resolution: style + viewport size + content extent -> grid cell.

All functions here are pure. Rows and columns are 1-based terminal
coordinates, except that a horizontal offset of ``0`` means "no offset
declared" and a row of ``None`` means the element flows with the cursor
instead of being pinned to an absolute row.

``text-align`` aligns lines inside the element's own width only when the
element is anchored by ``left``, ``middle`` or ``right``. Without an anchor
lines align across the full viewport width, so ``text-align: center`` alone
centers each line on the screen and ``text-align: right`` alone pins it to
the right edge.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from pi.screen.style import Style

__all__ = [
    "Placement",
    "Size",
    "resolve_align_width",
    "resolve_col",
    "resolve_h_offset",
    "resolve_placement",
    "resolve_row",
]


class Size(NamedTuple):
    """Extent of a viewport in character cells."""

    rows: int
    cols: int


class Placement(NamedTuple):
    """Where the first line of an element lands. ``row`` is ``None`` in flow."""

    row: int | None
    col: int


def resolve_h_offset(style: Style, size: Size, width: int) -> int:
    """Return the element's horizontal offset.

    Exactly one of ``right``, ``middle`` and ``left`` is honoured, checked
    in that order::

        right  -> cols - width - right + 1
        middle -> middle - floor(width / 2) + 1
        left   -> left + 1
        none   -> 0
    """
    if style.right is not None:
        right = style.right.resolve(size.cols)
        return size.cols - width - right + 1
    if style.middle is not None:
        middle = style.middle.resolve(size.cols)
        return middle - width // 2 + 1
    if style.left is not None:
        return style.left.resolve(size.cols) + 1
    return 0


def resolve_align_width(style: Style, size: Size, width: int) -> int:
    """Return the width lines are aligned within.

    An element that declares a horizontal offset aligns its lines inside its
    own *width*; one that does not aligns them across the whole viewport.
    """
    if style.right is None and style.middle is None and style.left is None:
        return size.cols
    return width


def resolve_row(style: Style, size: Size) -> int | None:
    """Return the first row of a fixed element, or ``None`` for flow.

    ``top`` takes precedence over ``bottom``. A fixed element that declares
    neither also flows.
    """
    if not style.fixed:
        return None
    if style.top is not None:
        return style.top.resolve(size.rows) + 1
    if style.bottom is not None:
        return size.rows - style.bottom.resolve(size.rows)
    return None


def resolve_col(style: Style, h_offset: int, line_length: int, width: int) -> int:
    """Return the start column of a line of *line_length* cells.

    The line is aligned inside *width* cells starting at *h_offset*,
    according to ``text-align``.
    """
    if style.text_align == "center":
        return h_offset + math.floor(width / 2 - line_length / 2)
    if style.text_align == "right":
        return h_offset + width - line_length
    return h_offset


def resolve_placement(
    style: Style, size: Size, width: int, line_length: int | None = None
) -> Placement:
    """Resolve row and column for a line of an element *width* cells wide.

    *line_length* defaults to *width*, i.e. the widest line.
    """
    if line_length is None:
        line_length = width
    h_offset = resolve_h_offset(style, size, width)
    align_width = resolve_align_width(style, size, width)
    return Placement(
        resolve_row(style, size),
        resolve_col(style, h_offset, line_length, align_width),
    )
