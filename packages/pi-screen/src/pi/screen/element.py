"""Elements: positioned, styled blocks of text lines.

An ``Element`` owns its lines and style and renders itself through the
output device of its container. The container link is a weak reference,
so a container that tracks its children and a focused child never forms
an ownership cycle with them. ``Group`` is an element that is itself a
container for other elements.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Iterable, Protocol, Union

from pi.screen.compose import Line, compose_line
from pi.screen.layout import (
    Size,
    resolve_align_width,
    resolve_col,
    resolve_h_offset,
    resolve_placement,
    resolve_row,
)
from pi.screen.style import Style, StyleSheet
from pi.screen.utils import visible_width

if TYPE_CHECKING:
    from pi.screen.keys import KeyDecoder
    from pi.screen.terminal import Terminal

logger = logging.getLogger(__name__)

__all__ = ["Container", "DetachedElementError", "Element", "Group"]


class DetachedElementError(RuntimeError):
    """Raised when an element needs its container but has none."""


class Container(Protocol):
    """What an element needs from whatever holds it."""

    def get_size(self) -> Size: ...

    def get_max_height(self) -> int: ...

    def get_max_width(self) -> int: ...

    def set_focus(self, element: Element | None) -> None: ...

    def release_focus(self, element: Element) -> None: ...

    def remove(self, element: Element) -> None: ...

    def get_output(self) -> Terminal: ...

    def get_input(self) -> KeyDecoder: ...


class Element:
    """A block of text lines placed on the screen according to its style."""

    def __init__(self, element_id: str) -> None:
        self._id = element_id
        self._lines: list[Line] = []
        self._style_sheet = StyleSheet()
        self._parent: weakref.ref[Container] | None = None
        self._size: Size | None = None
        self._has_changes = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id!r})"

    # -- identity / container ------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    def get_id(self) -> str:
        return self._id

    def get_parent(self) -> Container | None:
        """Return the container, or ``None`` if detached or released."""
        if self._parent is None:
            return None
        return self._parent()

    def set_parent(self, parent: Container | None) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None
        self._size = None

    def contains(self, element: Element) -> bool:
        """Return whether *element* is this element or one nested in it."""
        return element is self

    def detach(self) -> None:
        """Remove the element from its current container, if any."""
        parent = self.get_parent()
        if parent is not None:
            parent.remove(self)

    def _container(self) -> Container:
        parent = self.get_parent()
        if parent is None:
            raise DetachedElementError(f"element {self._id!r} has no container")
        return parent

    def get_output(self) -> Terminal:
        return self._container().get_output()

    def get_input(self) -> KeyDecoder:
        return self._container().get_input()

    # -- focus ----------------------------------------------------------------

    def set_focus(self) -> None:
        """Ask the container to make this the focused element."""
        self._container().set_focus(self)

    def apply_focus(self) -> None:
        """Move the cursor just past the end of the element's content."""
        output = self.get_output()
        width = self.get_width()
        row, col = resolve_placement(self.style, self.get_size(), width)
        if row is None:
            output.set_col(col + width)
        else:
            output.set_pos(row, col + width)

    # -- text -----------------------------------------------------------------

    def set_text(self, text: str) -> None:
        """Replace the content with *text*, one line per ``\\n``-separated part."""
        self.set_lines(text.split("\n"))

    def set_lines(self, lines: Iterable[Union[Line, str]]) -> None:
        """Replace the content with *lines*; plain strings become untagged lines."""
        self._lines = [line if isinstance(line, Line) else Line(line) for line in lines]
        self._has_changes = True

    def get_lines(self) -> list[Line]:
        return list(self._lines)

    # -- style ----------------------------------------------------------------

    def set_style(self, declarations: str, *, merge: bool = False) -> None:
        """Assign a ``key: value; ...`` style.

        The previous style is replaced; with *merge* the new declarations
        are layered over it instead.
        """
        sheet = StyleSheet.parse(declarations)
        if merge:
            sheet = self._style_sheet.merged(sheet)
        self._style_sheet = sheet
        self._has_changes = True

    def get_style(self, key: str | None = None) -> str | dict[str, str] | None:
        """Return one declared value (``None`` if unset), or all of them."""
        if key:
            return self._style_sheet.get(key)
        return self._style_sheet.as_dict()

    @property
    def style(self) -> Style:
        return self._style_sheet.style

    # -- geometry -------------------------------------------------------------

    def get_width(self) -> int:
        return max((visible_width(line.text) for line in self._lines), default=0)

    def get_height(self) -> int:
        return len(self._lines)

    def get_max_height(self) -> int:
        inherited = self._container().get_max_height()
        own = self.style.max_height
        return inherited if own is None else min(own, inherited)

    def get_max_width(self) -> int:
        inherited = self._container().get_max_width()
        own = self.style.max_width
        return inherited if own is None else min(own, inherited)

    def get_size(self) -> Size:
        """Return the viewport size, fetched from the container once."""
        if self._size is None:
            self._size = self._container().get_size()
        return self._size

    # -- rendering ------------------------------------------------------------

    @property
    def has_changes(self) -> bool:
        return self._has_changes

    def invalidate(self) -> None:
        """Forget the cached viewport size and mark the element for redraw."""
        self._size = None
        self._has_changes = True

    def render(self, force: bool = False) -> bool:
        """Write the element if it changed (or *force*); return whether it did."""
        if not force and not self._has_changes:
            return False

        output = self.get_output()
        style = self.style
        size = self.get_size()
        width = self.get_width()
        h_offset = resolve_h_offset(style, size, width)
        align_width = resolve_align_width(style, size, width)
        row = resolve_row(style, size)

        for line in self._lines:
            col = resolve_col(style, h_offset, visible_width(line.text), align_width)
            text = compose_line(line, output)
            if row is not None:
                output.set_pos(row, col)
                output.write(text)
                row += 1
            else:
                output.set_col(col)
                output.write(text + "\n")

        self._has_changes = False
        logger.debug("rendered %r (%d lines)", self._id, len(self._lines))
        return True


class Group(Element):
    """An element that holds other elements and acts as their container.

    Children see the group's viewport size and have their maxima clamped by
    the group's own. Focus requests are passed on to the group's container.
    """

    def __init__(self, element_id: str) -> None:
        super().__init__(element_id)
        self._children: list[Element] = []

    @property
    def children(self) -> list[Element]:
        return list(self._children)

    def contains(self, element: Element) -> bool:
        return element is self or any(child.contains(element) for child in self._children)

    def add(self, element: Element) -> Element:
        """Attach *element* as the last child, moving it out of any other container."""
        if element.get_parent() is not self:
            element.detach()
            element.set_parent(self)
            self._children.append(element)
        return element

    def remove(self, element: Element) -> None:
        try:
            self._children.remove(element)
        except ValueError:
            return
        self.release_focus(element)
        element.set_parent(None)

    def set_focus(self, element: Element | None = None) -> None:  # type: ignore[override]
        self._container().set_focus(self if element is None else element)

    def release_focus(self, element: Element) -> None:
        """Pass a focus release up to the window; a detached group has none to drop."""
        parent = self.get_parent()
        if parent is not None:
            parent.release_focus(element)

    def invalidate(self) -> None:
        super().invalidate()
        for child in self._children:
            child.invalidate()

    def render(self, force: bool = False) -> bool:
        """Render the group's own lines, then each child in order."""
        wrote = super().render(force)
        for child in self._children:
            wrote = child.render(force) or wrote
        return wrote
