"""The root container: owns elements, the focus relation and the terminal."""

from __future__ import annotations

import logging
from typing import Iterator, Union

from pi.screen.config import Config
from pi.screen.element import Element
from pi.screen.keys import KeyDecoder, KeyHandler
from pi.screen.layout import Size
from pi.screen.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

__all__ = ["Window"]


class Window:
    """Top-level container rendering elements onto a terminal.

    Elements are kept by id in insertion order and rendered in that order.
    At most one element has focus; after each render pass that wrote
    something, the cursor is parked just past the focused element.
    """

    def __init__(self, terminal: Terminal, config: Config | None = None) -> None:
        self.terminal: Terminal = terminal
        self.config: Config = config if config is not None else Config()
        self._elements: dict[str, Element] = {}
        self._focused: Element | None = None
        self._focus_changed = False
        self._started = False
        self._input = KeyDecoder(
            self.config.get_keymap(), timeout=self.config.esc_timeout
        )

    @classmethod
    def create(cls, config: Config | None = None) -> Window:
        """Build a window on the process terminal, configured from the environment."""
        if config is None:
            config = Config.from_env()
        return cls(ProcessTerminal(write_log_path=config.write_log), config)

    # -- container interface ------------------------------------------------

    def get_size(self) -> Size:
        return Size(self.terminal.rows, self.terminal.columns)

    def get_max_height(self) -> int:
        return self.terminal.rows

    def get_max_width(self) -> int:
        return self.terminal.columns

    def get_output(self) -> Terminal:
        return self.terminal

    def get_input(self) -> KeyDecoder:
        return self._input

    def set_focus(self, element: Element | None) -> None:
        """Make *element* the single focused element (``None`` clears focus)."""
        if element is self._focused:
            return
        self._focused = element
        self._focus_changed = True
        logger.debug("focus -> %r", element)

    def get_focus(self) -> Element | None:
        return self._focused

    def release_focus(self, element: Element) -> None:
        """Clear focus if it rests on *element* or on anything nested in it."""
        if self._focused is not None and element.contains(self._focused):
            self.set_focus(None)

    # -- element registry ---------------------------------------------------

    def add(self, element: Element) -> Element:
        """Attach *element*; an element already registered under its id is replaced.

        An element still held by another container (a group) is moved out of
        it first.
        """
        previous = self._elements.get(element.id)
        if previous is not None and previous is not element:
            self.remove(previous)
        if element.get_parent() is not self:
            element.detach()
        element.set_parent(self)
        self._elements[element.id] = element
        return element

    def remove(self, element: Union[Element, str]) -> None:
        element_id = element if isinstance(element, str) else element.id
        removed = self._elements.pop(element_id, None)
        if removed is None:
            return
        self.release_focus(removed)
        removed.set_parent(None)

    def get(self, element_id: str) -> Element:
        return self._elements[element_id]

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements.values()))

    @property
    def elements(self) -> list[Element]:
        return list(self._elements.values())

    # -- rendering ----------------------------------------------------------

    def render(self, force: bool = False) -> bool:
        """Render every changed element (all of them with *force*)."""
        wrote = False
        for element in self.elements:
            wrote = element.render(force) or wrote

        if self._focused is not None and (wrote or self._focus_changed):
            self._focused.apply_focus()
        self._focus_changed = False
        return wrote

    def handle_resize(self) -> None:
        """Drop cached sizes and redraw everything at the new size."""
        logger.debug("resize to %dx%d", self.terminal.rows, self.terminal.columns)
        for element in self.elements:
            element.invalidate()
        if self._started:
            self.terminal.clear_screen()
            self.render(force=True)

    # -- lifecycle ----------------------------------------------------------

    def on_key(self, handler: KeyHandler) -> None:
        self._input.on_key(handler)

    def start(self) -> None:
        """Take over the terminal and draw every element."""
        self.terminal.start(self._input.feed, self.handle_resize)
        self._started = True
        if self.config.hide_cursor:
            self.terminal.hide_cursor()
        self.terminal.clear_screen()
        self.render(force=True)

    def stop(self) -> None:
        """Give the terminal back."""
        if not self._started:
            return
        self._input.clear()
        if self.config.hide_cursor:
            self.terminal.show_cursor()
        self.terminal.stop()
        self._started = False
