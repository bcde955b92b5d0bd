"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

``VirtualTerminal`` satisfies ``pi.screen.terminal.Terminal`` without
performing any real I/O. Every operation is recorded in ``calls`` as a
tuple so tests can assert on cursor placement and written text separately.
"""

from __future__ import annotations

from typing import Callable

from pi.screen.terminal import bg_color, fg_color


class VirtualTerminal:
    """In-memory terminal that records all operations for test inspection.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self.calls: list[tuple] = []
        self._started = False
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self.cursor_visible = True

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Terminal protocol: lifecycle ---------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._input_handler = on_input
        self._resize_handler = on_resize
        self._started = True

    def stop(self) -> None:
        self._started = False
        self._input_handler = None
        self._resize_handler = None

    @property
    def started(self) -> bool:
        return self._started

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        self.calls.append(("write", data))

    def set_pos(self, row: int, col: int) -> None:
        self.calls.append(("set_pos", row, col))

    def set_col(self, col: int) -> None:
        self.calls.append(("set_col", col))

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        self.calls.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.cursor_visible = True
        self.calls.append(("show_cursor",))

    def clear_screen(self) -> None:
        self.calls.append(("clear_screen",))

    def get_fg_color(self, name: str) -> str:
        return fg_color(name)

    def get_bg_color(self, name: str) -> str:
        return bg_color(name)

    # -- Test helpers -------------------------------------------------------

    @property
    def output(self) -> str:
        """Return everything written as a single string."""
        return "".join(call[1] for call in self.calls if call[0] == "write")

    @property
    def write_count(self) -> int:
        return sum(1 for call in self.calls if call[0] == "write")

    def clear(self) -> None:
        """Discard all recorded operations."""
        self.calls.clear()

    def simulate_input(self, data: str) -> None:
        """Feed *data* into the registered input handler."""
        if self._input_handler is None:
            raise RuntimeError(
                "No input handler registered -- call start() first"
            )
        self._input_handler(data)

    def simulate_resize(self, rows: int | None = None, columns: int | None = None) -> None:
        """Change terminal dimensions and fire the resize callback."""
        if rows is not None:
            self._rows = rows
        if columns is not None:
            self._columns = columns
        if self._resize_handler is not None:
            self._resize_handler()
