"""Terminal output device: cursor placement, colors, raw-mode stdin.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
backed by ``sys.stdin``/``sys.stdout`` that manages raw mode, cursor
visibility, resize notification via SIGWINCH, and the color-name table
used when composing element lines.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

__all__ = ["BG_COLORS", "FG_COLORS", "ProcessTerminal", "Terminal"]

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_SET_POS_FMT = "\x1b[{};{}H"
_SET_COL_FMT = "\x1b[{}G"

# ---------------------------------------------------------------------------
# Color tables (SGR parameters)
# ---------------------------------------------------------------------------

_COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

FG_COLORS: dict[str, str] = {
    **{name: str(30 + i) for i, name in enumerate(_COLOR_NAMES)},
    **{f"bright-{name}": str(90 + i) for i, name in enumerate(_COLOR_NAMES)},
    "default": "39",
}

BG_COLORS: dict[str, str] = {
    **{name: str(40 + i) for i, name in enumerate(_COLOR_NAMES)},
    **{f"bright-{name}": str(100 + i) for i, name in enumerate(_COLOR_NAMES)},
    "default": "49",
}


def fg_color(name: str) -> str:
    """Return the foreground SGR code for *name*, or ``""`` if unknown."""
    return FG_COLORS.get(name.strip().lower(), "")


def bg_color(name: str) -> str:
    """Return the background SGR code for *name*, or ``""`` if unknown."""
    return BG_COLORS.get(name.strip().lower(), "")


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the output device elements render onto."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def set_pos(self, row: int, col: int) -> None: ...

    def set_col(self, col: int) -> None: ...

    def get_fg_color(self, name: str) -> str: ...

    def get_bg_color(self, name: str) -> str: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by ``sys.stdin``/``sys.stdout``.

    Raw mode is entered on :meth:`start` and the previous ``termios``
    attributes are restored on :meth:`stop`. Input is read by an asyncio
    reader when an event loop is available; resize events arrive through
    SIGWINCH.
    """

    def __init__(self, write_log_path: str | None = None) -> None:
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self._stdin_reader_active: bool = False
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._write_log_path: str = write_log_path or ""

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Enable raw mode and begin reading stdin."""
        self._input_handler = on_input
        self._resize_handler = on_resize

        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._start_stdin_reader()
        logger.debug("terminal started (%dx%d)", self.rows, self.columns)

    def stop(self) -> None:
        """Restore terminal state and clean up all handlers."""
        self._remove_stdin_reader()

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        if self._original_termios is not None:
            termios.tcsetattr(
                sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
            self._original_termios = None

        self._input_handler = None
        self._resize_handler = None
        logger.debug("terminal stopped")

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write *data* to stdout and, if configured, to the write log.

        Errors from stdout propagate; the write log is best effort.
        """
        sys.stdout.write(data)
        sys.stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("cannot append to write log %s", self._write_log_path)

    # -- cursor / screen manipulation --------------------------------------

    def set_pos(self, row: int, col: int) -> None:
        """Move the cursor to 1-based (*row*, *col*)."""
        self.write(_SET_POS_FMT.format(row, col))

    def set_col(self, col: int) -> None:
        """Move the cursor to *col* on the current row."""
        self.write(_SET_COL_FMT.format(col))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def clear_screen(self) -> None:
        self.write(_CLEAR_SCREEN)

    # -- colors --------------------------------------------------------------

    def get_fg_color(self, name: str) -> str:
        return fg_color(name)

    def get_bg_color(self, name: str) -> str:
        return bg_color(name)

    # -- private: stdin reading --------------------------------------------

    def _start_stdin_reader(self) -> None:
        """Register an asyncio reader on stdin."""
        if self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_event_loop()
            loop.add_reader(sys.stdin.fileno(), self._on_stdin_readable)
            self._stdin_reader_active = True
        except RuntimeError:
            logger.debug("no event loop, stdin reader not registered")

    def _remove_stdin_reader(self) -> None:
        if not self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_event_loop()
            loop.remove_reader(sys.stdin.fileno())
        except (RuntimeError, ValueError):
            pass
        self._stdin_reader_active = False

    def _on_stdin_readable(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError:
            return

        if raw and self._input_handler is not None:
            self._input_handler(raw.decode("utf-8", errors="replace"))

    # -- private: SIGWINCH -------------------------------------------------

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        if self._resize_handler is not None:
            self._resize_handler()
