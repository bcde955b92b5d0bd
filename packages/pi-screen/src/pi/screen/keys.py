"""Logical key identifiers and the raw sequences terminals send for them.

A keymap binds each logical key to exactly one raw sequence. Terminals
disagree on a handful of keys, so ``XTERM_KEYMAP`` overrides those
bindings of ``DEFAULT_KEYMAP``. :class:`KeyDecoder` turns raw stdin chunks
into logical keys using a keymap and a :class:`StdinBuffer`.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from pi.screen.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_KEYMAP",
    "KEYMAPS",
    "Key",
    "KeyDecoder",
    "KeyHandler",
    "KeyId",
    "XTERM_KEYMAP",
    "keymap_for_term",
    "parse_key",
]

KeyId = str


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    f1 = "f1"
    f2 = "f2"
    f3 = "f3"
    f4 = "f4"
    f5 = "f5"
    f6 = "f6"
    f7 = "f7"
    f8 = "f8"
    f9 = "f9"
    f10 = "f10"
    f11 = "f11"
    f12 = "f12"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


# ---------------------------------------------------------------------------
# Keymaps: logical key -> raw sequence
# ---------------------------------------------------------------------------

DEFAULT_KEYMAP: dict[KeyId, str] = {
    Key.escape: "\x1b",
    Key.enter: "\r",
    Key.tab: "\t",
    Key.backspace: "\x08",
    Key.delete: "\x1b[3~",
    Key.insert: "\x1b[2~",
    Key.home: "\x1b[1~",
    Key.end: "\x1b[4~",
    Key.page_up: "\x1b[5~",
    Key.page_down: "\x1b[6~",
    Key.up: "\x1b[A",
    Key.down: "\x1b[B",
    Key.right: "\x1b[C",
    Key.left: "\x1b[D",
    Key.f1: "\x1b[11~",
    Key.f2: "\x1b[12~",
    Key.f3: "\x1b[13~",
    Key.f4: "\x1b[14~",
    Key.f5: "\x1b[15~",
    Key.f6: "\x1b[17~",
    Key.f7: "\x1b[18~",
    Key.f8: "\x1b[19~",
    Key.f9: "\x1b[20~",
    Key.f10: "\x1b[21~",
    Key.f11: "\x1b[23~",
    Key.f12: "\x1b[24~",
}

XTERM_KEYMAP: dict[KeyId, str] = {
    **DEFAULT_KEYMAP,
    Key.home: "\x1bOH",
    Key.end: "\x1bOF",
    Key.backspace: "\x7f",
    Key.f1: "\x1bOP",
    Key.f2: "\x1bOQ",
    Key.f3: "\x1bOR",
    Key.f4: "\x1bOS",
}

KEYMAPS: dict[str, dict[KeyId, str]] = {
    "default": DEFAULT_KEYMAP,
    "xterm": XTERM_KEYMAP,
}


def keymap_for_term(term: str | None) -> str:
    """Return the keymap name for a ``TERM`` value."""
    if term and term.startswith("xterm"):
        return "xterm"
    return "default"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _reverse(keymap: Mapping[KeyId, str]) -> dict[str, KeyId]:
    return {sequence: key for key, sequence in keymap.items()}


def _parse_with(data: str, sequences: Mapping[str, KeyId]) -> KeyId | None:
    if not data:
        return None

    key = sequences.get(data)
    if key is not None:
        return key

    # Terminals in line mode send LF for enter
    if data == "\n":
        return Key.enter

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return Key.ctrl(chr(code + ord("a") - 1))
        if data.isprintable():
            return data

    return None


def parse_key(data: str, keymap: Mapping[KeyId, str] = DEFAULT_KEYMAP) -> KeyId | None:
    """Return the logical key for one complete raw sequence, or ``None``.

    Bound sequences map to their key name, control bytes to ``ctrl+<letter>``,
    and a printable character to itself.
    """
    return _parse_with(data, _reverse(keymap))


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

KeyHandler = Callable[[KeyId | None, str], None]


class KeyDecoder:
    """Decodes raw terminal input into logical keys.

    Handlers are called with ``(key, raw)``; *key* is ``None`` for input no
    binding matches, so callers can still see the raw bytes.
    """

    def __init__(
        self,
        keymap: Mapping[KeyId, str] = DEFAULT_KEYMAP,
        *,
        timeout: float = 0.01,
    ) -> None:
        self.keymap: dict[KeyId, str] = dict(keymap)
        self._sequences = _reverse(self.keymap)
        self._handlers: list[KeyHandler] = []
        self._buffer = StdinBuffer(timeout=timeout)
        self._buffer.on_data(self._on_sequence)

    def on_key(self, handler: KeyHandler) -> None:
        self._handlers.append(handler)

    def feed(self, data: str) -> None:
        """Feed a raw chunk read from the terminal."""
        self._buffer.process(data)

    def decode(self, data: str) -> KeyId | None:
        return _parse_with(data, self._sequences)

    def clear(self) -> None:
        self._buffer.clear()

    def _on_sequence(self, data: str) -> None:
        key = self.decode(data)
        if key is None:
            logger.debug("unbound input %r", data)
        for handler in self._handlers:
            handler(key, data)
