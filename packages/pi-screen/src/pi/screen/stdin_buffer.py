"""Split raw stdin chunks into complete key sequences.

Reads from a terminal can split an escape sequence across chunks, and a
lone ESC byte is indistinguishable from the start of a sequence until
either more bytes arrive or a short timeout passes. ``StdinBuffer`` holds
incomplete sequences back and releases them on completion or timeout.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Literal

__all__ = ["ESC", "SequenceStatus", "StdinBuffer"]

ESC = "\x1b"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]


def _sequence_status(data: str) -> SequenceStatus:
    """Classify *data* as a complete escape sequence, a prefix, or plain input."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    # CSI: ESC [ params final-byte
    if introducer == "[":
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"

    # OSC / DCS / APC: terminated by BEL or ST
    if introducer in "]P_":
        if data.endswith(f"{ESC}\\") or (introducer == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    # SS3: ESC O <char>
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    # Meta: ESC <char>
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]
        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        for end in range(1, len(remaining) + 1):
            if _sequence_status(remaining[:end]) == "complete":
                sequences.append(remaining[:end])
                pos += end
                break
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences."""

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout: float = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._on_data: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set the callback receiving each complete sequence."""
        self._on_data = callback

    def _emit(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def process(self, data: str) -> None:
        """Feed a chunk of raw input."""
        self._cancel_timeout()
        self._buffer += data

        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        for sequence in sequences:
            self._emit(sequence)

        if not self._buffer:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - nothing else can arrive before we return
            for sequence in self.flush():
                self._emit(sequence)
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit(sequence)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def flush(self) -> list[str]:
        """Return and clear whatever is buffered, as a single sequence."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""

    def get_buffer(self) -> str:
        return self._buffer
