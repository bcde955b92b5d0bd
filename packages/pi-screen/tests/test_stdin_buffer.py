"""Tests for pi.screen.stdin_buffer.StdinBuffer."""

from __future__ import annotations

import asyncio

import pytest

from pi.screen.stdin_buffer import (
    ESC,
    StdinBuffer,
    _extract_complete_sequences,
    _sequence_status,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_buffer(timeout: float = 0.01) -> tuple[StdinBuffer, list[str]]:
    buf = StdinBuffer(timeout=timeout)
    data: list[str] = []
    buf.on_data(data.append)
    return buf, data


# ---------------------------------------------------------------------------
# Sequence classification
# ---------------------------------------------------------------------------


class TestSequenceStatus:
    @pytest.mark.parametrize(
        "data, status",
        [
            ("a", "not-escape"),
            (ESC, "incomplete"),
            (f"{ESC}[", "incomplete"),
            (f"{ESC}[1", "incomplete"),
            (f"{ESC}[A", "complete"),
            (f"{ESC}[15~", "complete"),
            (f"{ESC}O", "incomplete"),
            (f"{ESC}OH", "complete"),
            (f"{ESC}x", "complete"),
            (f"{ESC}]0;title", "incomplete"),
            (f"{ESC}]0;title\x07", "complete"),
            (f"{ESC}_payload{ESC}\\", "complete"),
        ],
    )
    def test_status(self, data: str, status: str) -> None:
        assert _sequence_status(data) == status


class TestExtractCompleteSequences:
    def test_plain_characters(self) -> None:
        assert _extract_complete_sequences("abc") == (["a", "b", "c"], "")

    def test_mixed(self) -> None:
        assert _extract_complete_sequences(f"a{ESC}[Bb") == (["a", f"{ESC}[B", "b"], "")

    def test_incomplete_tail(self) -> None:
        assert _extract_complete_sequences(f"a{ESC}[1") == (["a"], f"{ESC}[1")


# ---------------------------------------------------------------------------
# StdinBuffer without an event loop
# ---------------------------------------------------------------------------


class TestStdinBufferSync:
    def test_complete_sequences_emitted(self) -> None:
        buf, data = make_buffer()
        buf.process(f"x{ESC}OP")
        assert data == ["x", f"{ESC}OP"]
        assert buf.get_buffer() == ""

    def test_incomplete_flushed_immediately(self) -> None:
        buf, data = make_buffer()
        buf.process(ESC)
        assert data == [ESC]

    def test_flush_returns_pending(self) -> None:
        buf, _ = make_buffer()
        buf._buffer = f"{ESC}["
        assert buf.flush() == [f"{ESC}["]
        assert buf.flush() == []

    def test_clear(self) -> None:
        buf, _ = make_buffer()
        buf._buffer = ESC
        buf.clear()
        assert buf.get_buffer() == ""


# ---------------------------------------------------------------------------
# StdinBuffer with an event loop
# ---------------------------------------------------------------------------


class TestStdinBufferAsync:
    @pytest.mark.asyncio
    async def test_split_sequence_is_joined(self) -> None:
        buf, data = make_buffer(timeout=0.05)
        buf.process(f"{ESC}[")
        assert data == []
        buf.process("A")
        assert data == [f"{ESC}[A"]

    @pytest.mark.asyncio
    async def test_lone_escape_released_after_timeout(self) -> None:
        buf, data = make_buffer(timeout=0.01)
        buf.process(ESC)
        assert data == []
        await asyncio.sleep(0.05)
        assert data == [ESC]

    @pytest.mark.asyncio
    async def test_new_input_cancels_timeout(self) -> None:
        buf, data = make_buffer(timeout=0.02)
        buf.process(ESC)
        buf.process("OS")
        await asyncio.sleep(0.05)
        assert data == [f"{ESC}OS"]
