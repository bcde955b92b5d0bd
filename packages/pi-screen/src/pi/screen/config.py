"""Runtime configuration for a screen window."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from pi.screen.keys import KEYMAPS, keymap_for_term

DEFAULT_ESC_TIMEOUT = 0.01


@dataclass
class Config:
    """Window configuration.

    ``keymap`` names an entry of :data:`pi.screen.keys.KEYMAPS`;
    ``esc_timeout`` is how long, in seconds, a lone ESC byte is held back
    waiting for the rest of a sequence.
    """

    keymap: str = "default"
    esc_timeout: float = DEFAULT_ESC_TIMEOUT
    write_log: str | None = None
    hide_cursor: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from ``TERM`` and the ``PI_SCREEN_*`` variables."""
        env = os.environ if environ is None else environ

        try:
            esc_timeout = float(env.get("PI_SCREEN_ESC_TIMEOUT", DEFAULT_ESC_TIMEOUT))
        except ValueError:
            esc_timeout = DEFAULT_ESC_TIMEOUT
        if esc_timeout < 0:
            esc_timeout = DEFAULT_ESC_TIMEOUT

        return cls(
            keymap=keymap_for_term(env.get("TERM")),
            esc_timeout=esc_timeout,
            write_log=env.get("PI_SCREEN_WRITE_LOG") or None,
            hide_cursor=env.get("PI_SCREEN_HIDE_CURSOR") == "1",
        )

    def get_keymap(self) -> dict[str, str]:
        return KEYMAPS.get(self.keymap, KEYMAPS["default"])
