"""pi-screen: styled, positioned text elements on a terminal grid."""

# Composing
from pi.screen.compose import Line, Palette, compose_line

# Configuration
from pi.screen.config import Config

# Elements
from pi.screen.element import Container, DetachedElementError, Element, Group

# Keyboard input
from pi.screen.keys import (
    DEFAULT_KEYMAP,
    KEYMAPS,
    XTERM_KEYMAP,
    Key,
    KeyDecoder,
    KeyId,
    keymap_for_term,
    parse_key,
)

# Layout
from pi.screen.layout import (
    Placement,
    Size,
    resolve_align_width,
    resolve_col,
    resolve_h_offset,
    resolve_placement,
    resolve_row,
)

# Input buffering
from pi.screen.stdin_buffer import StdinBuffer

# Styles
from pi.screen.style import Offset, Style, StyleSheet, parse_declarations

# Terminal interface and implementation
from pi.screen.terminal import BG_COLORS, FG_COLORS, ProcessTerminal, Terminal

# Utilities
from pi.screen.utils import strip_ansi, visible_width

# Root container
from pi.screen.window import Window

__all__ = [
    # Composing
    "Line",
    "Palette",
    "compose_line",
    # Configuration
    "Config",
    # Elements
    "Container",
    "DetachedElementError",
    "Element",
    "Group",
    # Keys
    "DEFAULT_KEYMAP",
    "KEYMAPS",
    "XTERM_KEYMAP",
    "Key",
    "KeyDecoder",
    "KeyId",
    "keymap_for_term",
    "parse_key",
    # Layout
    "Placement",
    "Size",
    "resolve_align_width",
    "resolve_col",
    "resolve_h_offset",
    "resolve_placement",
    "resolve_row",
    # Stdin buffer
    "StdinBuffer",
    # Styles
    "Offset",
    "Style",
    "StyleSheet",
    "parse_declarations",
    # Terminal
    "BG_COLORS",
    "FG_COLORS",
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "strip_ansi",
    "visible_width",
    # Window
    "Window",
]
