"""Color & style helpers.

Decisions:
- Two palettes, 'dark' (default) and 'light', selected at runtime.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports per-status overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from typing import Dict

import config

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI escape sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

PALETTES: Dict[str, Dict[str, str]] = {
    'dark': {
        'primary': '#7AA2F7',
        'todo': '#8B93A7',
        'doing': '#E0AF68',
        'review': '#BB9AF7',
        'done': '#9ECE6A',
    },
    'light': {
        'primary': '#2E5AAC',
        'todo': '#5C6370',
        'doing': '#B7791F',
        'review': '#7C3AED',
        'done': '#2F855A',
    },
}

_OVERRIDE_KEYS = {
    'primary': 'TREEFLOW_PRIMARY',
    'todo': 'TREEFLOW_TODO',
    'doing': 'TREEFLOW_DOING',
    'review': 'TREEFLOW_REVIEW',
    'done': 'TREEFLOW_DONE',
}


class Theme:
    """Resolved ANSI sequences for one palette (env overrides applied)."""

    def __init__(self, name: str = 'dark'):
        self.name = name if name in PALETTES else 'dark'
        hexes = dict(PALETTES[self.name])
        for slot, key in _OVERRIDE_KEYS.items():
            override = config.get(key)
            if override and _valid_hex(override):
                hexes[slot] = '#' + override.lstrip('#')
        self.hexes = hexes
        self.primary = _from_hex(hexes['primary'])
        self.status_color: Dict[str, str] = {
            s: _from_hex(hexes[s]) for s in ('todo', 'doing', 'review', 'done')
        }
        self.header = self.primary + BOLD
        self.index = self.primary + BOLD  # emphasize outline numbers
        self.muted = DIM

    def toggled(self) -> "Theme":
        return Theme('light' if self.name == 'dark' else 'dark')

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = ['color', 'Theme', 'PALETTES', 'RESET', 'BOLD', 'DIM', '_ENABLE', '_USE_TRUECOLOR']
