"""ANSI colour codes: applying them, stripping them, measuring around them."""

from __future__ import annotations

import re

_BOLD = 1
_BOLD_RESET = 22
_FG_TO_BG = 10

_NAMED_COLORS = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "brightBlack": 90,
    "brightRed": 91,
    "brightGreen": 92,
    "brightYellow": 93,
    "brightBlue": 94,
    "brightMagenta": 95,
    "brightCyan": 96,
    "brightWhite": 97,
}

_ANSI_SEQUENCE = re.compile(r"\x1b\[[^A-Za-z]*[A-Za-z]?")


def apply(text: str, fg: str, bg: str, bold: bool, level: int) -> str:
    """Wrap text in ANSI codes; unknown colour names are ignored."""
    if level <= 0 or not text:
        return text
    codes: list[int] = []
    if bold:
        codes.append(_BOLD)
    if fg in _NAMED_COLORS:
        codes.append(_NAMED_COLORS[fg])
    if bg in _NAMED_COLORS:
        codes.append(_NAMED_COLORS[bg] + _FG_TO_BG)
    if not codes:
        return text
    resets = [_BOLD_RESET if code == _BOLD else 0 for code in codes]
    start = ";".join(map(str, codes))
    end = ";".join(map(str, resets))
    return f"\x1b[{start}m{text}\x1b[{end}m"


def strip_ansi(s: str) -> str:
    """Remove every ANSI CSI escape sequence."""
    return _ANSI_SEQUENCE.sub("", s)


def visible_width(s: str) -> int:
    """Number of code points left once escape sequences are removed."""
    return len(strip_ansi(s))