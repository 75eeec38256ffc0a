"""Width-limited truncation of ANSI-coloured lines."""

from __future__ import annotations

import re

from ccstatus.color import visible_width

TRUNC_SUFFIX = "..."
_RESET = "\x1b[0m"
_ANSI_SEQUENCE = re.compile(r"\x1b\[[^A-Za-z]*[A-Za-z]?")


def truncate(line: str, max_width: int) -> str:
    """Shorten a line to max_width visible characters, ending it with "..."."""
    if max_width <= 0:
        return ""
    if visible_width(line) <= max_width:
        return line

    target = max_width - len(TRUNC_SUFFIX)
    if target <= 0:
        return TRUNC_SUFFIX[:max_width]

    parts: list[str] = []
    count = 0
    pos = 0
    while pos < len(line) and count < target:
        match = _ANSI_SEQUENCE.match(line, pos)
        if match:
            parts.append(match.group())
            pos = match.end()
            continue
        parts.append(line[pos])
        count += 1
        pos += 1

    parts.append(_RESET)
    parts.append(TRUNC_SUFFIX)
    return "".join(parts)