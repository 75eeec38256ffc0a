"""Terminal width detection."""

from __future__ import annotations

import os
import re

DEFAULT_WIDTH = 80

_STDOUT_FD = 1
_STDERR_FD = 2
_INTEGER = re.compile(r"[+-]?\d+")


def _fd_width(fd: int) -> int:
    try:
        return os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return 0


def _tty_width() -> int:
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError:
        return 0
    try:
        return _fd_width(fd)
    finally:
        os.close(fd)


def width() -> int:
    """Terminal columns: stdout, stderr, /dev/tty, $COLUMNS, then 80."""
    for fd in (_STDOUT_FD, _STDERR_FD):
        columns = _fd_width(fd)
        if columns > 0:
            return columns
    columns = _tty_width()
    if columns > 0:
        return columns
    env = os.environ.get("COLUMNS", "")
    if _INTEGER.fullmatch(env):
        value = int(env)
        if value > 0:
            return value
    return DEFAULT_WIDTH