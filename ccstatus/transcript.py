"""Reading the session start time from a JSONL transcript."""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone

# A single line longer than this cannot be read as one token.
_MAX_LINE = 64 * 1024

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def _parse_rfc3339(value: str) -> datetime | None:
    match = _RFC3339.fullmatch(value)
    if not match:
        return None
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction[1:] + "000000")[:6]) if fraction else 0
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * offset)
    try:
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
        )
    except ValueError:
        return None


def _first_line(path: str) -> bytes | None:
    try:
        with open(path, "rb") as handle:
            raw = handle.readline(_MAX_LINE + 1)
    except OSError:
        return None
    if not raw:
        return None
    if raw.endswith(b"\n"):
        line = raw[:-1]
        if len(line) >= _MAX_LINE:
            return None
    else:
        line = raw
        if len(line) > _MAX_LINE:
            return None
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def session_start(path: str) -> datetime | None:
    """Timestamp of the first transcript entry, or None if it cannot be read."""
    if not path:
        return None
    line = _first_line(path)
    if line is None:
        return None
    try:
        entry = json.loads(line.decode("utf-8", errors="replace"))
    except ValueError:
        return None
    if not isinstance(entry, dict):
        return None
    timestamp = entry.get("timestamp")
    if timestamp is None:
        return None
    if not isinstance(timestamp, str) or not timestamp:
        return None
    return _parse_rfc3339(timestamp)