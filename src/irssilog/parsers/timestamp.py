"""Timestamp handling: leading line clocks and marker-line dates."""
from __future__ import annotations

import re
from datetime import datetime, time

# Formats tried in order for the date text of log open/close/day-change lines
_MARKER_DATE_FORMATS: list[str] = [
    "%a %b %d %H:%M:%S %Y",  # Log opened Tue Mar 04 12:00:00 2014
    "%a %b %d %Y",           # Day changed Wed Mar 05 2014
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
]


def split_timestamp(line: str, pattern: re.Pattern[str]) -> tuple[time | None, str]:
    """Split a leading clock off *line*.

    Returns ``(clock, body)``. When no valid clock is found the whole line is
    returned as the body and ``clock`` is ``None``.
    """
    m = pattern.match(line)
    if not m:
        return None, line
    if pattern.groupindex:
        parts = [m.group(name) if name in pattern.groupindex else None for name in ("hour", "minute", "second")]
    else:
        parts = (list(m.groups()) + [None, None, None])[:3]
    hour, minute, second = parts
    try:
        clock = time(int(hour), int(minute), int(second or 0))
    except (TypeError, ValueError):
        return None, line
    return clock, line[m.end():]


def parse_marker_date(raw: str) -> datetime | None:
    """Try each known marker date format and return the first successful parse."""
    raw = raw.strip()
    for fmt in _MARKER_DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None
