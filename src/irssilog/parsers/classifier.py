"""Line classification: pick exactly one pattern tag for a log line.

Test order is data, not an implementation detail. Timestamped lines are tried
most-frequent-first so chat lines, which dominate real logs, cost the fewest
attempts. Lines without a leading clock can only be markers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import time
from typing import Mapping

from .patterns import PATTERN_FIELDS
from .timestamp import split_timestamp

TIMESTAMPED_ORDER: tuple[str, ...] = (
    "message",
    "action",
    "join",
    "part",
    "quit",
    "nick",
    "mode",
    "kick",
    "ownnick",
    "nicks",
)

MARKER_ORDER: tuple[str, ...] = ("daychange", "logclose", "logopen")


@dataclass(frozen=True)
class Classification:
    """A matched line: its pattern tag, captured text and split-off clock."""

    tag: str
    groups: dict[str, str | None] = field(default_factory=dict)
    clock: time | None = None


class LineClassifier:
    """Match lines against a fixed pattern table; first match wins."""

    def __init__(self, patterns: Mapping[str, re.Pattern[str]]) -> None:
        self._patterns = patterns
        self._timestamp = patterns["timestamp"]

    def classify(self, line: str) -> Classification | None:
        clock, body = split_timestamp(line, self._timestamp)
        order = MARKER_ORDER if clock is None else TIMESTAMPED_ORDER
        for tag in order:
            pattern = self._patterns[tag]
            m = pattern.match(body)
            if m:
                return Classification(tag=tag, groups=_captured(tag, pattern, m), clock=clock)
        return None


def _captured(tag: str, pattern: re.Pattern[str], m: re.Match[str]) -> dict[str, str | None]:
    if pattern.groupindex:
        return m.groupdict()
    return dict(zip(PATTERN_FIELDS[tag], m.groups()))
