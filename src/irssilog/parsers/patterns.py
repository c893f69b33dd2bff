"""Default irssi line patterns and per-tag override merging.

Timestamped patterns match the line body left after the leading ``hh:mm[:ss]``
has been split off; marker patterns (log open/close, day change) match the
whole line. Defaults use named groups. Override patterns may use named groups
too, or plain positional groups in the order listed in ``PATTERN_FIELDS``.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Union

PatternSource = Union[str, re.Pattern]

# Field names captured per tag, in positional-group order
PATTERN_FIELDS: dict[str, tuple[str, ...]] = {
    "timestamp": ("hour", "minute", "second"),
    "logopen": ("date",),
    "logclose": ("date",),
    "daychange": ("date",),
    "join": ("nick", "mask", "channel"),
    "part": ("nick", "mask", "channel", "message"),
    "quit": ("nick", "mask", "message"),
    "kick": ("nick", "channel", "by", "message"),
    "nick": ("nick", "new_nick"),
    "ownnick": ("new_nick",),
    "nicks": ("channel", "total", "ops", "halfops", "voices", "normal"),
    "mode": ("channel", "mode", "by"),
    "message": ("mode", "nick", "message"),
    "action": ("nick", "message"),
}

_DEFAULT_SOURCES: dict[str, str] = {
    "timestamp": r"^(?P<hour>\d\d):(?P<minute>\d\d)(?::(?P<second>\d\d))? ?",
    "logopen": r"^--- Log opened (?P<date>.+)$",
    "logclose": r"^--- Log closed (?P<date>.+)$",
    "daychange": r"^--- Day changed (?P<date>.+)$",
    "join": r"^-!- (?P<nick>\S+) \[(?P<mask>[^\]]*)\] has joined (?P<channel>\S+)",
    "part": (
        r"^-!- (?P<nick>\S+) \[(?P<mask>[^\]]*)\] has left (?P<channel>\S+)"
        r"(?: \[(?P<message>.*)\])?$"
    ),
    "quit": r"^-!- (?P<nick>\S+) \[(?P<mask>[^\]]*)\] has quit(?: \[(?P<message>.*)\])?$",
    "kick": (
        r"^-!- (?P<nick>\S+) was kicked from (?P<channel>\S+) by (?P<by>\S+)"
        r" \[(?P<message>.*)\]$"
    ),
    "nick": r"^-!- (?P<nick>\S+) is now known as (?P<new_nick>\S+)$",
    "ownnick": r"^-!- You're now known as (?P<new_nick>\S+)$",
    "nicks": (
        r"^-!- Irssi: (?P<channel>\S+?):? Total of (?P<total>\d+) nicks"
        r" \[(?P<ops>\d+) ops, (?P<halfops>\d+) halfops,"
        r" (?P<voices>\d+) voices, (?P<normal>\d+) normal\]$"
    ),
    "mode": r"^-!- (?:ServerM|m)ode/(?P<channel>\S+) \[(?P<mode>[^\]]+)\] by (?P<by>\S*)$",
    "message": r"^<(?P<mode>[ @%+&~!])?(?P<nick>[^>]+)> (?P<message>.*)$",
    "action": r"^\s*\* (?P<nick>\S+) (?P<message>.*)$",
}


class PatternError(ValueError):
    """Raised when a pattern override cannot be used."""

    def __init__(self, tag: str, source: object, reason: str) -> None:
        super().__init__(f"Invalid pattern for {tag!r}: {reason} ({source!r})")
        self.tag = tag
        self.source = source
        self.reason = reason


def compile_pattern(tag: str, source: PatternSource) -> re.Pattern[str]:
    """Compile a pattern source for *tag*; compiled patterns pass through."""
    if isinstance(source, re.Pattern):
        return source
    if not isinstance(source, str):
        raise PatternError(tag, source, "expected a regular expression string")
    try:
        return re.compile(source)
    except re.error as exc:
        raise PatternError(tag, source, str(exc)) from exc


def merge_patterns(
    defaults: Mapping[str, re.Pattern[str]],
    overrides: Mapping[str, PatternSource] | None = None,
) -> Mapping[str, re.Pattern[str]]:
    """Layer *overrides* over *defaults* and return a read-only table.

    Overrides win per tag; tags not overridden keep their default.
    """
    table = dict(defaults)
    for tag, source in (overrides or {}).items():
        if tag not in PATTERN_FIELDS:
            raise PatternError(tag, source, "unknown pattern tag")
        table[tag] = compile_pattern(tag, source)
    return MappingProxyType(table)


DEFAULT_PATTERNS: Mapping[str, re.Pattern[str]] = merge_patterns({}, _DEFAULT_SOURCES)
