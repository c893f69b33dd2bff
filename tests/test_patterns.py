"""Tests for the pattern table, timestamp splitting and line classification."""
from __future__ import annotations

import re
from datetime import datetime, time

import pytest

from irssilog.parsers.classifier import MARKER_ORDER, TIMESTAMPED_ORDER, LineClassifier
from irssilog.parsers.patterns import DEFAULT_PATTERNS, PATTERN_FIELDS, PatternError, merge_patterns
from irssilog.parsers.timestamp import parse_marker_date, split_timestamp


# ---------------------------------------------------------------------------
# merge_patterns
# ---------------------------------------------------------------------------

class TestMergePatterns:
    def test_defaults_cover_every_tag(self) -> None:
        assert set(DEFAULT_PATTERNS) == set(PATTERN_FIELDS)

    def test_override_wins_per_tag(self) -> None:
        table = merge_patterns(DEFAULT_PATTERNS, {"action": r"^\*\*\* (?P<nick>\S+) (?P<message>.*)$"})
        assert table["action"].pattern.startswith(r"^\*\*\*")
        assert table["message"] is DEFAULT_PATTERNS["message"]

    def test_compiled_pattern_passes_through(self) -> None:
        compiled = re.compile(r"^x$")
        table = merge_patterns(DEFAULT_PATTERNS, {"quit": compiled})
        assert table["quit"] is compiled

    def test_defaults_untouched(self) -> None:
        merge_patterns(DEFAULT_PATTERNS, {"quit": r"^x$"})
        assert DEFAULT_PATTERNS["quit"].pattern != r"^x$"

    def test_malformed_source_raises(self) -> None:
        with pytest.raises(PatternError) as info:
            merge_patterns(DEFAULT_PATTERNS, {"kick": r"(unclosed"})
        assert info.value.tag == "kick"

    def test_unknown_tag_raises(self) -> None:
        with pytest.raises(PatternError):
            merge_patterns(DEFAULT_PATTERNS, {"topic": r"^.*$"})

    def test_table_is_read_only(self) -> None:
        table = merge_patterns(DEFAULT_PATTERNS)
        with pytest.raises(TypeError):
            table["quit"] = re.compile("x")  # type: ignore[index]


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("line,clock,body", [
    ("12:34 -!- x", time(12, 34), "-!- x"),
    ("12:34:56 -!- x", time(12, 34, 56), "-!- x"),
    ("12:34<@bob> hi", time(12, 34), "<@bob> hi"),
    ("12:34  * bob waves", time(12, 34), " * bob waves"),
    ("--- Log opened Tue Mar 04 12:00:00 2014", None, "--- Log opened Tue Mar 04 12:00:00 2014"),
    ("99:99 -!- x", None, "99:99 -!- x"),
])
def test_split_timestamp(line: str, clock: time | None, body: str) -> None:
    assert split_timestamp(line, DEFAULT_PATTERNS["timestamp"]) == (clock, body)


@pytest.mark.parametrize("raw,expected", [
    ("Tue Mar 04 12:00:00 2014", datetime(2014, 3, 4, 12, 0, 0)),
    ("Wed Mar 05 2014", datetime(2014, 3, 5)),
    ("2014-03-04 08:15:00", datetime(2014, 3, 4, 8, 15)),
    ("yesterday-ish", None),
])
def test_parse_marker_date(raw: str, expected: datetime | None) -> None:
    assert parse_marker_date(raw) == expected


# ---------------------------------------------------------------------------
# LineClassifier
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("line,tag,fields", [
    ("--- Log opened Tue Mar 04 12:00:00 2014", "logopen", {"date": "Tue Mar 04 12:00:00 2014"}),
    ("--- Log closed Tue Mar 04 13:00:00 2014", "logclose", {"date": "Tue Mar 04 13:00:00 2014"}),
    ("--- Day changed Wed Mar 05 2014", "daychange", {"date": "Wed Mar 05 2014"}),
    ("12:00 -!- alice [a@host] has joined #test", "join", {"nick": "alice", "mask": "a@host", "channel": "#test"}),
    ("12:00 -!- alice [a@host] has left #test [bye now]", "part", {"nick": "alice", "message": "bye now"}),
    ("12:00 -!- alice [a@host] has left #test", "part", {"nick": "alice", "message": None}),
    ("12:00 -!- alice [a@host] has quit [Quit: [x] gone]", "quit", {"nick": "alice", "message": "Quit: [x] gone"}),
    ("12:00 -!- carol was kicked from #test by alice [spam]", "kick",
     {"nick": "carol", "channel": "#test", "by": "alice", "message": "spam"}),
    ("12:00 -!- bob is now known as bobby", "nick", {"nick": "bob", "new_nick": "bobby"}),
    ("12:00 -!- You're now known as me2", "ownnick", {"new_nick": "me2"}),
    ("12:00 -!- Irssi: #test: Total of 12 nicks [2 ops, 0 halfops, 1 voices, 9 normal]", "nicks",
     {"channel": "#test", "total": "12", "ops": "2", "halfops": "0", "voices": "1", "normal": "9"}),
    ("12:00 -!- mode/#test [+o bob] by alice", "mode", {"channel": "#test", "mode": "+o bob", "by": "alice"}),
    ("12:00 -!- ServerMode/#test [+nt] by irc.example.net", "mode", {"mode": "+nt", "by": "irc.example.net"}),
    ("12:00 <@alice> has joined the fun", "message", {"mode": "@", "nick": "alice", "message": "has joined the fun"}),
    ("12:00 < bob> hi", "message", {"mode": " ", "nick": "bob", "message": "hi"}),
    ("12:00 <bob> hi", "message", {"mode": None, "nick": "bob", "message": "hi"}),
    ("12:00  * bob is now known as nobody", "action", {"nick": "bob", "message": "is now known as nobody"}),
])
def test_classify(line: str, tag: str, fields: dict[str, str | None]) -> None:
    result = LineClassifier(DEFAULT_PATTERNS).classify(line)
    assert result is not None
    assert result.tag == tag
    for key, value in fields.items():
        assert result.groups[key] == value


class TestLineClassifier:
    def test_unmatched_returns_none(self) -> None:
        c = LineClassifier(DEFAULT_PATTERNS)
        assert c.classify("12:00 -!- Topic for #test: hello") is None
        assert c.classify("random text") is None

    def test_marker_text_after_timestamp_is_not_a_marker(self) -> None:
        c = LineClassifier(DEFAULT_PATTERNS)
        assert c.classify("12:00 --- Log opened Tue Mar 04 12:00:00 2014") is None

    def test_clock_is_split_out(self) -> None:
        result = LineClassifier(DEFAULT_PATTERNS).classify("08:09:10 < bob> hi")
        assert result is not None
        assert result.clock == time(8, 9, 10)

    def test_marker_has_no_clock(self) -> None:
        result = LineClassifier(DEFAULT_PATTERNS).classify("--- Day changed Wed Mar 05 2014")
        assert result is not None
        assert result.clock is None

    def test_positional_override_groups_map_to_fields(self) -> None:
        table = merge_patterns(DEFAULT_PATTERNS, {"action": r"^\s*\*\* (\S+) (.*)$"})
        result = LineClassifier(table).classify("12:00 ** bob dances")
        assert result is not None
        assert result.tag == "action"
        assert result.groups == {"nick": "bob", "message": "dances"}

    def test_timestamp_override(self) -> None:
        table = merge_patterns(DEFAULT_PATTERNS, {"timestamp": r"^\[(?P<hour>\d\d):(?P<minute>\d\d)\] "})
        result = LineClassifier(table).classify("[07:30] < bob> morning")
        assert result is not None
        assert result.tag == "message"
        assert result.clock == time(7, 30)

    def test_orders_cover_all_line_tags(self) -> None:
        assert set(TIMESTAMPED_ORDER) | set(MARKER_ORDER) == set(PATTERN_FIELDS) - {"timestamp"}
        assert TIMESTAMPED_ORDER[:2] == ("message", "action")
