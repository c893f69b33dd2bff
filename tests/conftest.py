"""Shared pytest fixtures for irssilog tests."""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def tmp_log_file(tmp_path: Path):
    """Return a factory that creates temporary log files."""

    def _make(lines: list[str], name: str = "test.log", trailing_newline: bool = True) -> Path:
        p = tmp_path / name
        text = "\n".join(lines) + ("\n" if trailing_newline else "")
        p.write_bytes(text.encode("utf-8"))
        return p

    return _make


@pytest.fixture()
def sample_log_lines() -> list[str]:
    """A short canonical irssi log covering every event type but quit."""
    return [
        "--- Log opened Tue Mar 04 12:00:00 2014",
        "12:00 -!- alice [alice@example.com] has joined #test",
        "12:00 -!- Irssi: #test: Total of 3 nicks [1 ops, 0 halfops, 0 voices, 2 normal]",
        "12:01 < bob> hello there",
        "12:02  * bob waves",
        "12:03 -!- bob is now known as bobby",
        "12:04 -!- mode/#test [+o bobby] by alice",
        "12:05 -!- carol was kicked from #test by alice [bye]",
        "12:06 -!- bobby [bob@example.com] has left #test [later]",
        "--- Log closed Tue Mar 04 12:07:00 2014",
    ]
