"""Turn classified lines into event records, updating session state on the way."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from ..config import DEFAULT_OWN_NICK_WINDOW
from ..events import (
    Action,
    Event,
    Join,
    Kick,
    LogClose,
    LogOpen,
    Message,
    Mode,
    NickChange,
    Nicks,
    Part,
    Quit,
)
from ..session import SessionState
from .classifier import Classification
from .timestamp import parse_marker_date

logger = logging.getLogger(__name__)


class RecordBuilder:
    """One builder per pattern tag.

    Side effects on ``state`` are limited to: marker lines moving the running
    date, the join / names pair after a log open confirming our own nick, and
    "You're now known as" updating it.
    """

    def __init__(
        self,
        state: SessionState,
        default_nick: str = "logging client",
        own_nick_window: float = DEFAULT_OWN_NICK_WINDOW,
        debug: bool = False,
    ) -> None:
        self.state = state
        self.default_nick = default_nick
        self.window = timedelta(seconds=own_nick_window)
        self.debug = debug
        self._builders: dict[str, Callable[[dict[str, str | None], datetime], Event | None]] = {
            "logopen": self._logopen,
            "logclose": self._logclose,
            "daychange": self._daychange,
            "join": self._join,
            "part": self._part,
            "quit": self._quit,
            "kick": self._kick,
            "nick": self._nick,
            "ownnick": self._ownnick,
            "nicks": self._nicks,
            "mode": self._mode,
            "message": self._message,
            "action": self._action,
        }

    def build(self, c: Classification) -> Event | None:
        if c.clock is None:
            when = parse_marker_date(c.groups.get("date") or "")
            if when is None:
                self._report("Unparsable %s date %r", c.tag, c.groups.get("date"))
                return None
        else:
            when = self.state.at(c.clock)
            if when is None:
                self._report("No log date established for %s line at %s", c.tag, c.clock)
                return None
        return self._builders[c.tag](c.groups, when)

    def _report(self, msg: str, *args: object) -> None:
        if self.debug:
            logger.warning(msg, *args)

    # -- markers ---------------------------------------------------------

    def _logopen(self, g: dict[str, str | None], when: datetime) -> Event:
        self.state.current_date = self.state.open_time = when
        self.state.pending_join_nick = None
        return LogOpen(time=when)

    def _logclose(self, g: dict[str, str | None], when: datetime) -> Event:
        self.state.current_date = when
        return LogClose(time=when)

    def _daychange(self, g: dict[str, str | None], when: datetime) -> None:
        self.state.current_date = when
        return None

    # -- membership ------------------------------------------------------

    def _join(self, g: dict[str, str | None], when: datetime) -> Event:
        state = self.state
        if state.own_nick is None and state.pending_join_nick is None and state.near_open(when, self.window):
            # Right after a log open the first join is normally our own;
            # confirmed once the names total follows.
            state.pending_join_nick = g.get("nick")
        return Join(time=when, nick=g.get("nick") or "", mask=g.get("mask") or "", channel=g.get("channel"))

    def _part(self, g: dict[str, str | None], when: datetime) -> Event:
        return Part(
            time=when,
            nick=g.get("nick") or "",
            mask=g.get("mask") or "",
            channel=g.get("channel"),
            message=g.get("message"),
        )

    def _quit(self, g: dict[str, str | None], when: datetime) -> Event:
        return Quit(time=when, nick=g.get("nick") or "", mask=g.get("mask") or "", message=g.get("message"))

    def _kick(self, g: dict[str, str | None], when: datetime) -> Event:
        return Kick(
            time=when,
            nick=g.get("nick") or "",
            by=g.get("by") or "",
            channel=g.get("channel"),
            message=g.get("message"),
        )

    def _nicks(self, g: dict[str, str | None], when: datetime) -> Event:
        # The names total is logged right after our own join, but also
        # whenever /names is run by hand; only the former confirms the guess.
        state = self.state
        if state.pending_join_nick is not None:
            if state.near_open(when, self.window):
                state.own_nick = state.pending_join_nick
            state.drop_guess()
        return Nicks(
            time=when,
            total=g.get("total") or "",
            ops=g.get("ops") or "",
            halfops=g.get("halfops") or "",
            voices=g.get("voices") or "",
            normal=g.get("normal") or "",
            channel=g.get("channel"),
        )

    # -- nicks and modes -------------------------------------------------

    def _nick(self, g: dict[str, str | None], when: datetime) -> Event:
        return NickChange(time=when, nick=g.get("nick") or "", new_nick=g.get("new_nick") or "")

    def _ownnick(self, g: dict[str, str | None], when: datetime) -> Event:
        # irssi does not log the old nick for our own changes
        old = self.state.own_nick or self.default_nick
        self.state.own_nick = new = g.get("new_nick") or ""
        return NickChange(time=when, nick=old, new_nick=new, own=True)

    def _mode(self, g: dict[str, str | None], when: datetime) -> Event:
        return Mode(time=when, mode=g.get("mode") or "", by=g.get("by") or "", channel=g.get("channel"))

    # -- chat ------------------------------------------------------------

    def _message(self, g: dict[str, str | None], when: datetime) -> Event:
        return Message(time=when, nick=g.get("nick") or "", message=g.get("message") or "", mode=g.get("mode"))

    def _action(self, g: dict[str, str | None], when: datetime) -> Event:
        return Action(time=when, nick=g.get("nick") or "", message=g.get("message") or "")
