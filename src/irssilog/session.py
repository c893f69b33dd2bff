"""Cross-line state for one log stream."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta


@dataclass
class SessionState:
    """Running log date plus the logging client's own-nick tracking.

    Attributes:
        current_date:       Date set by the last log open/close or day change.
        own_nick:           Logging client's current nick, configured or inferred.
        pending_join_nick:  Nick of a join seen right after a log open, waiting
                            for the names report that confirms it is ours.
        open_time:          Time of the log open the pending guess belongs to.
    """

    current_date: datetime | None = None
    own_nick: str | None = None
    pending_join_nick: str | None = None
    open_time: datetime | None = None

    def at(self, clock: time) -> datetime | None:
        """Combine the running date with a line clock; ``None`` before any date."""
        if self.current_date is None:
            return None
        return datetime.combine(self.current_date.date(), clock)

    def near_open(self, when: datetime, window: timedelta) -> bool:
        return self.open_time is not None and when - self.open_time < window

    def drop_guess(self) -> None:
        self.pending_join_nick = None
        self.open_time = None
