"""Typed event records produced from irssi log lines.

Each record is a frozen dataclass carrying ``time`` plus the fields relevant to
its line type. The ``type`` tag lives on the class, so a record's type can
never disagree with its shape.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, ClassVar


@dataclass(frozen=True)
class Event:
    """Base class for all event records."""

    type: ClassVar[str] = ""

    time: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class LogOpen(Event):
    type: ClassVar[str] = "logopen"


@dataclass(frozen=True)
class LogClose(Event):
    type: ClassVar[str] = "logclose"


@dataclass(frozen=True)
class Join(Event):
    type: ClassVar[str] = "join"

    nick: str
    mask: str
    channel: str | None = None


@dataclass(frozen=True)
class Part(Event):
    type: ClassVar[str] = "part"

    nick: str
    mask: str
    channel: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class Quit(Event):
    type: ClassVar[str] = "quit"

    nick: str
    mask: str
    message: str | None = None


@dataclass(frozen=True)
class Kick(Event):
    type: ClassVar[str] = "kick"

    nick: str
    by: str
    channel: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class NickChange(Event):
    """A nick change; ``own`` marks the logging client's own change."""

    type: ClassVar[str] = "nick"

    nick: str
    new_nick: str
    own: bool = False


@dataclass(frozen=True)
class Nicks(Event):
    """Channel membership totals, kept as the text irssi printed."""

    type: ClassVar[str] = "nicks"

    total: str
    ops: str
    halfops: str
    voices: str
    normal: str
    channel: str | None = None


@dataclass(frozen=True)
class Mode(Event):
    type: ClassVar[str] = "mode"

    mode: str
    by: str
    channel: str | None = None


@dataclass(frozen=True)
class Message(Event):
    type: ClassVar[str] = "message"

    nick: str
    message: str
    mode: str | None = None


@dataclass(frozen=True)
class Action(Event):
    type: ClassVar[str] = "action"

    nick: str
    message: str


EVENT_CLASSES: dict[str, type[Event]] = {
    cls.type: cls
    for cls in (LogOpen, LogClose, Join, Part, Quit, Kick, NickChange, Nicks, Mode, Message, Action)
}

EVENT_TYPES: tuple[str, ...] = tuple(EVENT_CLASSES)
