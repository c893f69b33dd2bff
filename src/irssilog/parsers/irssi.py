"""irssi log parser: turns log lines into events for subscribers.

Usage::

    parser = IrssiParser(Settings(default_nick="me"))
    parser.on("message", lambda e: print(e.nick, e.message))
    parser.scan("#channel.log")

A handler may call ``parser.pause()``; the scan then returns once the current
chunk has been dispatched, keeping the file open. ``parser.resume()`` carries
on from exactly where it stopped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from ..config import Settings
from ..dispatch import Dispatcher, Handler, Subscription
from ..events import Event
from ..session import SessionState
from .builders import RecordBuilder
from .classifier import LineClassifier
from .patterns import DEFAULT_PATTERNS, merge_patterns
from .scanner import ScanCursor

logger = logging.getLogger(__name__)


class IrssiParser:
    """Stateful, resumable parser for one irssi log stream."""

    def __init__(self, settings: Settings | None = None, dispatcher: Dispatcher | None = None) -> None:
        self.settings = settings or Settings()
        # Raises PatternError for a bad override; the table is fixed from here on
        self.patterns = merge_patterns(DEFAULT_PATTERNS, self.settings.patterns)
        self.state = SessionState(own_nick=self.settings.own_nick)
        self.dispatcher = dispatcher or Dispatcher()
        self._classifier = LineClassifier(self.patterns)
        self._builder = RecordBuilder(
            self.state,
            default_nick=self.settings.default_nick,
            own_nick_window=self.settings.own_nick_window,
            debug=self.settings.debug,
        )
        self._cursor: ScanCursor | None = None
        self._paused = False

    @property
    def name(self) -> str:
        return "irssi"

    @property
    def paused(self) -> bool:
        return self._paused

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on(self, type: str, handler: Handler) -> Handler:
        return self.dispatcher.on(type, handler)

    def on_all(self, handler: Handler) -> Subscription:
        return self.dispatcher.on_all(handler)

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def parse_line(self, line: str) -> Event | None:
        """Classify one line and build its record. Returns None if the line is skipped."""
        if not line.strip():
            return None
        classification = self._classifier.classify(line)
        if classification is None:
            if self.settings.debug:
                logger.warning("Unhandled line: %r", line)
            return None
        return self._builder.build(classification)

    def _dispatch_line(self, line: str) -> None:
        event = self.parse_line(line)
        if event is not None:
            self.dispatcher.publish(event)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self, path: str | Path) -> None:
        """Scan *path* from the start, publishing an event per recognised line."""
        self.close()
        self._paused = False
        self._cursor = ScanCursor.open(path, chunk_size=self.settings.chunk_size, encoding=self.settings.encoding)
        logger.debug("Scanning %s", path)
        self._run()

    def pause(self) -> None:
        """Stop the scan once the lines of the current chunk are dispatched."""
        self._paused = True

    def resume(self) -> None:
        """Continue a paused scan. Does nothing unless paused."""
        if not self._paused:
            return
        self._paused = False
        if self._cursor is not None:
            logger.debug("Resuming scan at byte %d", self._cursor.offset)
            self._run()

    def close(self) -> None:
        """Release the file held open by a paused scan."""
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def _run(self) -> None:
        cursor = self._cursor
        assert cursor is not None
        try:
            while not self._paused:
                lines = cursor.read_lines()
                if lines is None:
                    tail = cursor.finish()
                    if tail:
                        self._dispatch_line(tail)
                    logger.debug("End of input")
                    self.close()
                    return
                for line in lines:
                    self._dispatch_line(line)
        except BaseException:
            self.close()
            raise
        logger.debug("Scan paused at byte %d", cursor.offset)

    def __enter__(self) -> "IrssiParser":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
