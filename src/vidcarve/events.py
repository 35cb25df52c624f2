"""
Structured diagnostic events for the extraction pipeline.

Every stage reports what it tried through an observer callable instead of
writing to the console. The default observer forwards events to ``logging``;
tests use an EventRecorder to inspect them.

Example usage:
    from vidcarve.events import EventRecorder
    from vidcarve.extraction import extract_videos

    recorder = EventRecorder()
    videos = extract_videos(html, observer=recorder)
    for event in recorder.events:
        print(event.stage, event.status, event.message)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Status values
SUCCESS = "success"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single diagnostic record emitted by a pipeline stage."""

    stage: str  # "locator", "thumbnail", "modern", "legacy", "pipeline"
    status: str  # "success", "skipped", "failed"
    message: str
    details: dict[str, Any] = field(default_factory=dict)


Observer = Callable[[DiagnosticEvent], None]


class LoggingObserver:
    """Forward diagnostic events to the standard logging module."""

    _LEVELS = {
        SUCCESS: logging.INFO,
        SKIPPED: logging.DEBUG,
        FAILED: logging.WARNING,
    }

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def __call__(self, event: DiagnosticEvent) -> None:
        level = self._LEVELS.get(event.status, logging.DEBUG)
        self.log.log(level, f"[{event.stage}] {event.message}")


class EventRecorder:
    """Collect diagnostic events in memory."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def for_stage(self, stage: str) -> list[DiagnosticEvent]:
        return [e for e in self.events if e.stage == stage]

    def statuses(self, stage: str) -> list[str]:
        return [e.status for e in self.for_stage(stage)]


default_observer = LoggingObserver()


def emit(
    observer: Observer | None,
    stage: str,
    status: str,
    message: str,
    **details: Any,
) -> None:
    """Build a DiagnosticEvent and hand it to the observer (or the default)."""
    (observer or default_observer)(
        DiagnosticEvent(stage=stage, status=status, message=message, details=details)
    )


def null_observer(event: DiagnosticEvent) -> None:
    """Discard events (used for nested lookups that must stay quiet)."""
