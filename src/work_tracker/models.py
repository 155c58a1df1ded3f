"""Domain models for tracked focus time."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Sample:
    """One tick's observation of the focused application and window."""

    application_name: str
    window_title: str


@dataclass(slots=True)
class LogEntry:
    """Accumulated focus time for a single (application, window) pair."""

    application_name: str
    window_name: str
    duration_seconds: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return (self.application_name, self.window_name)


@dataclass(slots=True)
class ApplicationBlock:
    """Summary of one application: total time and its windows, longest first."""

    application_name: str
    total_seconds: int
    entries: list[tuple[str, int]] = field(default_factory=list)
