"""Accumulation of focus time per (application, window) pair."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .models import LogEntry, Sample


@dataclass(slots=True)
class TrackedState:
    """Everything the tracker has accumulated since startup.

    ``_entries`` keeps insertion order (dicts are ordered) and gives constant
    time lookup by the (application, window) pair. ``applications`` records the
    first-seen order of application names and only drives summary grouping.
    """

    applications: list[str] = field(default_factory=list)
    _entries: dict[tuple[str, str], LogEntry] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries.values())

    def entries(self) -> list[LogEntry]:
        return list(self._entries.values())

    def get(self, application_name: str, window_name: str) -> Optional[LogEntry]:
        return self._entries.get((application_name, window_name))

    def entries_for(self, application_name: str) -> list[LogEntry]:
        return [
            entry
            for entry in self._entries.values()
            if entry.application_name == application_name
        ]

    def total_seconds(self) -> int:
        return sum(entry.duration_seconds for entry in self._entries.values())

    def snapshot(self) -> "TrackedState":
        """Return an independent copy safe to read outside the writer thread."""
        return copy.deepcopy(self)


def update(sample: Optional[Sample], period: int, state: TrackedState) -> TrackedState:
    """Attribute one tick of ``period`` seconds to the sampled window.

    A missing sample means nothing had focus (or the probe failed); the tick's
    time is dropped and the state is left untouched.
    """
    if sample is None:
        return state
    if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
        raise ValueError(f"period must be a positive integer, got {period!r}")

    application = sample.application_name
    if application not in state.applications:
        state.applications.append(application)

    key = (application, sample.window_title)
    entry = state._entries.get(key)
    if entry is None:
        state._entries[key] = LogEntry(
            application_name=application,
            window_name=sample.window_title,
            duration_seconds=period,
        )
    else:
        entry.duration_seconds += period
    return state
