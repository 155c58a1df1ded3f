"""Pytest configuration and fixtures."""

from collections import deque

import pytest

from work_tracker.aggregator import TrackedState
from work_tracker.config import TrackerSettings
from work_tracker.probe import WindowDescription


class FakeProbe:
    """Replays scripted ticks.

    Each step is ``None`` (nothing focused), an ``(application, title)`` pair,
    or an exception instance raised from ``current_focused_process_id``.
    """

    def __init__(self, steps):
        self._steps = deque(steps)
        self._current = None
        self.describe_calls = 0

    def current_focused_process_id(self):
        step = self._steps.popleft() if self._steps else None
        if isinstance(step, BaseException):
            raise step
        self._current = step
        if step is None:
            return None
        return 4242

    def describe(self, process_id):
        self.describe_calls += 1
        application_name, window_title = self._current
        return WindowDescription(window_title=window_title, application_name=application_name)


@pytest.fixture
def make_probe():
    return FakeProbe


@pytest.fixture
def settings():
    return TrackerSettings.from_seconds(5)


@pytest.fixture
def empty_state():
    return TrackedState()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
