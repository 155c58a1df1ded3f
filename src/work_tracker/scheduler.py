"""Tick scheduler driving the sample, aggregate and report cycle."""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from .aggregator import TrackedState, update
from .config import TrackerSettings
from .models import ApplicationBlock, Sample
from .probe import ActiveWindowProbe
from .reporting import render

logger = logging.getLogger(__name__)

RenderCallback = Callable[[list[ApplicationBlock]], None]


class SchedulerState(enum.Enum):
    IDLE = "idle"
    SAMPLING = "sampling"


class TickScheduler:
    """Samples the focused window every period and folds it into the state.

    Only the thread running the loop mutates ``state``. Other threads read
    through :meth:`snapshot` or :meth:`render_summary`, which take the same lock
    as the update.
    """

    def __init__(
        self,
        probe: ActiveWindowProbe,
        settings: TrackerSettings,
        state: Optional[TrackedState] = None,
        on_render: Optional[RenderCallback] = None,
    ) -> None:
        self.probe = probe
        self.settings = settings
        self.state = state if state is not None else TrackedState()
        self.on_render = on_render
        self.status = SchedulerState.IDLE
        self.ticks = 0
        self._lock = threading.Lock()
        self._tick_lock = threading.Lock()

    def sample(self) -> Optional[Sample]:
        """Ask the probe for the focused window; any failure yields ``None``."""
        try:
            pid = self.probe.current_focused_process_id()
            if pid is None:
                logger.debug("No focused window this tick.")
                return None
            if isinstance(pid, bool) or not isinstance(pid, int):
                logger.warning("Probe returned a malformed process id: %r", pid)
                return None
            description = self.probe.describe(pid)
            application_name = description.application_name
            window_title = description.window_title
        except Exception:
            logger.exception("Active window probe failed; skipping this tick.")
            return None

        if not isinstance(application_name, str) or not isinstance(window_title, str):
            logger.warning(
                "Probe returned a malformed description: %r / %r",
                application_name,
                window_title,
            )
            return None
        return Sample(application_name=application_name, window_title=window_title)

    def tick(self) -> list[ApplicationBlock]:
        """Run one cycle and return the rendered summary."""
        with self._tick_lock:
            self.status = SchedulerState.SAMPLING
            try:
                sample = self.sample()
                with self._lock:
                    update(sample, self.settings.period, self.state)
                    blocks = render(self.state)
                self.ticks += 1
                if sample:
                    logger.debug(
                        "Tick %d: app=%s window=%s",
                        self.ticks,
                        sample.application_name,
                        sample.window_title,
                    )
                if self.on_render:
                    self.on_render(blocks)
                return blocks
            finally:
                self.status = SchedulerState.IDLE

    def snapshot(self) -> TrackedState:
        with self._lock:
            return self.state.snapshot()

    def tracked_windows(self) -> int:
        with self._lock:
            return len(self.state)

    def render_summary(self) -> list[ApplicationBlock]:
        with self._lock:
            return render(self.state)

    def run_until_stopped(self, stop_event: threading.Event) -> None:
        """Tick until ``stop_event`` is set; the event also interrupts the sleep."""
        logger.info("Tracking focus every %ds.", self.settings.period)
        interval = self.settings.resolution.total_seconds()
        while not stop_event.is_set():
            self.tick()
            stop_event.wait(interval)
        logger.info("Tracker stopped after %d ticks.", self.ticks)

    def run_forever(self) -> None:
        stop_event = threading.Event()
        try:
            self.run_until_stopped(stop_event)
        except KeyboardInterrupt:
            logger.info("Tracker interrupted after %d ticks.", self.ticks)
