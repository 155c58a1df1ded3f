"""Queries for the window that currently has keyboard focus."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol

import psutil

from .config import DEFAULT_PROBE_TIMEOUT_SECONDS
from .normalization import normalize_window_title, trim_command_output

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class WindowDescription:
    window_title: str
    application_name: str


class ActiveWindowProbe(Protocol):
    def current_focused_process_id(self) -> Optional[int]:
        ...

    def describe(self, process_id: int) -> WindowDescription:
        ...


class XdotoolProbe:
    """Retrieves the focused window's pid and title through ``xdotool`` on X11.

    The process name is resolved with psutil. Every failure mode (no X display,
    ``xdotool`` missing, a hung call, a process that already exited) degrades
    to ``None`` or an empty string instead of raising.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        normalize_titles: bool = False,
        executable: str = "xdotool",
    ) -> None:
        self.timeout = timeout
        self.normalize_titles = normalize_titles
        self.executable = executable

    def current_focused_process_id(self) -> Optional[int]:
        output = self._run("getactivewindow", "getwindowpid")
        if output is None:
            return None
        text = output.strip()
        if not (text.isascii() and text.isdigit()):
            logger.warning("Ignoring malformed window pid from %s: %r", self.executable, text)
            return None
        pid = int(text)
        if pid <= 0:
            logger.warning("Ignoring non-positive window pid %d", pid)
            return None
        return pid

    def describe(self, process_id: int) -> WindowDescription:
        application_name = self._process_name(process_id)
        window_title = self._run("getactivewindow", "getwindowname") or ""
        if self.normalize_titles:
            window_title = normalize_window_title(application_name, window_title)
        return WindowDescription(window_title=window_title, application_name=application_name)

    @staticmethod
    def _process_name(process_id: int) -> str:
        try:
            return psutil.Process(process_id).name()
        except (psutil.Error, ProcessLookupError):
            logger.debug("Process %s vanished before it could be named.", process_id)
            return ""

    def _run(self, *args: str) -> Optional[str]:
        command = [self.executable, *args]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("%s timed out after %.1fs", " ".join(command), self.timeout)
            return None
        except OSError as exc:
            logger.warning("Could not run %s: %s", self.executable, exc)
            return None

        if result.returncode != 0:
            logger.debug(
                "%s exited with %d: %s",
                " ".join(command),
                result.returncode,
                trim_command_output(result.stderr),
            )
            return None
        return trim_command_output(result.stdout)
