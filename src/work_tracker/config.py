"""Configuration models and helpers for the work tracker."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

APP_VERSION = "0.1.0"
DEFAULT_RESOLUTION_SECONDS = 5
DEFAULT_PROBE_TIMEOUT_SECONDS = 2.0


class ConfigurationError(ValueError):
    """Raised at startup when a setting cannot be used."""


@dataclass(slots=True, frozen=True)
class TrackerSettings:
    """Runtime configuration for the tick scheduler."""

    resolution: timedelta = timedelta(seconds=DEFAULT_RESOLUTION_SECONDS)
    normalize_titles: bool = False
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS

    @property
    def period(self) -> int:
        """Seconds attributed to the focused window on every tick."""
        return int(self.resolution.total_seconds())

    @classmethod
    def from_seconds(
        cls,
        resolution_seconds: object = DEFAULT_RESOLUTION_SECONDS,
        normalize_titles: bool = False,
        probe_timeout: float | None = None,
    ) -> "TrackerSettings":
        period = parse_resolution(resolution_seconds)
        timeout = DEFAULT_PROBE_TIMEOUT_SECONDS if probe_timeout is None else probe_timeout
        if timeout <= 0:
            raise ConfigurationError(f"probe timeout must be positive, got {timeout!r}")
        return cls(
            resolution=timedelta(seconds=period),
            normalize_titles=normalize_titles,
            probe_timeout=float(timeout),
        )


def parse_resolution(value: object) -> int:
    """Validate a tracking resolution and return it as whole seconds.

    Accepts ints and strings of digits. Booleans, fractional values and
    anything that is not strictly positive are rejected.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"resolution must be a positive integer, got {value!r}")
    if isinstance(value, int):
        seconds = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            seconds = int(text)
        except ValueError as exc:
            raise ConfigurationError(
                f"resolution must be a positive integer, got {value!r}"
            ) from exc
    elif isinstance(value, float) and value.is_integer():
        seconds = int(value)
    else:
        raise ConfigurationError(f"resolution must be a positive integer, got {value!r}")

    if seconds <= 0:
        raise ConfigurationError(f"resolution must be a positive integer, got {value!r}")
    return seconds
