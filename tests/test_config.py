"""Tests for configuration handling."""

import unittest
from datetime import timedelta

from work_tracker.config import (
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    ConfigurationError,
    TrackerSettings,
    parse_resolution,
)


class TestParseResolution(unittest.TestCase):
    """Test cases for parse_resolution."""

    def test_accepts_positive_integers(self):
        self.assertEqual(parse_resolution(5), 5)
        self.assertEqual(parse_resolution("10"), 10)
        self.assertEqual(parse_resolution(" 3 "), 3)
        self.assertEqual(parse_resolution(2.0), 2)

    def test_rejects_invalid_values(self):
        for value in (0, -1, "0", "-5", "abc", "", "1.5", 1.5, None, True, [5]):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    parse_resolution(value)

    def test_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class TestTrackerSettings(unittest.TestCase):
    """Test cases for TrackerSettings."""

    def test_defaults(self):
        settings = TrackerSettings()

        self.assertEqual(settings.period, 5)
        self.assertEqual(settings.resolution, timedelta(seconds=5))
        self.assertFalse(settings.normalize_titles)
        self.assertEqual(settings.probe_timeout, DEFAULT_PROBE_TIMEOUT_SECONDS)

    def test_from_seconds(self):
        settings = TrackerSettings.from_seconds("30", normalize_titles=True, probe_timeout=0.5)

        self.assertEqual(settings.period, 30)
        self.assertTrue(settings.normalize_titles)
        self.assertEqual(settings.probe_timeout, 0.5)

    def test_from_seconds_rejects_bad_resolution(self):
        with self.assertRaises(ConfigurationError):
            TrackerSettings.from_seconds(0)

    def test_from_seconds_rejects_bad_timeout(self):
        with self.assertRaises(ConfigurationError):
            TrackerSettings.from_seconds(5, probe_timeout=0)

    def test_settings_are_immutable(self):
        settings = TrackerSettings.from_seconds(5)

        with self.assertRaises(AttributeError):
            settings.resolution = timedelta(seconds=1)
