"""Utilities to tidy xdotool output and browser window titles."""

from __future__ import annotations

from typing import Optional

# Keyed by psutil process name; Firefox on X11 separates with an em dash.
_BROWSER_SUFFIXES: dict[str, tuple[str, ...]] = {
    "firefox": (" — Mozilla Firefox", " - Mozilla Firefox"),
    "firefox-esr": (" — Mozilla Firefox", " - Mozilla Firefox"),
    "chrome": (" - Google Chrome",),
    "google-chrome": (" - Google Chrome",),
    "chromium": (" - Chromium",),
    "chromium-browser": (" - Chromium",),
    "brave": (" - Brave",),
    "opera": (" - Opera",),
    "msedge": (" - Microsoft Edge",),
}


def trim_command_output(value: Optional[str]) -> str:
    """Drop the trailing line breaks that command-line tools append."""
    if not value:
        return ""
    return value.rstrip("\r\n")


def normalize_window_title(process_name: Optional[str], window_title: Optional[str]) -> str:
    """Strip the browser's own name from a tab title.

    Titles from any other process come back unchanged, so two windows with
    different titles never collapse into one entry.
    """
    if not window_title:
        return ""
    if not process_name:
        return window_title

    for suffix in _BROWSER_SUFFIXES.get(process_name.lower(), ()):
        if window_title.endswith(suffix) and len(window_title) > len(suffix):
            return window_title[: -len(suffix)]
    return window_title
