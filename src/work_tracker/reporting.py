"""Summary building and console rendering."""

from __future__ import annotations

import math
import sys
from typing import Any, Iterable, Optional, TextIO

from .aggregator import TrackedState
from .models import ApplicationBlock

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
RULE = "-" * 60


def render(state: TrackedState) -> list[ApplicationBlock]:
    """Group accumulated entries by application.

    Blocks follow the order in which applications were first seen. Windows
    inside a block are ordered longest first; ``sorted`` is stable so ties keep
    their insertion order.
    """
    grouped: dict[str, list[tuple[str, int]]] = {
        application: [] for application in state.applications
    }
    for entry in state:
        grouped.setdefault(entry.application_name, []).append(
            (entry.window_name, entry.duration_seconds)
        )

    blocks: list[ApplicationBlock] = []
    for application, windows in grouped.items():
        ordered = sorted(windows, key=lambda item: item[1], reverse=True)
        blocks.append(
            ApplicationBlock(
                application_name=application,
                total_seconds=sum(seconds for _, seconds in ordered),
                entries=ordered,
            )
        )
    return blocks


def format_duration(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS``; hours keep counting past a day."""
    if not math.isfinite(seconds) or seconds <= 0:
        return "00:00:00"
    total_seconds = int(math.floor(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def summary_as_dict(blocks: Iterable[ApplicationBlock]) -> list[dict[str, Any]]:
    return [
        {
            "application_name": block.application_name,
            "total_seconds": block.total_seconds,
            "total": format_duration(block.total_seconds),
            "entries": [
                {
                    "window_name": window,
                    "seconds": seconds,
                    "duration": format_duration(seconds),
                }
                for window, seconds in block.entries
            ],
        }
        for block in blocks
    ]


class SummaryPrinter:
    """Render the live summary in the console."""

    def __init__(self, stream: Optional[TextIO] = None, clear_screen: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.clear_screen = clear_screen

    def print_summary(self, blocks: Iterable[ApplicationBlock]) -> None:
        out = self.stream
        if self.clear_screen:
            out.write(CLEAR_SCREEN)
        print("Summary", file=out)
        print("=======", file=out)
        print(file=out)

        blocks = list(blocks)
        if not blocks:
            print("No activity recorded yet.", file=out)

        for block in blocks:
            print(RULE, file=out)
            print(f"{format_duration(block.total_seconds)} | {block.application_name}", file=out)
            print(RULE, file=out)
            for window, seconds in block.entries:
                label = window or "(untitled)"
                print(f"\t{format_duration(seconds)} | {label}", file=out)
        out.flush()
