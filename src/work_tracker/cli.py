"""Command-line interface for the work tracker."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .config import (
    APP_VERSION,
    DEFAULT_RESOLUTION_SECONDS,
    ConfigurationError,
    TrackerSettings,
)
from .paths import get_log_path
from .probe import XdotoolProbe
from .reporting import SummaryPrinter, summary_as_dict
from .scheduler import TickScheduler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

app = typer.Typer(help="Track time spent in the focused application and window.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"work-tracker {APP_VERSION}")
        raise typer.Exit()


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def _build_settings(resolution: int, normalize_titles: bool) -> TrackerSettings:
    try:
        return TrackerSettings.from_seconds(resolution, normalize_titles=normalize_titles)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--resolution") from exc


def _log_to_file(log_file: Path) -> None:
    """Send log records to ``log_file`` so they do not scroll the live summary away."""
    log_file = Path(log_file)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(
            f"cannot write log file {log_file}: {exc}", param_hint="--log-file"
        ) from exc
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.addHandler(file_handler)


def _resolution_option():
    return typer.Option(
        DEFAULT_RESOLUTION_SECONDS,
        "--resolution",
        "-r",
        min=1,
        envvar="WORK_TRACKER_RESOLUTION",
        metavar="SECONDS",
        help="Sets a custom tracking resolution in seconds.",
    )


@app.command()
def track(
    resolution: int = _resolution_option(),
    normalize_titles: bool = typer.Option(
        False,
        "--normalize-titles",
        help="Strip browser suffixes such as ' - Mozilla Firefox' from window titles.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        path_type=Path,
        help="Where to write logs while the summary is on screen.",
    ),
) -> None:
    """Sample the focused window every period and redraw the summary until interrupted."""
    settings = _build_settings(resolution, normalize_titles)
    _log_to_file(log_file or get_log_path())

    probe = XdotoolProbe(timeout=settings.probe_timeout, normalize_titles=settings.normalize_titles)
    printer = SummaryPrinter()
    scheduler = TickScheduler(probe, settings, on_render=printer.print_summary)
    scheduler.run_forever()


@app.command("summary-once")
def summary_once(
    resolution: int = _resolution_option(),
    normalize_titles: bool = typer.Option(False, "--normalize-titles"),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """Take a single sample and print the resulting summary."""
    settings = _build_settings(resolution, normalize_titles)
    probe = XdotoolProbe(timeout=settings.probe_timeout, normalize_titles=settings.normalize_titles)
    blocks = TickScheduler(probe, settings).tick()
    if as_json:
        typer.echo(json.dumps(summary_as_dict(blocks), indent=2, ensure_ascii=False))
    else:
        SummaryPrinter(clear_screen=False).print_summary(blocks)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the dashboard."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the dashboard."
    ),
    resolution: int = _resolution_option(),
    normalize_titles: bool = typer.Option(False, "--normalize-titles"),
    open_browser: bool = typer.Option(
        True,
        "--open-browser/--no-open-browser",
        help="Automatically launch the dashboard in your default browser.",
    ),
) -> None:
    """Start the local dashboard with the tracker running in the background."""
    from .webapp import run_dashboard

    settings = _build_settings(resolution, normalize_titles)
    run_dashboard(host=host, port=port, settings=settings, open_browser=open_browser)
