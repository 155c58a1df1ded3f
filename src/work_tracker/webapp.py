"""FastAPI application that exposes the live summary in a local web UI."""

from __future__ import annotations

import logging
import threading
import webbrowser
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .config import APP_VERSION, TrackerSettings
from .models import ApplicationBlock
from .probe import ActiveWindowProbe, XdotoolProbe
from .reporting import format_duration
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class TrackerRunner:
    """Manage the tick scheduler in a background thread."""

    def __init__(self, scheduler: TickScheduler) -> None:
        self.scheduler = scheduler
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    def start(self) -> None:
        with self._lock:
            if self._thread and self._thread.is_alive():
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self.scheduler.run_until_stopped,
                args=(stop_event,),
                name="work-tracker-scheduler",
                daemon=True,
            )
            self._thread = thread
            self._stop_event = stop_event
            thread.start()
            logger.info("Tracker background thread started.")

    def stop(self) -> None:
        thread: Optional[threading.Thread] = None
        with self._lock:
            if not self._thread or not self._thread.is_alive() or not self._stop_event:
                return
            self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._stop_event = None
        if thread:
            thread.join(timeout=10)
            logger.info("Tracker background thread stopped.")

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._thread and self._thread.is_alive())


class WindowEntry(BaseModel):
    window_name: str
    seconds: int
    duration: str


class ApplicationSummary(BaseModel):
    application_name: str
    total_seconds: int
    total: str
    entries: list[WindowEntry]

    @classmethod
    def from_block(cls, block: ApplicationBlock) -> "ApplicationSummary":
        return cls(
            application_name=block.application_name,
            total_seconds=block.total_seconds,
            total=format_duration(block.total_seconds),
            entries=[
                WindowEntry(window_name=window, seconds=seconds, duration=format_duration(seconds))
                for window, seconds in block.entries
            ],
        )


class SummaryResponse(BaseModel):
    total_seconds: int
    total: str
    applications: list[ApplicationSummary]


class StatusResponse(BaseModel):
    tracker_running: bool
    resolution_seconds: int
    ticks: int
    tracked_windows: int


def create_app(
    *,
    settings: Optional[TrackerSettings] = None,
    probe: Optional[ActiveWindowProbe] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or TrackerSettings()
    resolved_probe = probe or XdotoolProbe(
        timeout=resolved_settings.probe_timeout,
        normalize_titles=resolved_settings.normalize_titles,
    )
    scheduler = TickScheduler(resolved_probe, resolved_settings)
    runner = TrackerRunner(scheduler)

    app = FastAPI(title="Work Tracker", version=APP_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.scheduler = scheduler
    app.state.tracker_runner = runner

    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.on_event("startup")
    async def _startup() -> None:
        runner.start()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        runner.stop()

    @app.get("/api/status", response_model=StatusResponse)
    def status(request: Request) -> StatusResponse:
        current: TickScheduler = request.app.state.scheduler
        return StatusResponse(
            tracker_running=request.app.state.tracker_runner.is_running(),
            resolution_seconds=resolved_settings.period,
            ticks=current.ticks,
            tracked_windows=current.tracked_windows(),
        )

    @app.get("/api/summary", response_model=SummaryResponse)
    def summary(request: Request) -> SummaryResponse:
        blocks = request.app.state.scheduler.render_summary()
        total = sum(block.total_seconds for block in blocks)
        return SummaryResponse(
            total_seconds=total,
            total=format_duration(total),
            applications=[ApplicationSummary.from_block(block) for block in blocks],
        )

    @app.get("/")
    def index() -> FileResponse:
        index_path = static_dir / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="UI not found")
        return FileResponse(index_path)

    return app


def run_dashboard(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    settings: Optional[TrackerSettings] = None,
    open_browser: bool = True,
    log_level: str = "info",
) -> None:
    """Serve the dashboard with uvicorn, tracking in a background thread."""
    app = create_app(settings=settings)
    url = f"http://{host}:{port}"
    logger.info("Dashboard available at %s", url)

    if open_browser:
        timer = threading.Timer(1.0, _open_browser, args=(url,))
        timer.daemon = True
        timer.start()

    uvicorn.run(app, host=host, port=port, log_level=log_level)


def _open_browser(url: str) -> None:
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.exception("Failed to launch browser for %s", url)
