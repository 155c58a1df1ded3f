"""Tests for the dashboard API."""

import time
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from work_tracker.webapp import TrackerRunner, create_app


@pytest.fixture
def app(make_probe, settings):
    probe = make_probe(
        [("Editor", "file.txt")] * 3 + [("Browser", "Docs"), None, ("Editor", "notes.md")]
    )
    return create_app(settings=settings, probe=probe)


@pytest.fixture
def client(app):
    # No context manager: startup hooks (and the background thread) stay off.
    return TestClient(app)


def test_summary_empty(client):
    response = client.get("/api/summary")

    assert response.status_code == 200
    assert response.json() == {"total_seconds": 0, "total": "00:00:00", "applications": []}


def test_summary_after_ticks(app, client):
    for _ in range(6):
        app.state.scheduler.tick()

    data = client.get("/api/summary").json()

    assert data["total_seconds"] == 25
    assert [block["application_name"] for block in data["applications"]] == ["Editor", "Browser"]
    editor = data["applications"][0]
    assert editor["total_seconds"] == 20
    assert editor["total"] == "00:00:20"
    assert editor["entries"] == [
        {"window_name": "file.txt", "seconds": 15, "duration": "00:00:15"},
        {"window_name": "notes.md", "seconds": 5, "duration": "00:00:05"},
    ]


def test_status(app, client):
    app.state.scheduler.tick()

    data = client.get("/api/status").json()

    assert data == {
        "tracker_running": False,
        "resolution_seconds": 5,
        "ticks": 1,
        "tracked_windows": 1,
    }


def test_status_does_not_copy_state(app, client):
    app.state.scheduler.tick()
    app.state.scheduler.tick()

    with patch.object(
        app.state.scheduler, "snapshot", side_effect=AssertionError("state copied")
    ) as mock_snapshot:
        response = client.get("/api/status")

    assert response.status_code == 200
    assert response.json()["tracked_windows"] == 1
    mock_snapshot.assert_not_called()


def test_index_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Work Tracker" in response.text


@pytest.mark.integration
def test_runner_ticks_in_background(make_probe, settings):
    app = create_app(settings=settings, probe=make_probe([("Editor", "file.txt")]))
    runner: TrackerRunner = app.state.tracker_runner

    runner.start()
    try:
        deadline = time.monotonic() + 5
        while app.state.scheduler.ticks == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert runner.is_running()
    finally:
        runner.stop()

    assert not runner.is_running()
    assert app.state.scheduler.ticks == 1
    assert app.state.scheduler.render_summary()[0].total_seconds == 5


def test_lifecycle_starts_and_stops_runner(app):
    with TestClient(app) as client:
        assert client.get("/api/status").json()["tracker_running"] is True

    assert not app.state.tracker_runner.is_running()
