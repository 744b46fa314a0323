"""Tests for the application factory and its background tasks."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import main


class ClosingEngine:
    """Engine stand-in that records whether ``close`` ran on the event loop."""

    def __init__(self, settings) -> None:
        self.settings = settings
        self.closed_on_event_loop: bool | None = None

    def close(self) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.closed_on_event_loop = False
        else:
            self.closed_on_event_loop = True


def test_shutdown_closes_built_engine_off_the_event_loop(settings, monkeypatch):
    engine = ClosingEngine(settings)
    monkeypatch.setattr(main, "get_settings", lambda: settings)
    monkeypatch.setattr(main, "build_notification_engine", lambda _settings: engine)

    with TestClient(main.create_app()):
        pass

    assert engine.closed_on_event_loop is False


@pytest.mark.anyio
async def test_periodic_runner_survives_a_failed_run(caplog):
    calls = []

    class FlakyScheduler:
        async def run_scheduled_notifications(self):
            calls.append(len(calls))
            if len(calls) == 1:
                raise RuntimeError("database went away")
            raise asyncio.CancelledError

    engine = SimpleNamespace(
        settings=SimpleNamespace(scheduler_interval_seconds=0),
        scheduler=FlakyScheduler(),
    )

    with caplog.at_level("ERROR"), pytest.raises(asyncio.CancelledError):
        await main._run_periodically(engine)

    assert len(calls) == 2
    assert "Scheduled notification run failed" in caplog.text
