import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from anyio import to_thread
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleet_notifier.application.use_cases.notifications import (
    NotificationEngine,
    build_notification_engine,
)
from fleet_notifier.config import get_settings
from fleet_notifier.domain.errors import NotificationEngineError
from fleet_notifier.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


async def _run_periodically(engine: NotificationEngine) -> None:
    """Trigger the scheduler every ``scheduler_interval_seconds``."""

    interval = engine.settings.scheduler_interval_seconds
    while True:
        try:
            await engine.scheduler.run_scheduled_notifications()
        except Exception:  # keep the periodic task alive
            logger.exception("Scheduled notification run failed")
        await asyncio.sleep(interval)


def create_app(notification_engine: NotificationEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the engine on startup and release its resources on shutdown."""

        engine = notification_engine or build_notification_engine(get_settings())
        app.state.notification_engine = engine
        periodic = None
        if engine.settings.scheduler_enabled:
            periodic = asyncio.get_running_loop().create_task(_run_periodically(engine))
        try:
            yield
        finally:
            if periodic is not None:
                periodic.cancel()
                with suppress(asyncio.CancelledError):
                    await periodic
            if notification_engine is None:
                await to_thread.run_sync(engine.close)

    app = FastAPI(title="Fleet Notifier", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotificationEngineError)
    async def _engine_error_handler(request: Request, exc: NotificationEngineError):
        logger.error("Request %s failed: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Notification store unavailable"},
        )

    register_routes(app)
    return app


app = create_app()
