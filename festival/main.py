"""FastAPI application entry point."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from festival import __version__
from festival.api import admin, auth, films, submitter, tickets
from festival.api.errors import register_exception_handlers
from festival.config import Settings, get_settings
from festival.schemas.common import ErrorResponse
from festival.seed import seed_demo_data
from festival.services.sessions import SessionManager, run_session_sweeper
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404)}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed demo data and run the session sweeper for the app's lifetime."""
    settings: Settings = app.state.settings
    if settings.seed_demo_data:
        seed_demo_data(app.state.store)

    sweeper = asyncio.create_task(
        run_session_sweeper(app.state.sessions, settings.session_sweep_interval_seconds)
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper


def create_app(settings: Settings | None = None, store: EntityStore | None = None) -> FastAPI:
    """Build the application around one explicit entity store.

    A fresh store is created from ``settings.database_url`` unless one is
    passed in, so tests can hand each app an isolated store.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Film Festival API",
        description="Film submissions, reviews and ticketing for the festival portals",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else EntityStore(settings.database_url)
    app.state.sessions = SessionManager(
        app.state.store, ttl=timedelta(hours=settings.session_ttl_hours)
    )

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router, responses=ERROR_RESPONSES)
    app.include_router(films.router, responses=ERROR_RESPONSES)
    app.include_router(submitter.router, responses=ERROR_RESPONSES)
    app.include_router(admin.router, responses=ERROR_RESPONSES)
    app.include_router(tickets.router, responses=ERROR_RESPONSES)

    @app.get("/api/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": __version__,
            "service": "Film Festival API",
            "environment": request.app.state.settings.environment,
        }

    return app


app = create_app()
