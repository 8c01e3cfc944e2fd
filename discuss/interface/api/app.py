"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss.config import Settings
from discuss.interface.api.routes import comments, health, markup, threads
from discuss.util.di.container import create_container, setup_di
from discuss.util.observability import instrument_fastapi


def register_routes(app_instance: FastAPI) -> None:
    """Attach all routers to an application."""
    app_instance.include_router(health.router)
    app_instance.include_router(markup.router)
    app_instance.include_router(threads.router)
    app_instance.include_router(comments.router)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use (defaults to the production container)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Discuss API",
        description="Local API for rendering AniList discussion threads with optimistic comment actions",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # The renderer is served from the same machine
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.base_url, "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    register_routes(app_instance)

    return app_instance
