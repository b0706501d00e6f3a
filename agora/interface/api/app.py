"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from agora.interface.api.routes import comments, counters, follows, health, likes
from agora.util.di.container import create_container, setup_di
from agora.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to wire in. Defaults to the production
            container; tests pass one backed by in-memory repositories.
    """
    app_instance = FastAPI(
        title="Agora Interactions API",
        description="Likes, follows, counters and threaded discussion for Agora projects",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(likes.router)
    app_instance.include_router(follows.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(counters.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
