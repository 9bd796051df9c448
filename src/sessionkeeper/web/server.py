from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sessionkeeper.app import App
from sessionkeeper.config import Config
from sessionkeeper.errors import UserError
from sessionkeeper.web.error_handlers import general_exception_handler, user_error_handler
from sessionkeeper.web.openapi import set_custom_openapi
from sessionkeeper.web.routers import sessions_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="SessionKeeper API",
        lifespan=lifespan,
    )
    # Available before startup so dependencies resolve in every request
    app.state.app = app_instance
    app.state.config = config

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(sessions_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app, config.cookie_name)

    return app
