"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application, IApplication
from ..logging_config import get_logger
from .routes import actions, capture, diagnostics, workflows

logger = get_logger(__name__)

# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    logger.info("rdbridge API starting")
    yield
    logger.info("rdbridge API stopped")


def create_fastapi_app(application: IApplication | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    fastapi_app = FastAPI(
        title="rdbridge API",
        description="RenderDoc capture automation API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Include routers
    application = application or get_app()
    fastapi_app.include_router(diagnostics.create_diagnostics_router(application))
    fastapi_app.include_router(capture.create_capture_router(application))
    fastapi_app.include_router(actions.create_actions_router(application))
    fastapi_app.include_router(workflows.create_workflows_router(application))

    return fastapi_app
