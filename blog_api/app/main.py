"""
Main entrypoint for the Blog Posts API.

This module assembles the FastAPI application: logging, the request
pipeline (security headers, compression, CORS, centralized error
handling), the ``/api`` routes and, in production, the frontend build.
``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn blog_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.errors import ErrorHandlingMiddleware, register_error_handlers
from .core.frontend import mount_frontend
from .core.logging_config import setup_logging
from .core.middleware import setup_middleware
from .services.post_service import PostStore

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, store: Optional[PostStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Configuration to use; defaults to the settings read from the
        environment.
    store : Optional[PostStore]
        Post store owned by the application; defaults to a store holding
        the sample posts.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(app_settings.log_level, json_format=app_settings.is_production)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)
    app.state.settings = app_settings
    app.state.post_store = store if store is not None else PostStore.with_seed_posts()

    # Errors raised by routes are handled innermost so their responses
    # still pass through the security, gzip and CORS layers; the outer
    # copy catches errors raised by those layers themselves.
    register_error_handlers(app, app_settings)
    app.add_middleware(ErrorHandlingMiddleware, app_settings=app_settings)
    setup_middleware(app, app_settings)
    app.add_middleware(ErrorHandlingMiddleware, app_settings=app_settings)

    app.include_router(api_router, prefix="/api")

    # Must come after the API routes: the frontend is mounted at "/".
    if app_settings.is_production:
        mount_frontend(app, app_settings)

    @app.on_event("startup")
    async def startup_event() -> None:
        logger.info("Server running in %s mode on port %s", app_settings.environment, app_settings.port)
        if app_settings.is_production:
            logger.info("CORS origin restricted to: %s", app_settings.cors_origin)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
