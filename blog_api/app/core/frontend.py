"""
Serving the built single page application in production.

``SinglePageApp`` is a ``StaticFiles`` application that answers GET and
HEAD requests for paths without a matching file with the index
document, so the client side router can handle deep links such as
``/posts/42``.  It is mounted at ``/`` after every API route has been
registered, which keeps the API from being shadowed.
"""

import logging
import os
from pathlib import Path

from fastapi import FastAPI
from starlette.exceptions import HTTPException
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from blog_api.app.core.config import Settings
from blog_api.app.core.errors import FrontendAssetsMissingError

logger = logging.getLogger(__name__)


class SinglePageApp(StaticFiles):
    """Static files with a fallback to ``index_document``."""

    def __init__(self, *, directory: Path, index_document: str = "index.html") -> None:
        # The directory is checked per request so a missing build is
        # reported through the error handler instead of at startup.
        super().__init__(directory=directory, check_dir=False)
        self.index_path = Path(directory) / index_document

    async def check_config(self) -> None:
        if self.directory is None or not os.path.isdir(self.directory):
            raise FrontendAssetsMissingError(str(self.directory))

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or scope["method"] not in ("GET", "HEAD"):
                raise
        if not self.index_path.is_file():
            raise FrontendAssetsMissingError(str(self.index_path))
        return FileResponse(self.index_path)


def mount_frontend(app: FastAPI, app_settings: Settings) -> None:
    """Mount the frontend build at ``/``.  Call after adding API routes."""
    directory = app_settings.static_path()
    logger.info("Serving static frontend files from: %s", directory)
    app.mount(
        "/",
        SinglePageApp(directory=directory, index_document=app_settings.index_document),
        name="frontend",
    )
