"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  Outside production a
``.env`` file in the working directory is loaded first (see
``.env.example``); in production the variables are expected to be set
by the hosting environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PRODUCTION = "production"

if os.getenv("APP_ENV", "development").lower() != PRODUCTION:
    load_dotenv()

# Repository root (the directory containing the ``blog_api`` package).
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent


def _default_log_level() -> str:
    if os.getenv("APP_ENV", "development").lower() == PRODUCTION:
        return "INFO"
    return "DEBUG"


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Blog Posts API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Runtime mode.  ``production`` enables serving the built frontend
    # and restricts CORS to ``cors_origin``; any other value is treated
    # as a development setup.
    environment: str = os.getenv("APP_ENV", "development").lower()

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", _default_log_level())

    # Frontend origin allowed to call the API in production.  Replace
    # the placeholder with the real domain of the deployed frontend.
    cors_origin: str = os.getenv("CORS_ORIGIN", "https://your-angular-app-domain.com")

    # Directory with the built single page application.  Relative paths
    # are resolved against the repository root.
    static_dir: str = os.getenv("STATIC_DIR", str(BASE_DIR.parent / "SourabhMadane"))
    index_document: str = "index.html"

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def cors_allowed_origins(self) -> list[str]:
        """Origins accepted by the CORS gate for the current mode."""
        if self.is_production:
            return [self.cors_origin]
        return ["*"]

    def static_path(self) -> Path:
        """Return ``static_dir`` as an absolute path."""
        path = Path(self.static_dir)
        if not path.is_absolute():
            path = BASE_DIR / path
        return path


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests build their own
# ``Settings`` instances and pass them to ``create_app``.
settings = Settings()
