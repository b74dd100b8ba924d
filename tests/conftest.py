"""
Shared test fixtures.

Every test gets its own ``PostStore`` and its own application instance,
so mutations made through the API never leak between tests.
"""

import pytest
from fastapi.testclient import TestClient

from blog_api.app.core.config import Settings
from blog_api.app.main import create_app
from blog_api.app.services.post_service import PostStore

INDEX_HTML = "<!doctype html><html><body><app-root></app-root></body></html>"
APP_JS = "console.log('blog');"
PRODUCTION_ORIGIN = "https://blog.example.com"


@pytest.fixture
def store():
    """A fresh store holding the two sample posts."""
    return PostStore.with_seed_posts()


@pytest.fixture
def dev_settings():
    return Settings(environment="development", log_level="DEBUG")


@pytest.fixture
def client(store, dev_settings):
    app = create_app(dev_settings, store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def frontend_dir(tmp_path):
    """A minimal frontend build: an index document and one asset."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (dist / "assets" / "app.js").write_text(APP_JS, encoding="utf-8")
    return dist


def _production_settings(static_dir) -> Settings:
    return Settings(
        environment="production",
        log_level="INFO",
        cors_origin=PRODUCTION_ORIGIN,
        static_dir=str(static_dir),
    )


@pytest.fixture
def production_client(frontend_dir):
    app = create_app(_production_settings(frontend_dir), PostStore.with_seed_posts())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def production_app_factory():
    """Build a production app serving ``static_dir``."""

    def factory(static_dir, store=None):
        return create_app(_production_settings(static_dir), store if store is not None else PostStore.with_seed_posts())

    return factory
