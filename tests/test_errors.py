"""
Tests for the centralized error handler

Unexpected exceptions raised inside a route become the generic JSON
error response; details are exposed only outside production.
"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from blog_api.app.core.errors import (
    GENERIC_ERROR_MESSAGE,
    ErrorHandlingMiddleware,
    FrontendAssetsMissingError,
    declared_status,
)
from blog_api.app.main import create_app
from blog_api.app.services.post_service import PostStore


class TeapotError(Exception):
    status = 418


@pytest.fixture
def broken_store():
    store = MagicMock(spec=PostStore)
    store.list_posts.side_effect = RuntimeError("store exploded")
    store.create_post.side_effect = TeapotError("short and stout")
    return store


class TestDevelopmentErrors:
    def test_unexpected_error_is_500_with_details(self, dev_settings, broken_store):
        client = TestClient(create_app(dev_settings, broken_store))

        response = client.get("/api/posts")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == GENERIC_ERROR_MESSAGE
        assert body["error"] == {"type": "RuntimeError", "detail": "store exploded"}

    def test_declared_status_is_used(self, dev_settings, broken_store):
        client = TestClient(create_app(dev_settings, broken_store))

        response = client.post("/api/posts", json={"title": "T"})

        assert response.status_code == 418
        assert response.json()["error"]["type"] == "TeapotError"

    def test_error_is_logged_with_request_context(self, dev_settings, broken_store, caplog):
        client = TestClient(create_app(dev_settings, broken_store))

        with caplog.at_level(logging.ERROR):
            client.post("/api/posts", json={"title": "T"})

        record = next(r for r in caplog.records if r.levelno == logging.ERROR)
        message = record.getMessage()
        assert "short and stout" in message
        assert "path=/api/posts" in message
        assert "method=POST" in message
        assert '"title": "T"' in message or '"title":"T"' in message
        assert "ip=testclient" in message
        assert record.exc_info[0] is TeapotError

    def test_error_response_keeps_security_headers(self, dev_settings, broken_store):
        client = TestClient(create_app(dev_settings, broken_store))

        response = client.get("/api/posts")

        assert response.headers["x-content-type-options"] == "nosniff"


class TestPipelineErrors:
    def test_error_outside_the_router_is_handled(self, dev_settings):
        async def failing_app(scope, receive, send):
            raise RuntimeError("middleware exploded")

        client = TestClient(ErrorHandlingMiddleware(failing_app, app_settings=dev_settings))

        response = client.get("/api/posts")

        assert response.status_code == 500
        assert response.json() == {
            "message": GENERIC_ERROR_MESSAGE,
            "error": {"type": "RuntimeError", "detail": "middleware exploded"},
        }

    def test_handler_wraps_router_and_whole_pipeline(self, dev_settings):
        app = create_app(dev_settings)

        assert app.user_middleware[0].cls is ErrorHandlingMiddleware
        assert app.user_middleware[-1].cls is ErrorHandlingMiddleware


def test_production_hides_details(production_app_factory, frontend_dir, broken_store):
    client = TestClient(production_app_factory(frontend_dir, store=broken_store))

    response = client.get("/api/posts")

    assert response.status_code == 500
    assert response.json() == {"message": GENERIC_ERROR_MESSAGE, "error": {}}


def test_not_found_is_not_logged_as_error(client, caplog):
    client.delete("/api/posts/nonexistent")

    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert any(r.levelno == logging.WARNING and "nonexistent" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (RuntimeError("x"), 500),
        (TeapotError("x"), 418),
        (FrontendAssetsMissingError("/dist/index.html"), 404),
    ],
)
def test_declared_status(exc, expected):
    assert declared_status(exc) == expected


def test_declared_status_ignores_non_error_codes():
    exc = RuntimeError("x")
    exc.status_code = 200
    assert declared_status(exc) == 500
