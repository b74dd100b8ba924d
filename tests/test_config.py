"""
Tests for Settings
"""

from pathlib import Path

from blog_api.app.core.config import BASE_DIR, Settings


def test_development_allows_any_origin():
    settings = Settings(environment="development")
    assert not settings.is_production
    assert settings.cors_allowed_origins == ["*"]


def test_production_allows_configured_origin():
    settings = Settings(environment="production", cors_origin="https://blog.example.com")
    assert settings.is_production
    assert settings.cors_allowed_origins == ["https://blog.example.com"]


def test_relative_static_dir_resolved_against_project_root():
    settings = Settings(static_dir="frontend/dist")
    assert settings.static_path() == BASE_DIR / "frontend" / "dist"


def test_absolute_static_dir_kept(tmp_path):
    settings = Settings(static_dir=str(tmp_path))
    assert settings.static_path() == Path(tmp_path)


def test_app_exposes_settings_and_store(client, dev_settings, store):
    assert client.app.state.settings is dev_settings
    assert client.app.state.post_store is store
