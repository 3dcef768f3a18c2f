"""Builders shared by fixtures and tests."""

from datetime import timedelta

from fastapi.testclient import TestClient

from notebox.app import App
from notebox.config import Config
from notebox.web.server import create_fastapi_app
from tests.fakes import FakeDatabase


def make_config(**overrides: object) -> Config:
    values: dict[str, object] = {
        "database_url": "mongodb://localhost:27017/notebox_test",
        "environment": "development",
        "frontend_url": "http://testserver",
        "service_url": "http://testserver",
        "session_max_age": timedelta(days=7),
        "session_cleanup_interval": timedelta(hours=1),
    }
    values.update(overrides)
    return Config(_env_file=None, **values)  # type: ignore[arg-type]


def make_client(config: Config, database: FakeDatabase, **kwargs: object) -> TestClient:
    """TestClient over a fresh App; use it as a context manager so lifespan runs."""
    app = App(config, database)  # type: ignore[arg-type]
    return TestClient(create_fastapi_app(app, config), **kwargs)  # type: ignore[arg-type]
