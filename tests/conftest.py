# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from planner_client.bootstrap import create_app_state
from planner_client.config import Settings
from planner_client.core.state import AppState

from .fakes import CSRF_COOKIE, CSRF_HEADER, FakeBackend, FakeNavigator


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = dict(
        app_name="planner-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        api_url="http://api.example.org",
        health_path="/health",
        login_path="/auth/login",
        register_path="/auth/register",
        refresh_path="/auth/refresh",
        csrf_cookie_name=CSRF_COOKIE,
        csrf_header_name=CSRF_HEADER,
        entry_path="/",
        connect_timeout=1.0,
        read_timeout=1.0,
        single_flight_refresh=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Explicit Settings instead of Settings.from_env(), so the developer's
    environment or .env never leaks into unit tests.
    """
    return make_settings(tmp_path)


@pytest.fixture()
def backend() -> FakeBackend:
    backend = FakeBackend()
    backend.users["alice"] = "Secret123!"
    return backend


@pytest.fixture()
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture()
def state(settings: Settings, backend: FakeBackend, navigator: FakeNavigator) -> AppState:
    """AppState wired to the fake backend through httpx.MockTransport."""
    return create_app_state(
        settings=settings,
        navigate=navigator.navigate,
        location=navigator.current,
        transport=backend.transport(),
    )
