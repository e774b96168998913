# src/planner_client/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole client.
- Only the backend address and protocol names live here; tokens never do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "PLANNER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_url_path(name: str, default: str) -> str:
    raw = _env(name, default).strip() or default
    return raw if raw.startswith("/") else "/" + raw


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Backend ----
    api_url: str
    health_path: str
    login_path: str
    register_path: str
    refresh_path: str

    # ---- Anti-forgery ----
    csrf_cookie_name: str
    csrf_header_name: str

    # ---- Navigation ----
    entry_path: str

    # ---- Transport ----
    connect_timeout: float
    read_timeout: float

    # ---- Session behaviour ----
    single_flight_refresh: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "planner").strip() or "planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/planner"))

        api_url = (_env(_k("API_URL"), "http://localhost:8000").strip() or "http://localhost:8000").rstrip("/")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 25.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            api_url=api_url,
            health_path=_env_url_path(_k("HEALTH_PATH"), "/health"),
            login_path=_env_url_path(_k("LOGIN_PATH"), "/auth/login"),
            register_path=_env_url_path(_k("REGISTER_PATH"), "/auth/register"),
            refresh_path=_env_url_path(_k("REFRESH_PATH"), "/auth/refresh"),
            csrf_cookie_name=_env(_k("CSRF_COOKIE_NAME"), "XSRF-TOKEN").strip() or "XSRF-TOKEN",
            csrf_header_name=_env(_k("CSRF_HEADER_NAME"), "X-XSRF-TOKEN").strip() or "X-XSRF-TOKEN",
            entry_path=_env_url_path(_k("ENTRY_PATH"), "/"),
            connect_timeout=max(0.1, connect_timeout),
            # keep read >= connect as a sane baseline
            read_timeout=max(read_timeout, connect_timeout),
            single_flight_refresh=_env_bool(_k("SINGLE_FLIGHT_REFRESH"), False),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
