# src/planner_client/bootstrap.py

"""
Composition root:
- loads settings once,
- builds the shared httpx.AsyncClient (its cookie jar holds the CSRF and refresh cookies),
- wires the session layer into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from .api.client import ApiClient
from .config import Settings, get_settings
from .core.state import AppState
from .logging_setup import setup_logging
from .session.context import Navigator, SessionContext
from .session.credentials import CredentialStore
from .session.csrf import CsrfAccessor
from .session.pipeline import RequestPipeline
from .session.recovery import FailureRecoveryPolicy
from .session.refresh import RefreshCoordinator

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)


def build_http_client(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    timeout = httpx.Timeout(
        connect=settings.connect_timeout,
        read=settings.read_timeout,
        write=10.0,
        pool=settings.connect_timeout,
    )
    return httpx.AsyncClient(
        base_url=settings.api_url,
        # No default Content-Type: httpx sets JSON or form encoding per request.
        headers={"Accept": "application/json"},
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    )


def create_app_state(
    *,
    settings: Settings | None = None,
    navigate: Navigator | None = None,
    location: Callable[[], str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and transport injectable makes the client easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    http = build_http_client(settings, transport=transport)

    store = CredentialStore()
    csrf = CsrfAccessor(http, cookie_name=settings.csrf_cookie_name, prime_path=settings.health_path)
    refresher = RefreshCoordinator(
        http,
        refresh_path=settings.refresh_path,
        single_flight=settings.single_flight_refresh,
    )
    recovery = FailureRecoveryPolicy(store, csrf, refresher)
    pipeline = RequestPipeline(
        http,
        store=store,
        csrf=csrf,
        policy=recovery,
        csrf_header=settings.csrf_header_name,
    )
    api = ApiClient(pipeline)
    session = SessionContext(
        api,
        store=store,
        csrf=csrf,
        policy=recovery,
        login_path=settings.login_path,
        register_path=settings.register_path,
        entry_path=settings.entry_path,
        navigate=navigate,
        location=location,
    )

    logger.info("Client ready api_url=%s single_flight_refresh=%s", settings.api_url, settings.single_flight_refresh)

    return AppState(
        settings=settings,
        http=http,
        credentials=store,
        csrf=csrf,
        refresher=refresher,
        recovery=recovery,
        pipeline=pipeline,
        api=api,
        session=session,
    )


async def aclose_app_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    state.session.logout()
    try:
        await state.http.aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
