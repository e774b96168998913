# src/planner_client/session/refresh.py

from __future__ import annotations

import asyncio
import logging

import httpx

from .errors import NetworkFailure, SessionError, error_for_response

logger = logging.getLogger(__name__)


class RefreshFailed(SessionError):
    """The implicit long-lived credential was rejected or could not be used."""


class RefreshCoordinator:
    """
    Exchanges the refresh cookie (httpOnly, never read here) for a new access token.

    The call goes straight to the HTTP client, outside the request pipeline:
    no Authorization, no anti-forgery header, no recovery. Storing the token is
    the caller's job.

    single_flight=False keeps the historical behaviour where every concurrent
    401 refreshes on its own. With single_flight=True, callers that arrive while
    a refresh is running await that same refresh and share its outcome.
    """

    def __init__(self, http: httpx.AsyncClient, *, refresh_path: str, single_flight: bool = False) -> None:
        self._http = http
        self._refresh_path = refresh_path
        self._single_flight = single_flight
        self._inflight: asyncio.Task[str] | None = None

    @property
    def single_flight(self) -> bool:
        return self._single_flight

    async def refresh(self) -> str:
        if not self._single_flight:
            return await self._do_refresh()

        task = self._inflight
        if task is None or task.done():
            task = asyncio.create_task(self._do_refresh())
            self._inflight = task
            task.add_done_callback(self._forget)
        else:
            logger.debug("Refresh already in flight; joining it")
        # shield: one cancelled waiter must not cancel the shared refresh
        return await asyncio.shield(task)

    def _forget(self, task: asyncio.Task[str]) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # mark the exception retrieved; waiters re-raise it themselves
            task.exception()

    async def _do_refresh(self) -> str:
        logger.info("Refreshing access token")
        try:
            response = await self._http.post(self._refresh_path)
        except httpx.RequestError as e:
            raise NetworkFailure(f"Refresh failed: {e.__class__.__name__}") from e

        if not response.is_success:
            logger.info("Refresh rejected (status=%s)", response.status_code)
            raise RefreshFailed("Refresh rejected by server") from error_for_response(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise RefreshFailed("Refresh response is not JSON") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token.strip():
            raise RefreshFailed("Refresh response has no access_token")

        logger.info("Access token refreshed")
        return token
