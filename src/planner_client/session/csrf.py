# src/planner_client/session/csrf.py

from __future__ import annotations

import logging

import httpx

from .errors import NetworkFailure

logger = logging.getLogger(__name__)


class CsrfAccessor:
    """
    Reads the anti-forgery token mirrored in a script-readable cookie.

    The server owns the value and may rotate it at any time; the client only
    reads it from the HTTP client's cookie jar and primes it with a cheap GET.
    """

    def __init__(self, http: httpx.AsyncClient, *, cookie_name: str, prime_path: str) -> None:
        self._http = http
        self._cookie_name = cookie_name
        self._prime_path = prime_path

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def read(self) -> str | None:
        """Current cookie value, or None. Never raises."""
        value: str | None = None
        try:
            # Walk the jar instead of cookies.get(): the same name may exist for
            # several paths/domains, and get() raises CookieConflict then.
            for cookie in self._http.cookies.jar:
                if cookie.name == self._cookie_name and cookie.value:
                    value = cookie.value
        except Exception:
            logger.debug("Cookie jar read failed", exc_info=True)
            return None
        return value

    async def prime(self) -> None:
        """
        Issue a read-only call so the server (re)sets the cookie.

        Raises NetworkFailure when the request itself fails. A non-2xx
        answer is only logged: the cookie may still have been set.
        """
        try:
            response = await self._http.get(self._prime_path)
        except httpx.RequestError as e:
            raise NetworkFailure(f"CSRF priming failed: {e.__class__.__name__}") from e

        if not response.is_success:
            logger.warning("CSRF priming returned status=%s", response.status_code)
        logger.debug("CSRF priming done (cookie_present=%s)", self.read() is not None)
