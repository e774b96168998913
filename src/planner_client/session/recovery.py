# src/planner_client/session/recovery.py

"""
Failure recovery for one logical call.

classify_failure() decides what a failed response allows, in this order:
1. 403 with a CSRF detail, CSRF retry unused  -> re-prime the cookie, retry
2. 401, auth retry unused, call opted in      -> refresh the token, retry
3. anything else                              -> terminal, caller sees the error

Each branch consumes its flag on the attempt, so a logical call gets at most
one CSRF retry and one auth retry (three transmissions in the worst case).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

import httpx

from .attempt import RequestAttempt
from .credentials import CredentialStore
from .csrf import CsrfAccessor
from .errors import AuthenticationTerminal, SessionError, is_csrf_detail, response_detail
from .refresh import RefreshCoordinator

logger = logging.getLogger(__name__)

ExpiryListener = Callable[[], None]


class Recovery(str, Enum):
    CSRF = "csrf"
    AUTH = "auth"
    NONE = "none"


def classify_failure(response: httpx.Response, attempt: RequestAttempt) -> Recovery:
    status = response.status_code
    if status == 403 and not attempt.csrf_retried and is_csrf_detail(response_detail(response)):
        return Recovery.CSRF
    if status == 401 and attempt.recover_auth and not attempt.auth_retried:
        return Recovery.AUTH
    return Recovery.NONE


class FailureRecoveryPolicy:
    """
    Executes the recovery action chosen by classify_failure().

    recover() returns the attempt to re-send (with its flag consumed) or None
    when the failure is terminal. A failed refresh clears the credential
    store, notifies expiry listeners and raises AuthenticationTerminal.
    """

    def __init__(
        self,
        store: CredentialStore,
        csrf: CsrfAccessor,
        refresher: RefreshCoordinator,
    ) -> None:
        self._store = store
        self._csrf = csrf
        self._refresher = refresher
        self._expiry_listeners: list[ExpiryListener] = []

    def add_expiry_listener(self, listener: ExpiryListener) -> None:
        self._expiry_listeners.append(listener)

    async def recover(self, attempt: RequestAttempt, response: httpx.Response) -> RequestAttempt | None:
        action = classify_failure(response, attempt)

        if action is Recovery.CSRF:
            return await self._recover_csrf(attempt)
        if action is Recovery.AUTH:
            return await self._recover_auth(attempt)

        logger.debug(
            "Terminal failure %s %s status=%s (auth_retried=%s csrf_retried=%s)",
            attempt.method,
            attempt.target,
            response.status_code,
            attempt.auth_retried,
            attempt.csrf_retried,
        )
        return None

    async def _recover_csrf(self, attempt: RequestAttempt) -> RequestAttempt:
        nxt = attempt.mark_csrf_retried()
        logger.info("CSRF mismatch on %s %s; re-priming cookie", attempt.method, attempt.target)
        await self._csrf.prime()
        return nxt

    async def _recover_auth(self, attempt: RequestAttempt) -> RequestAttempt:
        nxt = attempt.mark_auth_retried()
        logger.info("Access token rejected on %s %s; refreshing", attempt.method, attempt.target)
        try:
            token = await self._refresher.refresh()
        except SessionError as e:
            self._store.clear()
            self._notify_expired()
            raise AuthenticationTerminal("Session expired: token refresh failed") from e

        self._store.set(token)
        return nxt

    def _notify_expired(self) -> None:
        logger.warning("Session expired; local credentials dropped")
        for listener in list(self._expiry_listeners):
            try:
                listener()
            except Exception:
                logger.exception("Session-expired listener failed")
