# src/planner_client/session/pipeline.py

from __future__ import annotations

import logging

import httpx

from .attempt import RequestAttempt, augment
from .credentials import CredentialStore
from .csrf import CsrfAccessor
from .errors import NetworkFailure, error_for_response
from .recovery import FailureRecoveryPolicy

logger = logging.getLogger(__name__)


class RequestPipeline:
    """
    augment -> send -> classify failure -> recover -> retry.

    The logical attempt is kept un-augmented; headers are recomputed from the
    credential store and the cookie jar on every transmission, so a retry
    automatically carries a refreshed token or a re-primed CSRF value.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        store: CredentialStore,
        csrf: CsrfAccessor,
        policy: FailureRecoveryPolicy,
        csrf_header: str,
    ) -> None:
        self._http = http
        self._store = store
        self._csrf = csrf
        self._policy = policy
        self._csrf_header = csrf_header

    def prepare(self, attempt: RequestAttempt) -> RequestAttempt:
        return augment(
            attempt,
            token=self._store.get(),
            csrf_token=self._csrf.read(),
            csrf_header=self._csrf_header,
        )

    async def send(self, attempt: RequestAttempt) -> httpx.Response:
        """Run one logical call. Returns a 2xx response or raises a SessionError."""
        response = await self._transmit(attempt)

        # Terminates: recover() returns None once both retry flags are consumed.
        while not response.is_success:
            retry = await self._policy.recover(attempt, response)
            if retry is None:
                raise error_for_response(response, session_endpoint=not attempt.recover_auth)
            attempt = retry
            response = await self._transmit(attempt)

        return response

    async def _transmit(self, attempt: RequestAttempt) -> httpx.Response:
        request = self.prepare(attempt).build(self._http)
        try:
            response = await self._http.send(request)
        except httpx.RequestError as e:
            logger.info("Network failure on %s %s (%s)", attempt.method, attempt.target, e.__class__.__name__)
            raise NetworkFailure(f"{attempt.method} {attempt.target}: {e.__class__.__name__}") from e

        logger.debug("%s %s -> %s", attempt.method, attempt.target, response.status_code)
        return response
