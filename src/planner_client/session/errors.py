# src/planner_client/session/errors.py

"""
Failure taxonomy of the session layer.

- NetworkFailure: transport-level, never retried here.
- AntiForgeryMismatch / AuthenticationExpired: recovered once per logical call;
  only visible to callers when recovery did not help.
- AuthenticationTerminal: refresh itself failed, the session is over.
- ValidationFailure: 4xx unrelated to auth, surfaced verbatim
  (CredentialsRejected: 401 from login/register).
- ServerFailure: 5xx, surfaced verbatim.
"""

from __future__ import annotations

from typing import Any

import httpx


class SessionError(Exception):
    """Base class for everything the session layer raises."""


class NetworkFailure(SessionError):
    """The request did not yield a usable HTTP response (connection, timeout, redirect or decoding failure)."""


class ApiFailure(SessionError):
    """The server answered with a non-2xx status."""

    def __init__(self, response: httpx.Response, message: str | None = None) -> None:
        self.response = response
        self.status_code = response.status_code
        self.detail = response_detail(response)
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        req = self.response.request
        base = f"{req.method} {req.url.path} -> {self.status_code}"
        return f"{base}: {self.detail}" if self.detail else base


class AntiForgeryMismatch(ApiFailure):
    pass


class AuthenticationExpired(ApiFailure):
    pass


class ValidationFailure(ApiFailure):
    pass


class ServerFailure(ApiFailure):
    pass


class CredentialsRejected(ValidationFailure):
    """401 from a session endpoint (login/register): wrong name or password."""


class AuthenticationTerminal(SessionError):
    """The refresh call failed; local credentials have been dropped."""


def response_detail(response: httpx.Response) -> str | None:
    """Best-effort extraction of the server's `detail` field."""
    try:
        payload: Any = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text[:200] or None
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if detail is None:
            return None
        return detail if isinstance(detail, str) else str(detail)
    return None


def error_for_response(response: httpx.Response, *, session_endpoint: bool = False) -> ApiFailure:
    """Map a final (non-recovered) failure response onto the taxonomy."""
    status = response.status_code
    if status == 401:
        if session_endpoint:
            return CredentialsRejected(response)
        return AuthenticationExpired(response)
    if status == 403 and is_csrf_detail(response_detail(response)):
        return AntiForgeryMismatch(response)
    if status >= 500:
        return ServerFailure(response)
    return ValidationFailure(response)


def is_csrf_detail(detail: str | None) -> bool:
    return bool(detail) and "csrf" in detail.lower()


_DEFAULT_MESSAGES = {
    "login": "Login failed.",
    "register": "Registration failed.",
}


def friendly_error_message(err: Exception, *, operation: str = "") -> str:
    """User-facing text: the server's detail when there is one, else a generic line."""
    if isinstance(err, ApiFailure) and err.detail:
        return err.detail
    if isinstance(err, AuthenticationTerminal):
        return "Your session has expired. Please log in again."
    if isinstance(err, NetworkFailure):
        return "Cannot reach the server. Check your connection and try again."
    return _DEFAULT_MESSAGES.get(operation, "Request failed.")
