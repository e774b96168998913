# src/planner_client/session/attempt.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

import httpx

# Methods that change server state and therefore carry the anti-forgery header.
STATE_CHANGING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

AUTHORIZATION = "Authorization"

Headers = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class RequestAttempt:
    """
    One logical call, threaded through the pipeline as an immutable value.

    Every step returns a new attempt (with_header, mark_*); the retry flags
    can only go from False to True, each at most once per logical call.
    """

    target: str
    method: str
    headers: Headers = ()
    json: Any = None
    form: Mapping[str, str] | None = None
    params: Mapping[str, Any] | None = None

    auth_retried: bool = False
    csrf_retried: bool = False

    # Session endpoints (login/register) answer 401 for bad credentials;
    # those must not trigger a refresh.
    recover_auth: bool = True

    @classmethod
    def create(
        cls,
        method: str,
        target: str,
        *,
        json: Any = None,
        form: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        recover_auth: bool = True,
    ) -> RequestAttempt:
        return cls(
            target=target,
            method=method.upper(),
            headers=tuple((headers or {}).items()),
            json=json,
            form=dict(form) if form is not None else None,
            params=dict(params) if params is not None else None,
            recover_auth=recover_auth,
        )

    @property
    def is_state_changing(self) -> bool:
        return self.method in STATE_CHANGING_METHODS

    def header(self, name: str) -> str | None:
        low = name.lower()
        for k, v in self.headers:
            if k.lower() == low:
                return v
        return None

    def with_header(self, name: str, value: str) -> RequestAttempt:
        low = name.lower()
        kept = tuple((k, v) for k, v in self.headers if k.lower() != low)
        return replace(self, headers=kept + ((name, value),))

    def without_header(self, name: str) -> RequestAttempt:
        low = name.lower()
        return replace(self, headers=tuple((k, v) for k, v in self.headers if k.lower() != low))

    def mark_auth_retried(self) -> RequestAttempt:
        if self.auth_retried:
            raise RuntimeError("auth retry already consumed for this call")
        return replace(self, auth_retried=True)

    def mark_csrf_retried(self) -> RequestAttempt:
        if self.csrf_retried:
            raise RuntimeError("CSRF retry already consumed for this call")
        return replace(self, csrf_retried=True)

    def build(self, http: httpx.AsyncClient) -> httpx.Request:
        """Build a fresh request; the client adds its current cookies."""
        return http.build_request(
            self.method,
            self.target,
            headers=dict(self.headers),
            json=self.json,
            data=dict(self.form) if self.form is not None else None,
            params=self.params,
        )


def augment(
    attempt: RequestAttempt,
    *,
    token: str | None,
    csrf_token: str | None,
    csrf_header: str,
) -> RequestAttempt:
    """
    Attach Authorization (when a token is held) and the anti-forgery header
    (state-changing methods only, when the cookie is present).
    Headers are otherwise left as they were.
    """
    out = attempt
    if token:
        out = out.with_header(AUTHORIZATION, f"Bearer {token}")
    if csrf_token and out.is_state_changing:
        out = out.with_header(csrf_header, csrf_token)
    return out
