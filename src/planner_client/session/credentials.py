# src/planner_client/session/credentials.py

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

BEARER = "Bearer"


@dataclass(frozen=True, slots=True)
class Credential:
    """Access token plus its scheme. Lives in process memory only."""

    token: str
    scheme: str = BEARER

    def authorization(self) -> str:
        return f"{self.scheme} {self.token}"

    def __repr__(self) -> str:
        # Never leak the token through logs or tracebacks.
        return f"Credential(scheme={self.scheme!r}, token=<redacted>)"


class CredentialStore:
    """
    Session-scoped holder of the current access token.

    There is no durable backing: a new store starts empty, and a process
    restart loses the token. Writes are last-write-wins.
    """

    def __init__(self) -> None:
        self._credential: Credential | None = None

    def set(self, token: str) -> None:
        token = (token or "").strip()
        if not token:
            raise ValueError("token must be a non-empty string")
        self._credential = Credential(token=token)
        logger.debug("Access token stored")

    def get(self) -> str | None:
        cred = self._credential
        return cred.token if cred is not None else None

    def credential(self) -> Credential | None:
        return self._credential

    def clear(self) -> None:
        if self._credential is not None:
            logger.debug("Access token cleared")
        self._credential = None

    def has_token(self) -> bool:
        return self._credential is not None
