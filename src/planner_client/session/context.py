# src/planner_client/session/context.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..api.auth import login_user, register_user
from ..api.client import ApiClient
from .credentials import CredentialStore
from .csrf import CsrfAccessor
from .errors import SessionError
from .recovery import FailureRecoveryPolicy

logger = logging.getLogger(__name__)

# Identity used when a token is already held but the user name is unknown.
PLACEHOLDER_IDENTITY = "authenticated"


@dataclass(frozen=True, slots=True)
class Session:
    identity: str | None
    authenticated: bool
    initializing: bool


SessionListener = Callable[[Session], None]
Navigator = Callable[[str], None]


class SessionContext:
    """
    What the rest of the application talks to: login, register, logout and
    the derived session flags.

    `authenticated` is true only while an identity is set AND the credential
    store holds a token. When a token refresh fails, the recovery policy tells
    us; we drop the identity and navigate to the unauthenticated entry point.
    """

    def __init__(
        self,
        api: ApiClient,
        *,
        store: CredentialStore,
        csrf: CsrfAccessor,
        policy: FailureRecoveryPolicy,
        login_path: str = "/auth/login",
        register_path: str = "/auth/register",
        entry_path: str = "/",
        navigate: Navigator | None = None,
        location: Callable[[], str] | None = None,
    ) -> None:
        self._api = api
        self._store = store
        self._csrf = csrf
        self._login_path = login_path
        self._register_path = register_path
        self._entry_path = entry_path
        self._navigate = navigate
        self._location = location

        self._identity: str | None = None
        self._initializing = True
        self._listeners: list[SessionListener] = []

        policy.add_expiry_listener(self._on_session_expired)

    # ---- derived state ----

    @property
    def identity(self) -> str | None:
        return self._identity

    @property
    def authenticated(self) -> bool:
        return self._identity is not None and self._store.has_token()

    @property
    def initializing(self) -> bool:
        return self._initializing

    @property
    def session(self) -> Session:
        return Session(
            identity=self._identity,
            authenticated=self.authenticated,
            initializing=self._initializing,
        )

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a callback for session transitions. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- lifecycle ----

    async def start(self) -> Session:
        """
        Startup: prime the CSRF cookie (failures are not fatal), then check
        whether this process already holds a token. A token is never recovered
        from storage here; after a restart the first 401 triggers a refresh.
        """
        self._initializing = True
        try:
            await self._csrf.prime()
        except SessionError as e:
            logger.warning("Failed to initialize CSRF token: %s", e)

        if self._store.has_token() and self._identity is None:
            self._identity = PLACEHOLDER_IDENTITY

        self._initializing = False
        logger.info("Session initialized (authenticated=%s)", self.authenticated)
        self._emit()
        return self.session

    async def login(self, identity: str, secret: str) -> Session:
        data = await login_user(self._api, identity, secret, path=self._login_path)
        self._store.set(str(data["access_token"]))
        self._identity = identity
        logger.info("Logged in as %s", identity)
        self._emit()
        return self.session

    async def register(self, identity: str, secret: str) -> Session:
        await register_user(self._api, identity, secret, path=self._register_path)
        logger.info("Registered %s", identity)
        return await self.login(identity, secret)

    def logout(self) -> None:
        # Local only: the refresh cookie stays valid server-side until it expires.
        self._store.clear()
        self._identity = None
        logger.info("Logged out")
        self._emit()

    # ---- internals ----

    def _on_session_expired(self) -> None:
        self._identity = None
        self._emit()

        if self._navigate is None:
            return
        if self._location is not None and self._location() == self._entry_path:
            return
        self._navigate(self._entry_path)

    def _emit(self) -> None:
        snapshot = self.session
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")
