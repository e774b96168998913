# src/planner_client/core/state.py

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..api.client import ApiClient
from ..config import Settings
from ..session.context import SessionContext
from ..session.credentials import CredentialStore
from ..session.csrf import CsrfAccessor
from ..session.pipeline import RequestPipeline
from ..session.recovery import FailureRecoveryPolicy
from ..session.refresh import RefreshCoordinator


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: Settings

    http: httpx.AsyncClient
    credentials: CredentialStore
    csrf: CsrfAccessor
    refresher: RefreshCoordinator
    recovery: FailureRecoveryPolicy
    pipeline: RequestPipeline
    api: ApiClient
    session: SessionContext
