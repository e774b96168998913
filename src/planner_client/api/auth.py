# src/planner_client/api/auth.py

from __future__ import annotations

from typing import Any

from .client import ApiClient


async def register_user(api: ApiClient, name_user: str, password: str, *, path: str = "/auth/register") -> Any:
    """Create an account. Returns the created-user payload."""
    return await api.post(
        path,
        json={"name_user": name_user, "password": password},
        recover_auth=False,
    )


async def login_user(api: ApiClient, username: str, password: str, *, path: str = "/auth/login") -> dict[str, Any]:
    """
    OAuth2 password form login (form-urlencoded, not JSON).

    Returns {"access_token": ..., "token_type": ...}. The server also sets the
    refresh cookie on this response.
    """
    data = await api.post(
        path,
        form={"username": username, "password": password},
        recover_auth=False,
    )
    if not isinstance(data, dict) or not data.get("access_token"):
        raise ValueError("login response has no access_token")
    return data
