# src/planner_client/api/settings.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .client import ApiClient

SETTINGS_PATH = "/settings"


async def get_user_settings(api: ApiClient) -> dict[str, Any]:
    data = await api.get(SETTINGS_PATH)
    return data if isinstance(data, dict) else {}


async def update_user_settings(api: ApiClient, payload: Mapping[str, Any]) -> dict[str, Any]:
    data = await api.put(SETTINGS_PATH, json=dict(payload))
    return data if isinstance(data, dict) else {}
