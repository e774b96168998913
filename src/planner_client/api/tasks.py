# src/planner_client/api/tasks.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .client import ApiClient
from .task_models import TASK_FIELDS, Task

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


async def get_tasks(api: ApiClient) -> list[Task]:
    """All tasks of the authenticated user (server-side row filtering)."""
    data = await api.get(TASKS_PATH)
    if not isinstance(data, list):
        return []
    return [Task.from_api(item) for item in data if isinstance(item, dict)]


async def create_task(api: ApiClient, task_data: Mapping[str, Any]) -> Task:
    data = await api.post(TASKS_PATH, json=dict(task_data))
    return Task.from_api(data)


async def update_task(api: ApiClient, task_id: str, task_data: Mapping[str, Any]) -> Task:
    data = await api.put(f"{TASKS_PATH}/{task_id}", json=dict(task_data))
    return Task.from_api(data)


async def delete_task(api: ApiClient, task_id: str) -> None:
    await api.delete(f"{TASKS_PATH}/{task_id}")


async def update_task_partial(api: ApiClient, task: Task, changes: Mapping[str, Any]) -> Task:
    """
    PUT the full task with `changes` merged on top.
    The backend has no PATCH, so the current fields are resent.
    """
    unknown = set(changes) - TASK_FIELDS
    if unknown:
        raise ValueError(f"Unknown task fields: {sorted(unknown)}")
    payload = task.payload()
    payload.update(changes)
    return await update_task(api, task.id, payload)


async def toggle_task_complete(api: ApiClient, task: Task) -> Task:
    return await update_task_partial(api, task, {"completed": not task.completed})
