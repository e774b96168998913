# src/planner_client/api/task_models.py

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(slots=True)
class Task:
    """
    Task as returned by the backend.

    Notes:
    - date_time / end_time stay ISO strings; the client does not interpret them.
    - end_time and duration_minutes are alternatives; either may be None.
    """

    id: str
    title: str
    description: str = ""
    color: str = ""
    date_time: str | None = None
    end_time: str | None = None
    duration_minutes: int | None = None
    completed: bool = False

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Task:
        duration = raw.get("duration_minutes")
        try:
            duration = int(duration) if duration is not None else None
        except (TypeError, ValueError):
            duration = None
        return cls(
            id=str(raw.get("id", "")),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            color=str(raw.get("color") or ""),
            date_time=raw.get("date_time"),
            end_time=raw.get("end_time"),
            duration_minutes=duration,
            completed=bool(raw.get("completed", False)),
        )

    def payload(self) -> dict[str, Any]:
        """Body for create/update (everything except id)."""
        data = asdict(self)
        data.pop("id", None)
        return data


TASK_FIELDS = frozenset(f.name for f in fields(Task)) - {"id"}
