# src/planner_client/api/client.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..session.attempt import RequestAttempt
from ..session.pipeline import RequestPipeline

logger = logging.getLogger(__name__)


class ApiClient:
    """JSON convenience layer over RequestPipeline, used by every API module."""

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._pipeline = pipeline

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        form: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        recover_auth: bool = True,
    ) -> httpx.Response:
        attempt = RequestAttempt.create(
            method,
            path,
            json=json,
            form=form,
            params=params,
            recover_auth=recover_auth,
        )
        return await self._pipeline.send(attempt)

    async def request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self.request(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # the call already succeeded; hand back the raw body
            logger.debug("%s %s answered a non-JSON body", method, path)
            return response.text

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request_json("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request_json("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request_json("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request_json("DELETE", path, **kwargs)
