# tests/fakes.py

from __future__ import annotations

import asyncio
import itertools
import json
from collections import defaultdict, deque
from dataclasses import dataclass, field
from urllib.parse import parse_qs

import httpx

CSRF_COOKIE = "XSRF-TOKEN"
CSRF_HEADER = "X-XSRF-TOKEN"
REFRESH_COOKIE = "refresh_token"

STATE_CHANGING = {"POST", "PUT", "PATCH", "DELETE"}


def _cookies(request: httpx.Request) -> dict[str, str]:
    out: dict[str, str] = {}
    raw = request.headers.get("cookie", "")
    for part in raw.split(";"):
        if "=" in part:
            k, v = part.strip().split("=", 1)
            out[k] = v
    return out


@dataclass
class FakeBackend:
    """
    Scripted planner backend for httpx.MockTransport.

    - /health sets the CSRF cookie to `csrf_value`
    - state-changing calls must echo that value in X-XSRF-TOKEN (when csrf_enforced)
    - /auth/login issues t1, t2, ... and sets the httpOnly refresh cookie
    - /auth/refresh issues the next token while refresh_ok is True
    - /tasks and /settings require a currently valid bearer token
    - `force(method, path, status, detail)` queues canned answers that win over everything;
      `respond(method, path, response)` does the same with a ready-made httpx.Response
    - paths in `redirect_loops` answer 302 to themselves

    Every request is recorded in `requests` for assertions.
    """

    csrf_value: str = "csrf-1"
    csrf_enforced: bool = True
    refresh_ok: bool = True
    refresh_delay: float = 0.0
    health_down: bool = False
    refresh_down: bool = False
    redirect_loops: set[str] = field(default_factory=set)

    users: dict[str, str] = field(default_factory=dict)
    valid_tokens: set[str] = field(default_factory=set)
    tasks: dict[str, dict] = field(default_factory=dict)
    user_settings: dict = field(default_factory=lambda: {"theme": "light", "language": "it"})

    requests: list[httpx.Request] = field(default_factory=list)
    forced: dict[tuple[str, str], deque] = field(default_factory=lambda: defaultdict(deque))

    def __post_init__(self) -> None:
        self._token_seq = itertools.count(1)
        self._task_seq = itertools.count(1)

    # ---- scripting helpers ----

    def force(self, method: str, path: str, status: int, detail: str | None = None) -> None:
        self.forced[(method.upper(), path)].append((status, detail))

    def respond(self, method: str, path: str, response: httpx.Response) -> None:
        """Queue an arbitrary answer: plain-text bodies, odd headers, broken encodings."""
        self.forced[(method.upper(), path)].append(response)

    def expire_tokens(self) -> None:
        self.valid_tokens.clear()

    def rotate_csrf(self, value: str) -> None:
        """Server-side rotation: old header values stop matching until re-primed."""
        self.csrf_value = value

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # ---- request handling ----

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        queue = self.forced.get((method, path))
        if queue:
            answer = queue.popleft()
            if isinstance(answer, httpx.Response):
                return answer
            status, detail = answer
            return httpx.Response(status, json={"detail": detail} if detail else None)

        if path in self.redirect_loops:
            return httpx.Response(302, headers={"location": path})

        if path == "/health":
            if self.health_down:
                raise httpx.ConnectError("health endpoint unreachable", request=request)
            return httpx.Response(
                200,
                json={"status": "ok"},
                headers={"set-cookie": f"{CSRF_COOKIE}={self.csrf_value}; Path=/"},
            )

        if path == "/auth/refresh":
            if self.refresh_delay:
                await asyncio.sleep(self.refresh_delay)
            if self.refresh_down:
                raise httpx.ConnectError("refresh endpoint unreachable", request=request)
            if not self.refresh_ok or REFRESH_COOKIE not in _cookies(request):
                return httpx.Response(401, json={"detail": "Invalid refresh token"})
            return httpx.Response(200, json={"access_token": self._issue_token()})

        if method in STATE_CHANGING and self.csrf_enforced:
            if request.headers.get(CSRF_HEADER) != self.csrf_value:
                return httpx.Response(403, json={"detail": "CSRF token missing or invalid"})

        if path == "/auth/register":
            body = json.loads(request.content)
            name = body["name_user"]
            if name in self.users:
                return httpx.Response(400, json={"detail": "Username already registered"})
            self.users[name] = body["password"]
            return httpx.Response(201, json={"id": len(self.users), "name_user": name})

        if path == "/auth/login":
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            if self.users.get(form.get("username")) != form.get("password"):
                return httpx.Response(401, json={"detail": "Incorrect username or password"})
            token = self._issue_token()
            return httpx.Response(
                200,
                json={"access_token": token, "token_type": "bearer"},
                headers={"set-cookie": f"{REFRESH_COOKIE}=r-{token}; Path=/; HttpOnly"},
            )

        if not self._authorized(request):
            return httpx.Response(401, json={"detail": "Not authenticated"})

        if path == "/tasks" and method == "GET":
            return httpx.Response(200, json=list(self.tasks.values()))
        if path == "/tasks" and method == "POST":
            task = dict(json.loads(request.content))
            task["id"] = f"task-{next(self._task_seq)}"
            self.tasks[task["id"]] = task
            return httpx.Response(201, json=task)
        if path.startswith("/tasks/"):
            task_id = path.rsplit("/", 1)[-1]
            if task_id not in self.tasks:
                return httpx.Response(404, json={"detail": "Task not found"})
            if method == "PUT":
                task = dict(json.loads(request.content))
                task["id"] = task_id
                self.tasks[task_id] = task
                return httpx.Response(200, json=task)
            if method == "DELETE":
                del self.tasks[task_id]
                return httpx.Response(204)
        if path == "/settings" and method == "GET":
            return httpx.Response(200, json=self.user_settings)
        if path == "/settings" and method == "PUT":
            self.user_settings.update(json.loads(request.content))
            return httpx.Response(200, json=self.user_settings)

        return httpx.Response(404, json={"detail": "Not found"})

    def _issue_token(self) -> str:
        token = f"t{next(self._token_seq)}"
        self.valid_tokens.add(token)
        return token

    def _authorized(self, request: httpx.Request) -> bool:
        auth = request.headers.get("authorization", "")
        if not auth.startswith("Bearer "):
            return False
        return auth[len("Bearer "):] in self.valid_tokens


@dataclass
class FakeNavigator:
    """Records navigations requested by the session layer."""

    location: str = "/dashboard"
    visited: list[str] = field(default_factory=list)

    def navigate(self, path: str) -> None:
        self.visited.append(path)
        self.location = path

    def current(self) -> str:
        return self.location
