"""Shared pytest fixtures and configuration for pytest."""

import json
from collections.abc import Callable

import httpx
import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: test needs a live CIC server (see tests/integration)"
    )


class FakeIcwsServer:
    """In-memory ICWS server for httpx.MockTransport.

    Issues a fresh session id, token and cookie on every successful connect,
    records every request, and lets tests override responses per route.
    """

    def __init__(self, user: str = "agent", password: str = "1234") -> None:
        self.user = user
        self.password = password
        self.requests: list[httpx.Request] = []
        self.sessions: dict[str, str] = {}
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self._counter = 0

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def route(
        self, verb: str, path: str, response: httpx.Response | Callable[[httpx.Request], httpx.Response]
    ) -> None:
        if isinstance(response, httpx.Response):
            fixed = response
            self.routes[(verb, path)] = lambda request: fixed
        else:
            self.routes[(verb, path)] = response

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.routes:
            return self.routes[key](request)
        if key == ("POST", "/icws/connection"):
            return self._connect(request)
        if request.method == "DELETE" and request.url.path.endswith("/connection"):
            session_id = request.url.path.split("/")[2]
            if self.sessions.pop(session_id, None) is None:
                return httpx.Response(401, json={"errorId": "error.session.notFound", "errorCode": 2})
            return httpx.Response(204)
        return httpx.Response(200, json={"path": request.url.path})

    def _connect(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body.get("userID") != self.user or body.get("password") != self.password:
            return httpx.Response(
                400,
                json={
                    "errorId": "error.request.connection.authenticationFailure",
                    "message": "The authentication process failed.",
                },
            )
        self._counter += 1
        session_id = f"17310{self._counter:02d}"
        self.sessions[session_id] = f"token-{self._counter}"
        return httpx.Response(
            201,
            json={
                "csrfToken": f"token-{self._counter}",
                "sessionId": session_id,
                "alternateHostList": ["cic-icws"],
                "userID": body["userID"],
                "userDisplayName": body["userID"],
                "icServer": "CIC-ICWS",
            },
            headers={"Set-Cookie": f"icws_{session_id}=cookie-{self._counter}; Path=/icws/{session_id}"},
        )


@pytest.fixture
def fake_server() -> FakeIcwsServer:
    return FakeIcwsServer()
