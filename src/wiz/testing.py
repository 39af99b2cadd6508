"""In-process test client for wiz servers.

Runs requests through the same ASGI stack ``run()`` hands to the
engine, without sockets::

    async with TestClient(gen_server().set_routes([get("/", index)])) as client:
        response = await client.get("/")
        assert response.text == "A"
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from wiz._internal.asgi import ASGIApp, Scope
from wiz.app import create_app
from wiz.config import ServerConfig

TEST_HOST = "testserver"
TEST_CLIENT = ("127.0.0.1", 50000)


def build_scope(
    method: str,
    target: str,
    headers: dict[str, str] | None = None,
    client: tuple[str, int] = TEST_CLIENT,
) -> Scope:
    """An HTTP scope for *method* on *target* (path plus optional query)."""
    path, _, query = target.partition("?")
    fields = {"host": TEST_HOST}
    fields.update({name.lower(): value for name, value in (headers or {}).items()})
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "scheme": "http",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in fields.items()],
        "server": (TEST_HOST, 80),
        "client": client,
    }


@dataclass(frozen=True, slots=True)
class TestResponse:
    """What the app sent back. Header names are lowercased."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: tuple[tuple[str, str], ...]
    body: bytes
    completed: bool = True

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    def header(self, name: str) -> str | None:
        """First value of *name*, or ``None``."""
        values = self.header_list(name)
        return values[0] if values else None

    def header_list(self, name: str) -> list[str]:
        wanted = name.lower()
        return [value for key, value in self.headers if key == wanted]


@dataclass(slots=True)
class _Recorder:
    """Plays both ASGI channels for one request."""

    pending: list[bytes]
    status: int = 200
    headers: list[tuple[bytes, bytes]] = field(default_factory=list)
    chunks: list[bytes] = field(default_factory=list)
    completed: bool = False

    async def receive(self) -> dict[str, Any]:
        if not self.pending:
            return {"type": "http.disconnect"}
        chunk = self.pending.pop(0)
        return {"type": "http.request", "body": chunk, "more_body": bool(self.pending)}

    async def send(self, message: dict[str, Any]) -> None:
        kind = message["type"]
        if kind == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif kind == "http.response.body":
            self.chunks.append(message.get("body", b""))
            self.completed = not message.get("more_body", False)

    def response(self) -> TestResponse:
        return TestResponse(
            status=self.status,
            headers=tuple((k.decode("latin-1").lower(), v.decode("latin-1")) for k, v in self.headers),
            body=b"".join(self.chunks),
            completed=self.completed,
        )


class TestClient:
    """Drives a ``ServerConfig`` (compiled with ``create_app``) or any ASGI app."""

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app",)

    def __init__(self, target: ServerConfig | ASGIApp) -> None:
        self.app: ASGIApp = create_app(target) if isinstance(target, ServerConfig) else target

    async def __aenter__(self) -> TestClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def get(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("GET", path, **kwargs)

    async def head(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("HEAD", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> TestResponse:
        return await self.request("DELETE", path, **kwargs)

    async def post(self, path: str, *, json: Any = None, **kwargs: Any) -> TestResponse:
        """POST; *json* is serialized and labelled ``application/json``."""
        if json is not None:
            kwargs["body"] = json_module.dumps(json).encode("utf-8")
            kwargs["headers"] = {"content-type": "application/json", **(kwargs.get("headers") or {})}
        return await self.request("POST", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        chunks: tuple[bytes, ...] | None = None,
        client: tuple[str, int] = TEST_CLIENT,
    ) -> TestResponse:
        """Send one request. *chunks* splits the body across ``receive`` calls."""
        recorder = _Recorder(pending=list(chunks) if chunks is not None else [body])
        scope = build_scope(method, path, headers, client)
        await self.app(scope, recorder.receive, recorder.send)
        return recorder.response()
