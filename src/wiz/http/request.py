"""The request half of an exchange.

Everything the engine reports up front (request line, headers, peer
addresses) is frozen into a ``Request`` before the handler runs. The
body is not: it is pulled from ASGI ``receive`` on first use and kept.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from wiz._internal.asgi import Receive
from wiz.http.cookies import parse_cookies
from wiz.http.headers import Headers
from wiz.http.query import QueryParams

Address = tuple[str, int]


@dataclass(frozen=True, slots=True)
class Request:
    """Frozen request metadata plus lazy, cached body access.

    ``path_params`` is empty until the router binds a match with
    ``with_path_params``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    cookies: Mapping[str, str]
    scheme: str = "http"
    http_version: str = "1.1"
    server: Address | None = None
    client: Address | None = None
    path_params: dict[str, str] = field(default_factory=dict)

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Holds the body once read; shared by copies from with_path_params
    _cache: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive) -> Request:
        headers = Headers(tuple(scope.get("headers", ())))
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=scope.get("path", ""),
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            cookies=parse_cookies(headers.get("cookie", "")),
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        return replace(self, path_params=path_params, _cache=self._cache)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield body chunks as the engine delivers them.

        Reads ``receive`` directly, so it only works before ``body()``.
        """
        if self._receive is None:
            return
        more = True
        while more:
            message = await self._receive()
            more = message.get("more_body", False)
            chunk = message.get("body", b"")
            if chunk:
                yield chunk

    async def body(self) -> bytes:
        """The whole body. Suspends until the last chunk has arrived."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json.loads(await self.body())
