"""Gzip response compression as an ASGI layer.

Wraps the whole app when ``ServerConfig.compression`` is on. The
response is buffered until the app ends it, then compressed in one go
when the client accepts gzip and the body is worth it. The codec is
stdlib ``gzip``.
"""

import gzip
import logging
from collections.abc import MutableMapping
from typing import Any

from wiz._internal.asgi import ASGIApp, Receive, Scope, Send
from wiz.http.headers import Headers

logger = logging.getLogger("wiz.compression")

COMPRESSIBLE_TYPES: frozenset[str] = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/xhtml+xml",
        "application/xml",
        "image/svg+xml",
    }
)


def accepts_gzip(accept_encoding: str | None) -> bool:
    """Whether an ``Accept-Encoding`` value allows gzip."""
    if not accept_encoding:
        return False
    for token in accept_encoding.split(","):
        coding, _, params = token.strip().partition(";")
        if coding.strip().lower() not in ("gzip", "*"):
            continue
        params = params.replace(" ", "")
        return params not in ("q=0", "q=0.0", "q=0.00", "q=0.000")
    return False


def is_compressible(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.startswith("text/") or media_type in COMPRESSIBLE_TYPES


class GZipMiddleware:
    """ASGI middleware that gzips buffered responses.

    Usage::

        app = GZipMiddleware(App(config), minimum_size=256)
    """

    __slots__ = ("app", "compresslevel", "minimum_size")

    def __init__(self, app: ASGIApp, *, minimum_size: int = 256, compresslevel: int = 6) -> None:
        self.app = app
        self.minimum_size = minimum_size
        self.compresslevel = compresslevel

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        headers = Headers(tuple(scope.get("headers", ())))
        if not accepts_gzip(headers.get("accept-encoding")):
            await self.app(scope, receive, send)
            return
        responder = _GZipResponder(send, self.minimum_size, self.compresslevel)
        await self.app(scope, receive, responder)


class _GZipResponder:
    """Stands in for ``send`` for one exchange."""

    __slots__ = ("_body", "_compresslevel", "_minimum_size", "_send", "_start")

    def __init__(self, send: Send, minimum_size: int, compresslevel: int) -> None:
        self._send = send
        self._minimum_size = minimum_size
        self._compresslevel = compresslevel
        self._start: MutableMapping[str, Any] | None = None
        self._body: list[bytes] = []

    async def __call__(self, message: MutableMapping[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self._start = message
            return
        if message["type"] != "http.response.body":
            await self._send(message)
            return

        self._body.append(message.get("body", b""))
        if message.get("more_body", False):
            return
        await self._finish()

    async def _finish(self) -> None:
        assert self._start is not None
        start = self._start
        body = b"".join(self._body)
        headers = Headers(tuple(start.get("headers", ())))

        if (
            len(body) >= self._minimum_size
            and is_compressible(headers.get("content-type"))
            and "content-encoding" not in headers
        ):
            compressed = gzip.compress(body, compresslevel=self._compresslevel)
            logger.debug("gzip %d -> %d bytes", len(body), len(compressed))
            raw = [(k, v) for k, v in headers.raw if k.lower() != b"content-length"]
            raw.extend(
                [
                    (b"content-encoding", b"gzip"),
                    (b"vary", b"Accept-Encoding"),
                    (b"content-length", str(len(compressed)).encode("latin-1")),
                ]
            )
            start = {**start, "headers": raw}
            body = compressed

        await self._send(start)
        await self._send({"type": "http.response.body", "body": body, "more_body": False})
