"""Request/response context for one exchange.

A ``Context`` pairs a frozen ``Request`` with the live ASGI ``send``
callable. Reads never raise for missing data: they return ``None``, and
a value that is blank after trimming counts as missing. Writes mutate
the exchange and return the Context so they chain::

    async def login(ctx: Context) -> None:
        ctx.set_status(201).set_header("X-Spell", "lumos")
        await ctx.send_json({"ok": True})

Nothing here is shared between exchanges.
"""

from __future__ import annotations

import json as json_module
from typing import Any
from urllib.parse import quote

from wiz._internal.asgi import Receive, Scope, Send
from wiz.errors import ResponseAlreadyCompleted, ResponseAlreadyStarted
from wiz.http.cookies import CookieOptions, expired_cookie
from wiz.http.headers import MutableHeaders
from wiz.http.request import Request
from wiz.server.sender import body_allowed, send_body, send_start

TEXT = "text/plain; charset=UTF-8"
HTML = "text/html; charset=UTF-8"
JSON = "application/json; charset=UTF-8"


def _present(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _split_host(host: str) -> tuple[str, int | None]:
    """Split ``host[:port]``, keeping IPv6 brackets intact."""
    if host.startswith("["):
        end = host.find("]")
        if end != -1:
            name, rest = host[: end + 1], host[end + 1 :]
            if rest.startswith(":") and rest[1:].isdigit():
                return name, int(rest[1:])
            return name, None
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name, int(port)
    return host, None


class Context:
    """One in-flight request/response exchange.

    Response state (status, headers, started, completed) lives here
    until the head is sent. After ``flush()`` every write raises
    ``ResponseAlreadyCompleted``.
    """

    __slots__ = (
        "_completed",
        "_headers",
        "_send",
        "_server_header",
        "_started",
        "_status",
        "request",
    )

    def __init__(self, request: Request, send: Send, *, server_header: str | None = None) -> None:
        self.request = request
        self._send = send
        self._server_header = server_header
        self._status = 200
        self._headers = MutableHeaders()
        self._started = False
        self._completed = False

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        send: Send,
        *,
        server_header: str | None = None,
    ) -> Context:
        return cls(Request.from_asgi(scope, receive), send, server_header=server_header)

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path} -> {self._status}>"

    # -- Request line --

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def scheme(self) -> str:
        return self.request.scheme

    @property
    def host(self) -> str:
        """``Host`` header value, falling back to the engine's bind address."""
        header = _present(self.request.headers.get("host"))
        if header is not None:
            return header.strip()
        if self.request.server is None:
            return ""
        name, port = self.request.server
        return f"{name}:{port}"

    @property
    def hostname(self) -> str:
        return _split_host(self.host)[0]

    @property
    def port(self) -> int | None:
        """Explicit port of the host, or ``None`` when none was given."""
        return _split_host(self.host)[1]

    @property
    def path(self) -> str:
        return self.request.path or "/"

    @property
    def query_string(self) -> str:
        """Raw query string with its leading ``?``, or ``""``."""
        raw = self.request.query.raw
        return f"?{raw}" if raw else ""

    @property
    def url(self) -> str:
        return self.path + self.query_string

    @property
    def encoded_url(self) -> str:
        """``url`` with every reserved character percent-encoded."""
        return quote(self.url, safe="")

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.host}"

    @property
    def href(self) -> str:
        return self.origin + self.url

    @property
    def remote_ip(self) -> str | None:
        client = self.request.client
        return client[0] if client else None

    # -- Lookups --

    @property
    def content_type(self) -> str | None:
        """Request ``Content-Type``."""
        return _present(self.request.content_type)

    def header(self, key: str) -> str | None:
        return _present(self.request.headers.get(key))

    def cookie(self, key: str) -> str | None:
        return _present(self.request.cookies.get(key))

    def has_query_param(self, key: str) -> bool:
        return key in self.request.query

    def query_param(self, key: str) -> str | None:
        """First non-blank value of *key*."""
        for value in self.request.query.get_list(key):
            if value.strip():
                return value
        return None

    def query_params(self, key: str) -> list[str] | None:
        """Every value of *key*, or ``None`` if all of them are blank."""
        values = self.request.query.get_list(key)
        if not any(v.strip() for v in values):
            return None
        return values

    def route_param(self, key: str) -> str | None:
        value = self.request.path_params.get(key)
        if value is None:
            return None
        return _present(str(value))

    # -- Body --

    async def body(self) -> bytes:
        """Read the full body. Suspends until the engine signals its end."""
        return await self.request.body()

    async def text(self) -> str:
        return await self.request.text()

    async def json(self) -> Any:
        return await self.request.json()

    # -- Response state --

    @property
    def status(self) -> int:
        return self._status

    @property
    def started(self) -> bool:
        """True once the response head has been handed to the engine."""
        return self._started

    @property
    def completed(self) -> bool:
        return self._completed

    def response_header(self, key: str) -> str | None:
        """A header already written to this response."""
        return self._headers.get(key)

    # -- Writes: head --

    def _check_head_writable(self) -> None:
        if self._completed:
            raise ResponseAlreadyCompleted(f"{self.method} {self.path} is already complete")
        if self._started:
            raise ResponseAlreadyStarted(f"{self.method} {self.path} has already started")

    def reset(self) -> Context:
        """Drop the status and headers written so far."""
        self._check_head_writable()
        self._status = 200
        self._headers = MutableHeaders()
        return self

    def set_status(self, code: int) -> Context:
        self._check_head_writable()
        self._status = code
        return self

    def set_content_type(self, content_type: str) -> Context:
        return self.set_header("Content-Type", content_type)

    def set_header(self, key: str, value: str) -> Context:
        self._check_head_writable()
        self._headers.set(key, value)
        return self

    def append_header(self, key: str, value: str) -> Context:
        self._check_head_writable()
        self._headers.append(key, value)
        return self

    def remove_header(self, key: str) -> Context:
        self._check_head_writable()
        self._headers.remove(key)
        return self

    def cookie_options(self) -> CookieOptions:
        """Cookie defaults for this request (see ``CookieOptions``)."""
        return CookieOptions.from_context(self)

    def set_cookie(self, key: str, value: str, options: CookieOptions | None = None) -> Context:
        opts = options if options is not None else self.cookie_options()
        return self.append_header("Set-Cookie", opts.to_set_cookie(key, value).to_header_value())

    def remove_cookie(self, key: str) -> Context:
        return self.append_header("Set-Cookie", expired_cookie(key).to_header_value())

    def redirect(self, path: str) -> Context:
        """302 to *path*. No body is written."""
        return self.set_status(302).set_header("Location", path)

    # -- Writes: body --

    async def _start(self) -> None:
        headers = self._headers.encode()
        if self._server_header is not None and "server" not in self._headers:
            headers.append((b"server", self._server_header.encode("latin-1")))
        self._started = True
        await send_start(self._send, self._status, headers)

    async def send(self, body: str | bytes) -> Context:
        """Write *body* (UTF-8 for ``str``), setting ``Content-Length``.

        The body goes out in one piece: the head is sent with it, so a
        second ``send`` raises ``ResponseAlreadyStarted``.
        """
        self._check_head_writable()
        data = body.encode("utf-8") if isinstance(body, str) else body
        if body_allowed(self._status):
            self._headers.set("Content-Length", str(len(data)))
        await self._start()
        if self.method == "HEAD" or not body_allowed(self._status):
            data = b""
        await send_body(self._send, data, more_body=True)
        return self

    async def send_text(self, body: str) -> Context:
        return await self.set_content_type(TEXT).send(body)

    async def send_html(self, body: str) -> Context:
        return await self.set_content_type(HTML).send(body)

    async def send_json(self, body: Any) -> Context:
        """Send *body*; non-string values are serialized with ``json.dumps``."""
        if not isinstance(body, str | bytes):
            body = json_module.dumps(body)
        return await self.set_content_type(JSON).send(body)

    async def flush(self) -> Context:
        """Complete the exchange. Safe to call more than once."""
        if self._completed:
            return self
        if not self._started:
            if body_allowed(self._status) and "content-length" not in self._headers:
                self._headers.set("Content-Length", "0")
            await self._start()
        self._completed = True
        await send_body(self._send, b"", more_body=False)
        return self
