"""Wiz application class.

An ``App`` is a ``ServerConfig`` materialized into an ASGI callable.
Everything is compiled in ``__init__`` (route trie, middleware tuple,
status handler mapping) and never changes afterwards, so one instance
is shared by reference across every concurrent exchange.
"""

import logging

from wiz._internal.asgi import ASGIApp, Receive, Scope, Send
from wiz.config import ServerConfig
from wiz.middleware.compression import GZipMiddleware
from wiz.middleware.protocol import Middleware
from wiz.middleware.static import StaticFiles
from wiz.routing.route import Route, get
from wiz.routing.router import Router
from wiz.server.handler import handle_request
from wiz.server.welcome import welcome

logger = logging.getLogger("wiz.app")

SERVER_HEADER = "wiz"


def compile_router(routes: tuple[Route, ...]) -> Router:
    """Register *routes* in table order. An empty table gets the welcome page."""
    router = Router()
    for route in routes or (get("/", welcome),):
        router.add(route)
    router.compile()
    return router


def compile_middleware(config: ServerConfig) -> tuple[Middleware, ...]:
    static = config.static_files
    if not static.enabled:
        return ()
    return (
        StaticFiles(
            static.root,
            static.request_path_prefix,
            serve_index=static.serve_index,
        ),
    )


class App:
    """The wiz ASGI application.

    Usage::

        app = App(gen_server().set_routes([get("/", index)]))

    Compression is not part of ``App`` itself; ``create_app`` wraps it
    when the configuration asks for it.
    """

    __slots__ = ("_middleware", "_router", "_server_header", "config")

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self._router: Router = compile_router(self.config.routes)
        self._middleware: tuple[Middleware, ...] = compile_middleware(self.config)
        self._server_header: str | None = (
            SERVER_HEADER if self.config.send_server_header else None
        )

    @property
    def router(self) -> Router:
        return self._router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            status_handlers=self.config.default_status_handlers,
            server_header=self._server_header,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                logger.debug(
                    "%s ready: %d routes, static=%s",
                    self.config.name,
                    len(self._router.routes),
                    self.config.static_files.enabled,
                )
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def create_app(config: ServerConfig) -> ASGIApp:
    """The full ASGI stack for *config*: ``App`` plus optional gzip."""
    app: ASGIApp = App(config)
    if config.compression:
        app = GZipMiddleware(app)
    return app
