"""ASGI handler — runs one exchange through the dispatch pipeline.

Precedence for a request:

1. middleware (static files, when enabled) may answer it;
2. otherwise the first route whose method and pattern match;
3. otherwise the router's miss becomes a bare 404 (or 405 with
   ``Allow``) on the Context.

After that, a response that has not started and is not a 200 is offered
to the default status handler registered for its code. The exchange is
then completed.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from wiz._internal.asgi import Receive, Scope, Send
from wiz._internal.invoke import invoke
from wiz._internal.types import StatusHandler
from wiz.context import Context
from wiz.errors import HTTPError
from wiz.middleware.protocol import Next
from wiz.routing.router import Router

logger = logging.getLogger("wiz.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    status_handlers: Mapping[int, StatusHandler],
    server_header: str | None = None,
) -> None:
    """Process a single HTTP exchange through the full pipeline."""
    if scope["type"] != "http":
        return

    ctx = Context.from_asgi(scope, receive, send, server_header=server_header)

    async def dispatch(c: Context) -> None:
        match = router.match(c.method, c.path)
        c.request = c.request.with_path_params(match.path_params)
        await invoke(match.route.handler, c)

    # Wrap middleware around the dispatch
    handler: Next = dispatch
    for mw in reversed(middleware):
        outer = handler

        async def make_next(c: Context, _mw: Any = mw, _next: Next = outer) -> None:
            await _mw(c, _next)

        handler = make_next

    try:
        await handler(ctx)
    except HTTPError as exc:
        logger.debug("%d %s %s: %s", exc.status, ctx.method, ctx.path, exc.detail)
        if not ctx.started:
            ctx.set_status(exc.status)
            for name, value in exc.headers:
                ctx.set_header(name, value)
    except Exception:
        logger.exception("500 %s %s", ctx.method, ctx.path)
        if ctx.started:
            raise
        ctx.reset().set_status(500)

    await run_status_handler(ctx, status_handlers)
    await ctx.flush()


async def run_status_handler(ctx: Context, status_handlers: Mapping[int, StatusHandler]) -> None:
    """Give a non-200, not-yet-started response to its status handler."""
    if ctx.started or ctx.status == 200:
        return
    handler = status_handlers.get(ctx.status)
    if handler is None:
        return
    logger.debug("status handler %d for %s %s", ctx.status, ctx.method, ctx.path)
    await invoke(handler, ctx)
