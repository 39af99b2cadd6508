"""Invoke helpers — call sync or async handlers uniformly.

Route handlers and status handlers can be ``def`` or ``async def``.
The sync/async check lives here and nowhere else.

Usage::

    from wiz._internal.invoke import invoke

    result = await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def hello(ctx):
            ctx.redirect("/login")

        async def hello(ctx):
            await ctx.send_text("hi")
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
