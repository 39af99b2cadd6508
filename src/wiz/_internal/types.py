"""Handler contracts shared across wiz modules.

A route handler receives the live Context and writes exactly one
response through it. A status handler receives the Context of a
response that has not started and fills it in. Both may be sync or
async; nothing else about their shape is checked.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from wiz.context import Context


class Handler(Protocol):
    """A route handler::

        async def spell(ctx: Context) -> None:
            await ctx.send_text("abracadabra")
    """

    def __call__(self, ctx: Context, /) -> Awaitable[Any] | None: ...


class StatusHandler(Protocol):
    """A default status handler, looked up by response status code::

        async def not_found(ctx: Context) -> Context:
            return await ctx.send_text("nothing here")
    """

    def __call__(self, ctx: Context, /) -> Awaitable[Any] | Context | None: ...
