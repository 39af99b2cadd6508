"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> None: ...

It either writes the response through the Context itself or awaits
``next(ctx)`` to fall through to the rest of the pipeline. No base
class required.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from wiz.context import Context

# The next step in the pipeline
Next: TypeAlias = Callable[[Context], Awaitable[None]]


class Middleware(Protocol):
    """Protocol for wiz middleware.

    Accepts both functions and callable objects::

        async def stamp(ctx: Context, next: Next) -> None:
            ctx.set_header("X-Spell", "lumos")
            await next(ctx)
    """

    async def __call__(self, ctx: Context, next: Next) -> None: ...
