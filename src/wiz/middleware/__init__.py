"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> None

Built-in middleware:
    StaticFiles -- Serve static and index files from a directory
    GZipMiddleware -- ASGI-level gzip response compression
"""

from wiz.middleware.compression import GZipMiddleware
from wiz.middleware.protocol import Middleware, Next
from wiz.middleware.static import StaticFiles

__all__ = [
    "GZipMiddleware",
    "Middleware",
    "Next",
    "StaticFiles",
]
