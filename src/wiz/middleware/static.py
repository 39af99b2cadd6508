"""Static file serving middleware.

Serves files from a directory for paths beneath a request prefix, with
index file resolution for directories. Paths that do not resolve to a
file fall through to the next handler. Trailing slash redirects are
never issued: ``/docs`` and ``/docs/`` both serve ``docs/index.html``.
"""

import logging
import mimetypes
from pathlib import Path

from wiz.context import Context
from wiz.middleware.protocol import Next

logger = logging.getLogger("wiz.static")

INDEX_FILE = "index.html"


class StaticFiles:
    """Middleware that serves static files from a directory.

    Security: resolves symlinks and verifies the final path is within
    the configured directory; anything outside falls through.

    Usage::

        StaticFiles(directory="./public", prefix="/assets", serve_index=True)
    """

    __slots__ = ("_directory", "_prefix", "_serve_index")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "",
        *,
        serve_index: bool = True,
    ) -> None:
        self._directory = Path(directory).resolve()
        self._serve_index = serve_index

        # Normalize prefix: ensure leading slash, strip trailing.
        # Root prefix ("" or "/") normalizes to "".
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    async def __call__(self, ctx: Context, next: Next) -> None:
        """Serve a static file or fall through."""
        file_path = self.resolve(ctx.method, ctx.path)
        if file_path is None:
            await next(ctx)
            return
        await self._serve_file(ctx, file_path)

    def resolve(self, method: str, path: str) -> Path | None:
        """The file that answers *path*, or ``None`` to fall through."""
        # Only serve GET and HEAD
        if method not in ("GET", "HEAD"):
            return None

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return None
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        try:
            return self._lookup(relative)
        except (OSError, ValueError):
            # NUL bytes and over-long names never name a file
            return None

    def _lookup(self, relative: str) -> Path | None:
        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return None

        if file_path.is_dir():
            if not self._serve_index:
                return None
            file_path = file_path / INDEX_FILE

        if not file_path.is_file():
            return None
        return file_path

    async def _serve_file(self, ctx: Context, file_path: Path) -> None:
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        body = file_path.read_bytes()
        logger.debug("static %s -> %s (%d bytes)", ctx.path, file_path, len(body))
        await ctx.set_content_type(content_type).send(body)
