"""Host engine hand-off.

Starts a pounce ASGI server with the compiled wiz app. Listening, TLS,
HTTP parsing, and worker scheduling all belong to pounce; wiz only
supplies the bind address and the ASGI callable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wiz._internal.asgi import ASGIApp


def serve(
    app: ASGIApp,
    host: str,
    port: int,
    *,
    workers: int = 1,
    log_level: str = "info",
) -> None:
    """Run *app* under pounce until the process is stopped.

    Pounce's ``run()`` takes an import string, but wiz has a live ASGI
    callable, so ``pounce.Server`` is used directly.

    Args:
        app: ASGI callable (usually from ``create_app``).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count handed to pounce.
        log_level: pounce log level.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
