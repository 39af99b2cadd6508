"""Process entry: turn a finished ``ServerConfig`` into a running server.

Usage::

    from wiz import gen_server, get, run

    raise SystemExit(run(gen_server().set_routes([get("/", index)]).set_port(8080)))
"""

from wiz.app import create_app
from wiz.config import ServerConfig
from wiz.server.log_setup import configure_logging

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})


def display_host(host: str) -> str:
    """``localhost`` for loopback binds, the configured host otherwise."""
    return "localhost" if host in LOCAL_HOSTS else host


def banner(config: ServerConfig) -> str:
    return f"🔮 {config.name} listening on http://{display_host(config.host)}:{config.port}"


def run(config: ServerConfig) -> int:
    """Print the banner and block serving *config*. Returns 0 on a normal stop."""
    from wiz.server.engine import serve

    configure_logging(config.log_level, config.log_handlers)
    app = create_app(config)

    print(banner(config))
    serve(
        app,
        config.host,
        config.port,
        workers=config.workers,
        log_level=config.log_level,
    )
    return 0
