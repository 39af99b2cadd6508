"""Wiz — declarative server configuration over an ASGI engine.

Describe a server as an immutable value, then run it::

    from wiz import gen_server, get, run

    async def index(ctx):
        await ctx.send_text("A")

    async def spell(ctx):
        await ctx.send_text("B")

    config = gen_server().set_routes([get("/", index), get("/spell", spell)]).set_port(8080)

    raise SystemExit(run(config))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "Context",
    "CookieOptions",
    "HTTPError",
    "Method",
    "MethodNotAllowed",
    "NotFound",
    "Route",
    "SameSite",
    "ServerConfig",
    "StaticFileConfig",
    "WizError",
    "create_app",
    "delete",
    "gen_server",
    "get",
    "head",
    "options",
    "post",
    "print_config",
    "put",
    "route",
    "run",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wiz`` fast while providing a clean top-level API.
    """
    if name in ("App", "create_app"):
        from wiz import app as _app

        return getattr(_app, name)

    if name in ("ServerConfig", "StaticFileConfig", "gen_server", "print_config"):
        from wiz import config as _config

        return getattr(_config, name)

    if name == "Context":
        from wiz.context import Context

        return Context

    if name in ("CookieOptions", "SameSite"):
        from wiz.http import cookies as _cookies

        return getattr(_cookies, name)

    if name in ("Method", "Route", "route", "get", "put", "post", "delete", "head", "options"):
        from wiz import routing as _routing

        return getattr(_routing, name)

    if name == "run":
        from wiz.server.bootstrap import run

        return run

    if name in ("WizError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from wiz import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
