"""Server configuration.

``ServerConfig`` is a frozen dataclass. Every ``set_*`` method returns a
new value with exactly one field changed, so configurations compose
left to right::

    config = (
        gen_server()
        .set_routes([get("/", index), get("/spell", spell)])
        .set_port(8080)
        .serve_static_files(True)
    )

Two methods are not plain field swaps: ``set_routes`` replaces the
whole route table, and ``set_default_status_handlers`` merges into the
existing mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from wiz._internal.types import StatusHandler
from wiz.routing.route import Route, get
from wiz.server.welcome import welcome


@dataclass(frozen=True, slots=True)
class StaticFileConfig:
    """Static file policy. ``enabled`` gates index serving too."""

    enabled: bool = False
    serve_index: bool = True
    root: str = "wwwroot"
    request_path_prefix: str = ""


def _no_status_handlers() -> Mapping[int, StatusHandler]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Everything needed to materialize a server. Immutable after creation.

    All fields have defaults. Start from ``gen_server()`` (or
    ``ServerConfig()``) and override what you need.
    """

    # Server
    name: str = "Wiz"
    host: str = "127.0.0.1"
    port: int = 9999
    workers: int = 1
    send_server_header: bool = False

    # Static files
    static_files: StaticFileConfig = field(default_factory=StaticFileConfig)

    # Response compression (gzip, negotiated per request)
    compression: bool = True

    # Routing
    routes: tuple[Route, ...] = (get("/", welcome),)
    default_status_handlers: Mapping[int, StatusHandler] = field(
        default_factory=_no_status_handlers
    )

    # Logging hook (handlers installed on the "wiz" logger at startup)
    log_level: str = "info"
    log_handlers: tuple[logging.Handler, ...] = ()

    # -- Server --

    def set_name(self, name: str) -> ServerConfig:
        return replace(self, name=name)

    def set_host(self, host: str) -> ServerConfig:
        return replace(self, host=host)

    def set_port(self, port: int) -> ServerConfig:
        return replace(self, port=port)

    def set_workers(self, workers: int) -> ServerConfig:
        return replace(self, workers=workers)

    def set_send_server_header(self, value: bool) -> ServerConfig:
        return replace(self, send_server_header=value)

    def use_compression(self, value: bool) -> ServerConfig:
        return replace(self, compression=value)

    # -- Static files --

    def _with_static(self, **changes: object) -> ServerConfig:
        return replace(self, static_files=replace(self.static_files, **changes))

    def serve_static_files(self, value: bool) -> ServerConfig:
        return self._with_static(enabled=value)

    def serve_index_files(self, value: bool) -> ServerConfig:
        return self._with_static(serve_index=value)

    def set_static_directory(self, root: str) -> ServerConfig:
        return self._with_static(root=root)

    def set_static_request_path(self, prefix: str) -> ServerConfig:
        return self._with_static(request_path_prefix=prefix)

    # -- Routing --

    def set_routes(self, routes: Iterable[Route]) -> ServerConfig:
        """Replace the route table. An empty table serves the welcome page."""
        return replace(self, routes=tuple(routes))

    def set_default_status_handlers(
        self, handlers: Iterable[tuple[int, StatusHandler]]
    ) -> ServerConfig:
        """Fold *handlers* into the existing mapping; later pairs win per status."""
        merged = dict(self.default_status_handlers)
        for status, handler in handlers:
            merged[status] = handler
        return replace(self, default_status_handlers=MappingProxyType(merged))

    # -- Logging --

    def set_log_level(self, level: str) -> ServerConfig:
        return replace(self, log_level=level)

    def set_log_handlers(self, handlers: Iterable[logging.Handler]) -> ServerConfig:
        return replace(self, log_handlers=tuple(handlers))

    def clear_log_handlers(self) -> ServerConfig:
        return replace(self, log_handlers=())


def gen_server() -> ServerConfig:
    """A fresh configuration with every default in place."""
    return ServerConfig()


def print_config(config: ServerConfig) -> ServerConfig:
    """Print *config* and hand it back unchanged."""
    print(config)
    return config
