"""Route values and per-method constructors.

A route table is an ordered sequence of ``Route``. Identical
(method, path) pairs are allowed; the first one in table order is the
one that answers.

Usage::

    from wiz import routing

    routes = [
        routing.get("/", index),
        routing.post("/spells", create_spell),
        routing.route(Method.INFO, "/status", status),
    ]
"""

from dataclasses import dataclass
from enum import StrEnum

from wiz._internal.types import Handler


class Method(StrEnum):
    """HTTP methods a route can be registered for. No wildcard."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"
    INFO = "INFO"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """One entry of the route table."""

    method: Method
    path: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


def route(method: Method, path: str, handler: Handler) -> Route:
    return Route(Method(method), path, handler)


def get(path: str, handler: Handler) -> Route:
    return Route(Method.GET, path, handler)


def put(path: str, handler: Handler) -> Route:
    return Route(Method.PUT, path, handler)


def post(path: str, handler: Handler) -> Route:
    return Route(Method.POST, path, handler)


def delete(path: str, handler: Handler) -> Route:
    return Route(Method.DELETE, path, handler)


def head(path: str, handler: Handler) -> Route:
    return Route(Method.HEAD, path, handler)


def options(path: str, handler: Handler) -> Route:
    return Route(Method.OPTIONS, path, handler)
