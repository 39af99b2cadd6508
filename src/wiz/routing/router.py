"""Route table compiled into a segment trie.

The route table is handed over in order and walked into a trie once,
when the app is built. Lookup tries static segments before parameters
and parameters before a trailing ``{name:path}``, backtracking when a
branch dead-ends.

Table order decides ties: the first route registered for a given
(method, pattern) owns it. Later duplicates stay listed in ``routes``
but are never matched.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from wiz.errors import ConfigurationError, MethodNotAllowed, NotFound
from wiz.routing.params import CONVERTERS
from wiz.routing.route import PathSegment, Route, RouteMatch

_PARAM = re.compile(r"^\{(?P<name>\w+)(?::(?P<converter>\w+))?\}$")


def split_path(path: str) -> list[str]:
    """Non-empty ``/``-separated parts of *path*."""
    return [part for part in path.split("/") if part]


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/spells"            -> [PathSegment("spells")]
        "/spells/{name}"     -> [..., PathSegment("{name}", is_param=True, param_name="name")]
        "/spells/{id:int}"   -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{rest:path}" -> [..., PathSegment("{rest:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in split_path(path):
        found = _PARAM.match(part)
        if found is None:
            segments.append(PathSegment(value=part))
            continue
        converter = found["converter"] or "str"
        if converter not in CONVERTERS:
            msg = (
                f"Unknown converter {converter!r} in route {path!r}. "
                f"Expected one of: {', '.join(sorted(CONVERTERS))}"
            )
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=found["name"],
                param_type=converter,
            )
        )
    return segments


@dataclass(slots=True)
class _Node:
    """One position in the trie. Mutated only while routes are added."""

    # exact segment -> child
    static: dict[str, "_Node"] = field(default_factory=dict)
    # (param name, converter) -> branch, in registration order
    params: dict[tuple[str, str], "_Branch"] = field(default_factory=dict)
    # trailing {name:path} captures: name -> routes by method
    tails: dict[str, dict[str, Route]] = field(default_factory=dict)
    # routes ending exactly here, by method
    routes: dict[str, Route] = field(default_factory=dict)


@dataclass(slots=True)
class _Branch:
    name: str
    pattern: re.Pattern[str]
    node: _Node = field(default_factory=_Node)


class Router:
    """Trie router over an ordered route table.

    Usage::

        router = Router()
        router.add(get("/spells", list_spells))
        router.add(get("/spells/{id:int}", show_spell))
        router.compile()
        match = router.match("GET", "/spells/42")
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Register *route*. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        segments = parse_path(route.path)
        self._routes.append(route)
        method = str(route.method)
        node = self._root

        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Must be last: swallows the rest of the path
                name = seg.param_name or "path"
                node.tails.setdefault(name, {}).setdefault(method, route)
                return
            if seg.is_param:
                key = (seg.param_name or "", seg.param_type)
                branch = node.params.get(key)
                if branch is None:
                    pattern = re.compile(f"^{CONVERTERS[seg.param_type]}$")
                    branch = node.params[key] = _Branch(name=key[0], pattern=pattern)
                node = branch.node
            else:
                node = node.static.setdefault(seg.value, _Node())

        node.routes.setdefault(method, route)

    @property
    def routes(self) -> list[Route]:
        """Every registered route in table order, duplicates included."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route answering *method* on *path*.

        Candidates are tried in priority order; the first that knows
        *method* wins. Raises ``MethodNotAllowed`` when the path matched
        only under other methods, ``NotFound`` when it did not match.
        """
        allowed: set[str] = set()
        for routes, params in self._candidates(self._root, split_path(path), 0, {}):
            route = routes.get(method)
            if route is not None:
                return RouteMatch(route=route, path_params=params)
            allowed.update(routes)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _candidates(
        self,
        node: _Node,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> Iterator[tuple[dict[str, Route], dict[str, str]]]:
        if index == len(parts):
            if node.routes:
                yield node.routes, params
            return

        part = parts[index]
        child = node.static.get(part)
        if child is not None:
            yield from self._candidates(child, parts, index + 1, params)

        for branch in node.params.values():
            if branch.pattern.match(part):
                captured = {**params, branch.name: part}
                yield from self._candidates(branch.node, parts, index + 1, captured)

        rest = "/".join(parts[index:])
        for name, routes in node.tails.items():
            yield routes, {**params, name: rest}
