"""Routing — the ordered route table and the engine-native matcher.

Routes are plain frozen values collected into a tuple on the server
configuration. The ``Router`` compiles that tuple into a trie once,
when the app is built.
"""

from wiz.routing.route import Method, Route, delete, get, head, options, post, put, route

__all__ = [
    "Method",
    "Route",
    "delete",
    "get",
    "head",
    "options",
    "post",
    "put",
    "route",
]
