"""Path parameter patterns for route segments like ``{id:int}``.

Captured values reach handlers as strings through
``Context.route_param``; the converter only decides what a segment
may look like.
"""

# converter name -> regex a captured segment must match
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}
