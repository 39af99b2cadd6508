"""Import resolution — resolves ``"module:attribute"`` strings to a ServerConfig.

Shared by ``wiz run`` and ``wiz config``.
"""

import importlib

from wiz.app import App
from wiz.config import ServerConfig


def resolve_config(import_string: str) -> ServerConfig:
    """Resolve an import string to a wiz ``ServerConfig``.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"config"`` (e.g. ``"myapp"`` resolves to
    ``myapp.config``).

    The attribute may be a ``ServerConfig``, an ``App`` (its config is
    used), or a zero-argument factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a configuration.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "config"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions
    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, App):
        return obj.config

    if not isinstance(obj, ServerConfig):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wiz.ServerConfig"
        raise TypeError(msg)

    return obj
