"""Logging hook.

Every wiz module logs through a child of the ``wiz`` logger. At startup
the configured handlers replace whatever was attached to it before;
with no handlers configured, records propagate to the root logger as
usual.
"""

import logging
from collections.abc import Iterable

ROOT_LOGGER = "wiz"


def configure_logging(level: str, handlers: Iterable[logging.Handler] = ()) -> logging.Logger:
    """Clear the ``wiz`` logger's handlers, install *handlers*, set *level*."""
    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
