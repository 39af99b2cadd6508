"""Wiz exception hierarchy.

Shared across Router, Context, handler, and middleware so every module
raises and catches the same types.

Missing request data is never an error here: accessors return ``None``.
"""

from dataclasses import dataclass


class WizError(Exception):
    """Base for all wiz-specific errors."""


class ConfigurationError(WizError):
    """Raised when a configuration value cannot be materialized.

    The builder accepts anything; this only surfaces when the compiled
    app or the CLI cannot make sense of what it was handed.
    """


class ResponseAlreadyCompleted(WizError):
    """Raised when a Context is written to after ``flush()``."""


@dataclass(frozen=True, slots=True)
class HTTPError(WizError):
    """An error that maps directly to an HTTP status code.

    Raised by the router. The request handler catches these and turns
    them into a bare status on the Context.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route pattern exists but not for this HTTP method.

    Carries an ``Allow`` header listing the registered methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class ResponseAlreadyStarted(WizError):
    """Raised when status or headers change after the response head was sent."""
