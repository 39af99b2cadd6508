"""Cookie parsing, cookie options, and Set-Cookie serialization.

Consolidates the read side (``parse_cookies``, used by Request) and the
write side (``CookieOptions`` -> ``SetCookie``, used by Context) in one
module.

"Max age" (relative time) is used in favour of "expires" (absolute time).
Values are percent-encoded on the wire and decoded when parsed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import StrEnum
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

if TYPE_CHECKING:
    from wiz.context import Context

DEFAULT_MAX_AGE = timedelta(days=30)


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = unquote(value.strip())
    return cookies


class SameSite(StrEnum):
    """``SameSite`` cookie policy. ``UNSPECIFIED`` omits the attribute."""

    UNSPECIFIED = ""
    NONE = "None"
    LAX = "Lax"
    STRICT = "Strict"


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes applied to one ``set_cookie`` call.

    Build from the active request with ``CookieOptions.from_context(ctx)``
    (or ``ctx.cookie_options()``), then override field by field::

        opts = ctx.cookie_options().with_http_only(True).with_max_age(timedelta(hours=1))
        ctx.set_cookie("session", token, opts)

    ``is_essential`` marks a cookie as exempt from consent checks. It is
    carried for callers that inspect it and never written to the wire.
    """

    domain: str | None = None
    http_only: bool = False
    is_essential: bool = False
    max_age: timedelta | None = DEFAULT_MAX_AGE
    path: str = "/"
    same_site: SameSite = SameSite.UNSPECIFIED
    secure: bool = False

    @classmethod
    def from_context(cls, ctx: Context) -> CookieOptions:
        """Defaults derived from the request: domain is the request hostname."""
        return cls(domain=ctx.hostname)

    def with_domain(self, domain: str | None) -> CookieOptions:
        return replace(self, domain=domain)

    def with_http_only(self, value: bool) -> CookieOptions:
        return replace(self, http_only=value)

    def with_essential(self, value: bool) -> CookieOptions:
        return replace(self, is_essential=value)

    def with_max_age(self, age: timedelta | None) -> CookieOptions:
        return replace(self, max_age=age)

    def with_path(self, path: str) -> CookieOptions:
        return replace(self, path=path)

    def with_same_site(self, policy: SameSite) -> CookieOptions:
        return replace(self, same_site=policy)

    def with_secure(self, value: bool) -> CookieOptions:
        return replace(self, secure=value)

    def to_set_cookie(self, name: str, value: str) -> SetCookie:
        """Materialize the wire-level directive for *name*=*value*."""
        max_age = None if self.max_age is None else int(self.max_age.total_seconds())
        return SetCookie(
            name=name,
            value=value,
            max_age=max_age,
            path=self.path,
            domain=self.domain,
            secure=self.secure,
            httponly=self.http_only,
            samesite=str(self.same_site) or None,
        )


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive written to a response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={quote(self.value, safe='')}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


def expired_cookie(name: str, path: str = "/") -> SetCookie:
    """A directive that deletes *name* on the client (``Max-Age=0``)."""
    return SetCookie(name=name, value="", max_age=0, path=path)
