"""Kennel exception hierarchy.

Shared across Store, Router, App, handler, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class KennelError(Exception):
    """Base for all kennel-specific errors."""


class ConfigurationError(KennelError):
    """Raised when app configuration is invalid.

    Typically raised while parsing route paths as the app compiles.
    """


class ValidationError(KennelError):
    """Raised by a store when a record is missing required fields.

    ``missing`` lists the offending field names in declaration order.
    """

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


@dataclass(frozen=True, slots=True)
class HTTPError(KennelError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    catches these and renders ``{"message": detail}`` with ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request body could not be used."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Not found!") -> None:
        super().__init__(status=404, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
