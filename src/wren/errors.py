"""Wren exception hierarchy.

Shared across the route table, dispatcher, and handlers so every module
raises and catches the same types.

Configuration errors are raised immediately at registration time.
``HTTPError`` subclasses are request-time failures that the dispatcher
turns into responses with a documented status code.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a registration is invalid.

    Typically a pattern whose placeholder count does not match the
    handler's arity, or a handler signature wren cannot bind.
    Never deferred to request time.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table, the parameter binder, or handlers. The
    dispatcher catches these and builds the matching error response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BindingError(HTTPError):
    """400 — a captured value cannot be coerced to the declared parameter type."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path for any method."""

    def __init__(self, detail: str = "Page not found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — a route matched the path, but only for other methods.

    Carries an ``Allow`` header listing the methods that did match.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "Method not allowed") -> None:
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", ", ".join(sorted(allowed))),),
        )


class HandlerError(HTTPError):
    """500 — a handler or filter raised an unexpected exception.

    The original exception is chained as ``__cause__``. Its detail is
    logged, never sent to the client.
    """

    def __init__(self, detail: str = "An error occurred on the server") -> None:
        super().__init__(status=500, detail=detail)


class ContentTooLarge(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
