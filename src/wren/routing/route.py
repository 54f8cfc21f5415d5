"""Route variants and the three-way match outcome.

Every route answers ``await route.try_apply(request)`` with one of:

- ``NO_MATCH`` — the path is not this route's business.
- ``MethodMismatch(allowed)`` — the path matched, but only for another
  method. The table keeps scanning and answers 405 if nothing else
  handles the request.
- ``Handled(result)`` — the route ran; *result* is the raw return value
  that content negotiation will turn into a response.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Self

from wren.errors import ConfigurationError
from wren.http.request import Request
from wren.routing.binding import MAX_ARITY, BoundHandler, Shape
from wren.routing.pattern import Pattern, compile_pattern
from wren.static import StaticFiles

METHODS: frozenset[str] = frozenset({"GET", "POST"})


def check_arity(pattern: Pattern, handler: BoundHandler, arity: int | None = None) -> None:
    """Raise ``ConfigurationError`` unless *handler* takes exactly the pattern's placeholders.

    *arity*, when given, is the caller's declared parameter count and
    must agree with both.
    """
    expected = pattern.param_count
    if expected > MAX_ARITY:
        msg = (
            f"Pattern {pattern.source!r} declares {expected} parameters; "
            f"at most {MAX_ARITY} are supported."
        )
        raise ConfigurationError(msg)
    if arity is not None and arity != expected:
        msg = f"Expected {expected} parameters in {pattern.source!r}, declared arity is {arity}."
        raise ConfigurationError(msg)
    if handler.arity != expected:
        msg = (
            f"Expected {expected} parameters in {pattern.source!r}, "
            f"handler {handler.name} takes {handler.arity}."
        )
        raise ConfigurationError(msg)


class _NoMatch(Enum):
    NO_MATCH = "no-match"

    def __repr__(self) -> str:
        return "NO_MATCH"


NO_MATCH = _NoMatch.NO_MATCH


@dataclass(frozen=True, slots=True)
class MethodMismatch:
    """The path matched, but for a different method."""

    allowed: str


@dataclass(frozen=True, slots=True)
class Handled:
    """The route ran and produced *result*."""

    result: Any


type Outcome = _NoMatch | MethodMismatch | Handled


class Route(Protocol):
    """Anything the route table can scan."""

    @property
    def method(self) -> str: ...

    async def try_apply(self, request: Request) -> Outcome: ...


@dataclass(frozen=True, slots=True)
class HandlerRoute:
    """A method, a compiled pattern, and the handler bound to it.

    Created during configuration. The handler's arity was checked
    against the pattern when the route was registered.
    """

    method: str
    pattern: Pattern
    handler: BoundHandler

    @classmethod
    def build(
        cls,
        method: str,
        pattern: str | Pattern,
        handler: Any,
        *,
        arity: int | None = None,
        **extra: Any,
    ) -> Self:
        """Compile, bind, and validate a route.

        Raises ``ConfigurationError`` if the method is not GET or POST,
        the pattern is malformed, the handler cannot be bound, or the
        handler's arity differs from the pattern's placeholder count.
        """
        method = method.upper()
        if method not in METHODS:
            msg = f"Unsupported method {method!r}; routes are GET or POST."
            raise ConfigurationError(msg)

        compiled = compile_pattern(pattern) if isinstance(pattern, str) else pattern
        bound = handler if isinstance(handler, BoundHandler) else BoundHandler.of(handler)
        check_arity(compiled, bound, arity)

        if bound.shape is Shape.RECORD and method != "POST":
            record = bound.signature.record_type
            msg = (
                f"Handler {bound.name} binds a {getattr(record, '__qualname__', record)} "
                f"from the form body and can only be registered for POST, not {method}."
            )
            raise ConfigurationError(msg)

        return cls(method, compiled, bound, **extra)

    @property
    def arity(self) -> int:
        return self.pattern.param_count

    async def try_apply(self, request: Request) -> Outcome:
        values = self.pattern.match(request.path, request.query)
        if values is None:
            return NO_MATCH
        if request.method != self.method:
            return MethodMismatch(self.method)
        return Handled(await self.handler(values, request))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method} {self.pattern.source} -> {self.handler.name}>"


@dataclass(frozen=True, slots=True)
class StaticAssetRoute:
    """Catch-all GET route that serves files through a ``StaticFiles``.

    Matching is delegated entirely to the collaborator. A non-GET
    request for a path it would serve is a method mismatch, so
    ``POST /index.html`` answers 405 rather than 404.
    """

    static: StaticFiles
    method: str = "GET"

    async def try_apply(self, request: Request) -> Outcome:
        file_path = self.static.resolve(request.path)
        if file_path is None:
            return NO_MATCH
        if request.method != self.method:
            return MethodMismatch(self.method)
        return Handled(await self.static.serve(file_path))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method} {self.static.directory}>"
