"""Resource objects: routes declared with ``@get`` / ``@post`` on methods.

Decorators record route descriptors on the function; registering a
resource reads them back and creates one ``ReflectionRoute`` per
descriptor. The decorators do not wrap the function, so decorated
methods stay directly callable.

Usage::

    class Calculator:
        @get("/add/:left/:right")
        def add(self, left: int, right: int) -> int:
            return left + right

        @get("/")
        @get("/index")
        def index(self) -> str:
            return "HELLO"

    routes.add(Calculator())
    routes.add("/api", Calculator())   # /api/add/:left/:right, /api/, /api/index
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wren.routing.binding import BoundHandler
from wren.routing.pattern import compile_pattern, join_prefix
from wren.routing.route import HandlerRoute

# Function attribute holding the route descriptors in declaration order
ROUTES_ATTR = "__wren_routes__"


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A ``(method, pattern)`` pair recorded by a route decorator."""

    method: str
    pattern: str


def _route(method: str, pattern: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    compile_pattern(pattern)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        existing: tuple[RouteDescriptor, ...] = getattr(func, ROUTES_ATTR, ())
        # Decorators apply bottom-up; keep the order they are written in.
        setattr(func, ROUTES_ATTR, (RouteDescriptor(method, pattern), *existing))
        return func

    return decorator


def get(pattern: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare a GET route on a resource method. Repeatable."""
    return _route("GET", pattern)


def post(pattern: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Declare a POST route on a resource method. Repeatable."""
    return _route("POST", pattern)


def route_descriptors(func: Any) -> tuple[RouteDescriptor, ...]:
    """Return the descriptors recorded on *func*, if any."""
    return getattr(func, ROUTES_ATTR, ())


@dataclass(frozen=True, slots=True, repr=False)
class ReflectionRoute(HandlerRoute):
    """A handler route generated from a decorated resource method.

    All routes generated from one method share the same bound handler.
    """

    attribute: str = ""


def scan_resource(resource: Any, prefix: str = "") -> list[ReflectionRoute]:
    """Build one route per descriptor on *resource*'s public methods.

    *resource* may be an instance or a class; a class is instantiated
    with no arguments. Methods are visited in declaration order, base
    classes first. Raises ``ConfigurationError`` for the first invalid
    route; nothing is returned in that case.
    """
    if inspect.isclass(resource):
        resource = resource()

    routes: list[ReflectionRoute] = []
    for name in _public_names(type(resource)):
        descriptors = route_descriptors(getattr(type(resource), name, None))
        if not descriptors:
            continue

        handler = BoundHandler.of(getattr(resource, name))
        for descriptor in descriptors:
            routes.append(
                ReflectionRoute.build(
                    descriptor.method,
                    join_prefix(prefix, descriptor.pattern),
                    handler,
                    attribute=name,
                )
            )
    return routes


def _public_names(cls: type) -> list[str]:
    seen: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name in vars(klass):
            if not name.startswith("_"):
                seen.setdefault(name, None)
    return list(seen)
