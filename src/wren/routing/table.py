"""The route table: prioritized routes and filters as an immutable snapshot.

Priority rules:

- Handler and resource routes are prepended, so the most recently
  registered route is tried first and the last definition wins.
- Static routes are appended after all handler routes, so files are
  only served when no handler claims the path.
- Filters run in registration order, before any route.

Thread safety:
    The table holds a single ``RouteSnapshot``. Every registration builds
    a new snapshot and publishes it by one attribute assignment, so a
    dispatch that captured the snapshot keeps a consistent view while
    configuration continues. Configuration itself is not synchronized:
    callers must not register routes from more than one thread at once.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from wren.errors import MethodNotAllowed, NotFound
from wren.filters import Filter
from wren.http.request import Request
from wren.routing.pattern import Pattern
from wren.routing.resource import ReflectionRoute, scan_resource
from wren.routing.route import (
    Handled,
    HandlerRoute,
    MethodMismatch,
    Route,
    StaticAssetRoute,
)
from wren.static import StaticFiles

logger = logging.getLogger("wren.routing")


@dataclass(frozen=True, slots=True)
class RouteSnapshot:
    """An immutable, consistent view of the filters and routes."""

    filters: tuple[Filter, ...] = ()
    routes: tuple[Route, ...] = ()
    fallbacks: tuple[Route, ...] = ()

    def __iter__(self) -> Iterator[Route]:
        """Routes in scan order: handler routes, then static fallbacks."""
        yield from self.routes
        yield from self.fallbacks

    def __len__(self) -> int:
        return len(self.routes) + len(self.fallbacks)

    async def scan(self, request: Request) -> Handled:
        """Run the first route that handles *request*.

        Raises ``MethodNotAllowed`` if some route matched the path for
        another method, otherwise ``NotFound``.
        """
        allowed: set[str] = set()
        for route in self:
            outcome = await route.try_apply(request)
            match outcome:
                case Handled():
                    return outcome
                case MethodMismatch(allowed=method):
                    allowed.add(method)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound()


EMPTY = RouteSnapshot()


class RouteTable:
    """Ordered routes and filters, published atomically.

    Usage::

        table = RouteTable()
        table.add_handler("GET", "/hello/:name", lambda name: "Hello " + name)
        table.add_static("./public")
        handled = await table.snapshot.scan(request)
    """

    __slots__ = ("_snapshot",)

    def __init__(self, snapshot: RouteSnapshot = EMPTY) -> None:
        self._snapshot = snapshot

    @property
    def snapshot(self) -> RouteSnapshot:
        """The currently published snapshot."""
        return self._snapshot

    def publish(self, snapshot: RouteSnapshot) -> None:
        """Replace the whole table in one step."""
        self._snapshot = snapshot

    # -- Registration --

    def add_route(self, route: Route) -> Route:
        """Prepend *route*: it takes priority over everything registered before."""
        snapshot = self._snapshot
        self._snapshot = replace(snapshot, routes=(route, *snapshot.routes))
        logger.debug("Registered %r", route)
        return route

    def add_fallback(self, route: Route) -> Route:
        """Append *route* after every other route."""
        snapshot = self._snapshot
        self._snapshot = replace(snapshot, fallbacks=(*snapshot.fallbacks, route))
        logger.debug("Registered fallback %r", route)
        return route

    def add_handler(
        self,
        method: str,
        pattern: str | Pattern,
        handler: Any,
        arity: int | None = None,
    ) -> HandlerRoute:
        """Register *handler* for *method* and *pattern*.

        Raises ``ConfigurationError`` if the pattern's placeholder count
        differs from the handler's (or the declared *arity*).
        """
        route = HandlerRoute.build(method, pattern, handler, arity=arity)
        self.add_route(route)
        return route

    def add_resource(self, resource: Any, prefix: str = "") -> list[ReflectionRoute]:
        """Register every decorated method of *resource*.

        All of the resource's routes are validated before any is
        published; one bad method leaves the table untouched.
        """
        routes = scan_resource(resource, prefix)
        snapshot = self._snapshot
        self._snapshot = replace(snapshot, routes=(*reversed(routes), *snapshot.routes))
        for route in routes:
            logger.debug("Registered %r", route)
        return routes

    def add_static(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> StaticAssetRoute:
        """Serve files under *directory* when no handler route matches."""
        route = StaticAssetRoute(StaticFiles(directory, index=index, cache_control=cache_control))
        self.add_fallback(route)
        return route

    def add_filter(self, flt: Filter) -> None:
        """Append *flt* to the filter chain."""
        snapshot = self._snapshot
        self._snapshot = replace(snapshot, filters=(*snapshot.filters, flt))

    def reset(self) -> None:
        """Drop every route and filter at once."""
        self._snapshot = EMPTY

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        snapshot = self._snapshot
        return (
            f"RouteTable(routes={len(snapshot.routes)}, "
            f"fallbacks={len(snapshot.fallbacks)}, filters={len(snapshot.filters)})"
        )
