"""Wren application class.

Owns the configuration, the route table, and the dispatcher. Routes are
registered through a ``Routes`` facade, either directly on the app or in
a ``configure()`` callback that swaps in a whole new table at once.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any, Self

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import DispatchHook, Handler
from wren.config import AppConfig
from wren.filters import Filter
from wren.http.request import Request
from wren.http.response import AnyResponse
from wren.routing.table import RouteTable
from wren.server.dispatcher import Dispatcher, log_dispatch
from wren.server.handler import handle_request
from wren.templating.integration import create_environment

logger = logging.getLogger("wren.server")

_MISSING: Any = object()


class Routes:
    """Registration surface over a ``RouteTable``.

    Every method raises ``ConfigurationError`` immediately for an
    invalid registration. ``get``/``post`` work both directly and as
    decorators::

        routes.get("/hello/:name", lambda name: "Hello " + name)
        routes.get("/", "Hello")   # constant return value

        @routes.post("/person")
        def create(person: Person) -> str: ...
    """

    __slots__ = ("_config", "_table")

    def __init__(self, table: RouteTable, config: AppConfig) -> None:
        self._table = table
        self._config = config

    @property
    def table(self) -> RouteTable:
        return self._table

    def get(self, pattern: str, handler: Any = _MISSING) -> Any:
        """Register a GET handler, or return a decorator that does."""
        return self._register("GET", pattern, handler)

    def post(self, pattern: str, handler: Any = _MISSING) -> Any:
        """Register a POST handler, or return a decorator that does."""
        return self._register("POST", pattern, handler)

    def add_handler(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        arity: int | None = None,
    ) -> Self:
        """Register *handler* with an explicit declared *arity*."""
        self._table.add_handler(method, pattern, handler, arity)
        return self

    def add(self, prefix_or_resource: Any, resource: Any = _MISSING) -> Self:
        """Register a resource object's ``@get``/``@post`` methods.

        ``add(resource)`` or ``add("/prefix", resource)``.
        """
        if resource is _MISSING:
            self._table.add_resource(prefix_or_resource)
        else:
            self._table.add_resource(resource, prefix_or_resource)
        return self

    def filter(self, flt: Filter) -> Self:
        """Append a pre-route filter."""
        self._table.add_filter(flt)
        return self

    def static_dir(self, directory: str | Path) -> Self:
        """Serve files under *directory* as the lowest-priority route."""
        self._table.add_static(
            directory,
            index=self._config.static_index,
            cache_control=self._config.static_cache_control,
        )
        logger.info("Serving static files from %s", directory)
        return self

    def reset(self) -> Self:
        """Drop every route and filter."""
        self._table.reset()
        return self

    def _register(self, method: str, pattern: str, handler: Any) -> Any:
        if handler is not _MISSING:
            self._table.add_handler(method, pattern, handler)
            return self

        def decorator(func: Handler) -> Handler:
            self._table.add_handler(method, pattern, func)
            return func

        return decorator


class App:
    """The wren application.

    Usage::

        app = App(AppConfig(static_dir="public"))

        @app.get("/hello/:name")
        def hello(name: str) -> str:
            return "Hello " + name

        app.run()

    Thread safety:
        Dispatches read the published route table snapshot without
        locking. ``configure()``, ``reset()`` and direct registrations
        must not run concurrently with each other; run them at startup
        or between isolated tests.
    """

    __slots__ = ("_dispatcher", "_kida_env", "_table", "config", "routes")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        on_dispatch: DispatchHook | None = log_dispatch,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = RouteTable()
        self.routes = self._new_routes(self._table)
        self._kida_env = create_environment(self.config)
        self._dispatcher = Dispatcher(
            self._table,
            kida_env=self._kida_env,
            on_dispatch=on_dispatch,
        )

    # -- Route registration --

    def get(self, pattern: str, handler: Any = _MISSING) -> Any:
        """Register a GET handler, or return a decorator that does."""
        return self.routes.get(pattern, handler)

    def post(self, pattern: str, handler: Any = _MISSING) -> Any:
        """Register a POST handler, or return a decorator that does."""
        return self.routes.post(pattern, handler)

    def configure(self, configuration: Callable[[Routes], Any]) -> Self:
        """Replace every route and filter with the ones *configuration* registers.

        *configuration* runs against a fresh table (with the configured
        static directory already in place). The new table is published
        only if it returns without raising.
        """
        table = RouteTable()
        configuration(self._new_routes(table))
        self._table.publish(table.snapshot)
        return self

    def reset(self) -> Self:
        """Drop all routes and filters, keeping the configured static directory."""
        table = RouteTable()
        self._new_routes(table)
        self._table.publish(table.snapshot)
        return self

    # -- Dispatch --

    async def dispatch(self, request: Request) -> AnyResponse:
        """Dispatch a request without a transport. Never raises."""
        return await self._dispatcher.dispatch(request)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            max_content_length=self.config.max_content_length,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce. Blocks until the server stops."""
        from wren.server.runner import run_server

        config = self.config
        if host is not None:
            config = replace(config, host=host)
        if port is not None:
            config = replace(config, port=port)
        logger.info("Listening on http://%s:%d", config.host, config.port)
        run_server(self, config)

    # -- Internal --

    def _new_routes(self, table: RouteTable) -> Routes:
        routes = Routes(table, self.config)
        if self.config.static_dir is not None:
            routes.static_dir(self.config.static_dir)
        return routes
