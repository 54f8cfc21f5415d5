"""Wren — an embeddable HTTP request router.

Maps URL patterns to handlers, runs pre-route filters, binds typed
parameters, and negotiates the response representation.

Basic usage::

    from wren import App

    app = App()

    @app.get("/hello/:name")
    def hello(name: str) -> str:
        return "Hello " + name

    app.run()

Resource objects::

    from wren import get, post

    class Calculator:
        @get("/add/:left/:right")
        def add(self, left: int, right: int) -> int:
            return left + right

    app.routes.add("/api", Calculator())
"""

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "AppConfig",
    "BindingError",
    "ConfigurationError",
    "ContentTooLarge",
    "Dispatcher",
    "HTTPError",
    "HandlerError",
    "MethodNotAllowed",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "RouteTable",
    "Routes",
    "StaticFiles",
    "StreamingResponse",
    "Template",
    "WrenError",
    "compile_pattern",
    "get",
    "payload",
    "post",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("App", "Routes"):
        from wren import app as _app

        return getattr(_app, name)

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name in ("AnyResponse", "Response", "Redirect", "StreamingResponse"):
        from wren.http import response as _resp

        return getattr(_resp, name)

    if name == "Template":
        from wren.templating.returns import Template

        return Template

    if name in ("get", "post"):
        from wren.routing import resource as _resource

        return getattr(_resource, name)

    if name == "compile_pattern":
        from wren.routing.pattern import compile_pattern

        return compile_pattern

    if name == "RouteTable":
        from wren.routing.table import RouteTable

        return RouteTable

    if name == "Dispatcher":
        from wren.server.dispatcher import Dispatcher

        return Dispatcher

    if name == "payload":
        from wren.server.negotiation import payload

        return payload

    if name == "StaticFiles":
        from wren.static import StaticFiles

        return StaticFiles

    if name in (
        "BindingError",
        "ConfigurationError",
        "ContentTooLarge",
        "HTTPError",
        "HandlerError",
        "MethodNotAllowed",
        "NotFound",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
