"""The dispatcher: filters, then routes, then content negotiation.

``Dispatcher.dispatch`` is the whole request-handling contract. It
reads one route table snapshot per request, so a concurrent reset never
produces a half-old, half-new view. It never raises: every failure
becomes a response with a documented status.

- handled: whatever content negotiation makes of the result
- no route for the path: 404 ``Page not found``
- route for the path, other method: 405 ``Method not allowed``
- parameter value that does not convert: 400
- handler exception: 500 ``An error occurred on the server``
"""

import logging

from kida import Environment

from wren._internal.types import DispatchHook
from wren.errors import HTTPError
from wren.filters import apply_filters
from wren.http.request import Request
from wren.http.response import AnyResponse
from wren.routing.table import RouteTable
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.negotiation import negotiate

logger = logging.getLogger("wren.server")


def log_dispatch(method: str, path: str, status: int) -> None:
    """Default dispatch hook: one DEBUG line per request."""
    logger.debug("%s %s -> %d", method, path, status)


class Dispatcher:
    """Turns a ``Request`` into a response using a ``RouteTable``.

    Usage::

        dispatcher = Dispatcher(table)
        response = await dispatcher.dispatch(Request.build("GET", "/hello/Dave"))

    *on_dispatch* is called once per request with the method, path, and
    final status. A failing hook is logged and otherwise ignored.
    """

    __slots__ = ("_kida_env", "_on_dispatch", "_table")

    def __init__(
        self,
        table: RouteTable,
        *,
        kida_env: Environment | None = None,
        on_dispatch: DispatchHook | None = log_dispatch,
    ) -> None:
        self._table = table
        self._kida_env = kida_env
        self._on_dispatch = on_dispatch

    @property
    def table(self) -> RouteTable:
        return self._table

    async def dispatch(self, request: Request) -> AnyResponse:
        """Handle one request. Never raises."""
        snapshot = self._table.snapshot
        try:
            handled = await apply_filters(snapshot.filters, request)
            if handled is None:
                handled = await snapshot.scan(request)
            response = negotiate(handled.result, kida_env=self._kida_env)
        except HTTPError as exc:
            response = handle_http_error(exc, request)
        except Exception:
            response = handle_internal_error(request)

        self._notify(request, response.status)
        return response

    def _notify(self, request: Request, status: int) -> None:
        if self._on_dispatch is None:
            return
        try:
            self._on_dispatch(request.method, request.path, status)
        except Exception:
            logger.exception("Dispatch hook %r failed", self._on_dispatch)
