"""Pre-route filters.

A filter is any callable (``def`` or ``async def``) that receives the
request. Returning ``None`` or ``False`` passes the request on;
returning anything else answers it, and that value is negotiated
exactly like a handler's return value. Filters run in registration
order, before any route.

Usage::

    def maintenance(request: Request) -> str | None:
        if request.path.startswith("/admin"):
            return Response("Down for maintenance", status=503)
        return None

    routes.filter(maintenance)
"""

from collections.abc import Iterable
from typing import Any, Protocol

from wren._internal.invoke import invoke
from wren.http.request import Request
from wren.routing.route import Handled


class Filter(Protocol):
    """Pre-route interceptor. Return ``None`` or ``False`` to pass."""

    def __call__(self, request: Request) -> Any: ...


async def apply_filters(filters: Iterable[Filter], request: Request) -> Handled | None:
    """Run *filters* in order; the first answering result short-circuits."""
    for flt in filters:
        result = await invoke(flt, request)
        if result is not None and result is not False:
            return Handled(result)
    return None
