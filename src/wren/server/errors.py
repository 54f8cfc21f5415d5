"""Error handling for wren dispatches.

Maps HTTPError exceptions and unexpected failures to Response objects.
Error detail from unexpected failures is logged, never sent.
"""

import logging

from wren.errors import HandlerError, HTTPError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def error_response(exc: HTTPError) -> Response:
    """Default text/html response for an HTTPError."""
    detail = exc.detail or f"Error {exc.status}"
    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response.

    4xx outcomes are routine and logged at DEBUG. A ``HandlerError`` is
    logged with the exception it wraps.
    """
    if exc.status >= 500:
        logger.error(
            "%d %s %s",
            exc.status,
            request.method,
            request.path,
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    return error_response(exc)


def handle_internal_error(request: Request) -> Response:
    """Handle an unexpected exception as a 500. Call from an ``except`` block."""
    logger.exception("500 %s %s", request.method, request.path)
    return error_response(HandlerError())
