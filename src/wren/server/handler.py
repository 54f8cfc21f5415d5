"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI directly. Converts the scope
and body to a typed Request, runs it through the dispatcher, and sends
the response back through ASGI send().
"""

from wren._internal.asgi import Receive, Scope, Send
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import StreamingResponse
from wren.server.dispatcher import Dispatcher
from wren.server.errors import handle_http_error
from wren.server.sender import send_response, send_streaming_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    max_content_length: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    try:
        request = await Request.from_asgi(scope, receive, max_content_length=max_content_length)
    except HTTPError as exc:
        partial = Request(method=scope["method"], path=scope["path"])
        await send_response(handle_http_error(exc, partial), send)
        return

    response = await dispatcher.dispatch(request)

    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send)
    else:
        await send_response(response, send)
