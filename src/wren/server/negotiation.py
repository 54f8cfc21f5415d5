"""Content negotiation — maps return values to Response objects.

The negotiator inspects the value a handler or filter returned and
produces the matching response. isinstance-based dispatch, no magic,
fully predictable: the same kind of value always yields the same
status and content type.
"""

import dataclasses
import enum
import json as json_module
from collections.abc import AsyncIterable, Iterable
from typing import Any

from kida import Environment

from wren._internal.streams import aiter_file, is_file_like, is_stream
from wren.errors import ConfigurationError
from wren.http.response import (
    HTML,
    JSON,
    OCTET_STREAM,
    AnyResponse,
    Redirect,
    Response,
    StreamingResponse,
)
from wren.templating.integration import render_template
from wren.templating.returns import Template


def negotiate(value: Any, *, kida_env: Environment | None = None) -> AnyResponse:
    """Convert a handler's return value to a response.

    Dispatch order:

    1. ``Response`` / ``StreamingResponse`` -> pass through
    2. ``Redirect``          -> empty body with Location header
    3. ``Template``          -> render via kida -> 200, text/html
    4. ``str``               -> 200, text/html
    5. ``bytes``             -> 200, application/octet-stream
    6. file object/iterator  -> 200, application/octet-stream, piped
    7. anything else         -> 200, application/json (compact)
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(dict(value.headers))
            )
        case Template():
            if kida_env is None:
                msg = (
                    "Template return type requires kida integration. "
                    "Ensure a template_dir is configured in AppConfig."
                )
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value), content_type=HTML)
        case str():
            return Response(body=value, content_type=HTML)
        case bytes() | bytearray():
            return Response(body=bytes(value), content_type=OCTET_STREAM)
        case _ if is_stream(value):
            return StreamingResponse(chunks=stream_chunks(value), content_type=OCTET_STREAM)
        case _:
            return Response(body=to_json(value), content_type=JSON)


def payload(content_type: str, body: Any, *, status: int = 200) -> AnyResponse:
    """Build an explicit response with a declared content type.

    *body* may be text, bytes, a stream (which keeps the declared type),
    or a structured value (serialized as JSON)::

        return payload("text/plain", "Hello")
        return payload("text/css", open("site.css", "rb"))
        return payload("application/vnd.api+json", {"id": 1}, status=201)
    """
    match body:
        case str() | bytes():
            return Response(body=body, status=status, content_type=content_type)
        case bytearray():
            return Response(body=bytes(body), status=status, content_type=content_type)
        case _ if is_stream(body):
            return StreamingResponse(
                chunks=stream_chunks(body), status=status, content_type=content_type
            )
        case _:
            return Response(body=to_json(body), status=status, content_type=content_type)


def stream_chunks(value: Any) -> Iterable[str | bytes] | AsyncIterable[str | bytes]:
    """Adapt a stream value to chunks a ``StreamingResponse`` can send."""
    if is_file_like(value):
        return aiter_file(value)
    return value


def to_json(value: Any) -> str:
    """Serialize *value* as compact JSON.

    Dataclasses become objects, plain objects contribute their public
    attributes, sets become arrays, and anything else falls back to its
    string form. ``NaN`` and infinities raise ``ValueError``, which the
    dispatcher answers with a 500.
    """
    return json_module.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_default,
    )


def _default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return list(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return {key: attr for key, attr in vars(value).items() if not key.startswith("_")}
    return str(value)
