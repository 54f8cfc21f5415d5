"""Immutable HTTP request.

The read-only view of a request handed to filters, routes, and handlers
that ask for it. The transport glue reads the body and parses form data
before dispatch, so everything here is plain data.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from wren._internal.asgi import Receive, Scope
from wren.errors import ContentTooLarge
from wren.http.forms import FormData, parse_form
from wren.http.headers import Headers
from wren.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the already-decoded request path; route patterns match it
    byte for byte. ``query`` and ``form`` are multi-valued mappings.
    """

    method: str
    path: str
    query: QueryParams = field(default_factory=QueryParams)
    form: FormData = field(default_factory=FormData)
    headers: Headers = field(default_factory=Headers)
    body: bytes = field(default=b"", repr=False)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Look up *key* in the form body, then in the query string."""
        value = self.form.get(key)
        if value is None:
            value = self.query.get(key)
        return default if value is None else value

    # -- Factories --

    @classmethod
    async def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        *,
        max_content_length: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope, reading the whole body.

        URL-encoded form bodies are parsed here, before dispatch.
        Raises ``ContentTooLarge`` once the body grows past
        *max_content_length*.
        """
        headers = Headers(tuple(scope.get("headers", ())))
        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            chunk = message.get("body", b"")
            if chunk:
                size += len(chunk)
                if max_content_length is not None and size > max_content_length:
                    raise ContentTooLarge(max_content_length)
                chunks.append(chunk)
            if not message.get("more_body", False):
                break
        body = b"".join(chunks)
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            query=QueryParams(scope.get("query_string", b"")),
            form=parse_form(body, headers.get("content-type")),
            headers=headers,
            body=body,
        )

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        query: str | bytes | Mapping[str, str] | None = None,
        form: str | bytes | Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        body: bytes = b"",
    ) -> Request:
        """Create a Request without a transport.

        ``path`` may carry a ``?query`` suffix when *query* is not given::

            Request.build("GET", "/hello?name=Dave")
            Request.build("POST", "/person", form={"firstName": "John"})
        """
        if query is None and "?" in path:
            path, query = path.split("?", 1)
        return cls(
            method=method.upper(),
            path=path,
            query=QueryParams(query),
            form=FormData(form),
            headers=Headers.from_mapping(headers or {}),
            body=body,
        )
