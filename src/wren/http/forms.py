"""URL-encoded form data.

Form bodies are parsed once by the transport glue before dispatch, so
handlers and the parameter binder read them synchronously.
"""

from wren._internal.multimap import MultiValueMap

FORM_URLENCODED = "application/x-www-form-urlencoded"


class FormData(MultiValueMap):
    """Immutable parsed form data.

    Usage::

        form = request.form
        first_name = form["firstName"]
    """

    __slots__ = ()


def parse_form(body: bytes, content_type: str | None) -> FormData:
    """Parse a request body into ``FormData``.

    Bodies without a content type are treated as URL-encoded, which is
    what plain HTML forms and most test clients send. Any other content
    type yields an empty ``FormData``; the raw bytes stay available on
    ``Request.body``.
    """
    media_type = (content_type or FORM_URLENCODED).split(";", 1)[0].strip().lower()
    if media_type != FORM_URLENCODED or not body:
        return FormData()
    return FormData(body.decode("utf-8", errors="replace"))
