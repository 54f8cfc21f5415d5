"""Template return type.

A frozen dataclass handlers return to have a kida template rendered.
The content negotiation layer renders it to a text/html response.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Template:
    """Render a kida template from the configured template directory.

    Usage::

        @get("/hello/:name")
        def hello(self, name: str) -> Template:
            return Template("hello.html", name=name)
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)
