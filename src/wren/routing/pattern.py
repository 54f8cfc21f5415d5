"""URL pattern compilation and matching.

Pattern syntax::

    /hello/:name                   one path placeholder
    /say/:what/how/:loud           two path placeholders
    /hello?name=:name              one query placeholder
    /items/:id?sort=:order         path placeholders first, then query

Both the pattern and the request path are split on ``/``, so leading and
trailing slashes produce empty segments that must line up: ``/items``
and ``/items/`` are different paths. Placeholders capture any non-empty
segment verbatim. Every query placeholder is mandatory.

Captured values are ordered path-first, then query, left to right. The
query suffix can only follow the last path segment.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from wren.errors import ConfigurationError

PLACEHOLDER_PREFIX = ":"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a pattern path.

    Literal:  ``hello``  (is_param=False)
    Param:    ``:name``  (is_param=True, param_name="name")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class QueryPlaceholder:
    """A ``key=:name`` pair from the pattern's query suffix."""

    key: str
    param_name: str


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled URL pattern. Immutable once compiled."""

    source: str
    segments: tuple[PathSegment, ...]
    query: tuple[QueryPlaceholder, ...] = ()

    @property
    def param_names(self) -> tuple[str, ...]:
        """Placeholder names in capture order (path first, then query)."""
        path_names = tuple(seg.param_name for seg in self.segments if seg.param_name)
        return path_names + tuple(q.param_name for q in self.query)

    @property
    def param_count(self) -> int:
        """Total number of placeholders, path and query."""
        return sum(1 for seg in self.segments if seg.is_param) + len(self.query)

    def match(self, path: str, query: Mapping[str, str]) -> tuple[str, ...] | None:
        """Match a decoded request path and query mapping.

        Returns the ordered captured values, or ``None`` if the request
        does not match.
        """
        parts = path.split("/")
        if len(parts) != len(self.segments):
            return None

        captured: list[str] = []
        for seg, part in zip(self.segments, parts, strict=True):
            if seg.is_param:
                if not part:
                    return None
                captured.append(part)
            elif seg.value != part:
                return None

        for placeholder in self.query:
            value = query.get(placeholder.key)
            if value is None:
                return None
            captured.append(value)

        return tuple(captured)

    def with_prefix(self, prefix: str) -> Pattern:
        """Return this pattern compiled under a path *prefix*."""
        return compile_pattern(join_prefix(prefix, self.source))


def join_prefix(prefix: str, pattern: str) -> str:
    """Prepend *prefix* to *pattern*, avoiding a doubled slash."""
    if not prefix:
        return pattern
    return prefix.rstrip("/") + pattern


@lru_cache(maxsize=512)
def compile_pattern(source: str) -> Pattern:
    """Compile a pattern string.

    Raises ``ConfigurationError`` for malformed patterns: a missing
    leading slash, an unnamed placeholder, a query pair without a
    placeholder, or a placeholder name used twice.
    """
    if not source.startswith("/"):
        msg = f"Pattern {source!r} must start with '/'."
        raise ConfigurationError(msg)

    path, _, query_string = source.partition("?")

    segments: list[PathSegment] = []
    for part in path.split("/"):
        if part.startswith(PLACEHOLDER_PREFIX):
            name = part[1:]
            if not name.isidentifier():
                msg = f"Pattern {source!r} has an invalid placeholder {part!r}."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=part))

    query: list[QueryPlaceholder] = []
    if query_string:
        for pair in query_string.split("&"):
            key, _, value = pair.partition("=")
            name = value[1:]
            if not key or not value.startswith(PLACEHOLDER_PREFIX) or not name.isidentifier():
                msg = f"Pattern {source!r} has an invalid query placeholder {pair!r}."
                raise ConfigurationError(msg)
            query.append(QueryPlaceholder(key=key, param_name=name))

    pattern = Pattern(source=source, segments=tuple(segments), query=tuple(query))

    names = pattern.param_names
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        msg = f"Pattern {source!r} repeats placeholder(s): {', '.join(duplicates)}."
        raise ConfigurationError(msg)

    return pattern


def param_count(source: str) -> int:
    """Number of placeholders (path and query) declared by a pattern string."""
    return compile_pattern(source).param_count
