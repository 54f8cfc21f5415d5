"""Static file resolution and serving.

The static collaborator behind the lowest-priority catch-all route. It
decides whether a request path names a servable file and reads that
file's bytes. The route table only asks ``resolve()``; the privacy and
traversal policy lives here.

Resolution order for a request path:

1. the file itself (``/css/site.css``)
2. a directory's index file (``/`` -> ``index.html``)
3. the path with ``.html`` appended (``/about`` -> ``about.html``)

Paths with any segment starting with ``.`` or ``_`` are never served,
so ``/_config.yaml``, ``/.env`` and ``/../secret`` all resolve to
nothing.
"""

import logging
import mimetypes
from pathlib import Path

import anyio

from wren.http.response import OCTET_STREAM, Response

logger = logging.getLogger("wren.static")

_PRIVATE_PREFIXES = (".", "_")


class StaticFiles:
    """Resolves request paths to files under a root directory.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.

    Usage::

        static = StaticFiles("./public")
        file_path = static.resolve("/index.html")
        if file_path is not None:
            response = await static.serve(file_path)
    """

    __slots__ = ("_cache_control", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control
        if not self._directory.is_dir():
            logger.warning("Static directory %s does not exist", self._directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def resolve(self, path: str) -> Path | None:
        """Return the file a request *path* maps to, or ``None``.

        Paths the filesystem rejects (an embedded NUL, a name too long)
        resolve to nothing.
        """
        relative = path.lstrip("/")
        if any(part.startswith(_PRIVATE_PREFIXES) for part in relative.split("/") if part):
            return None
        try:
            return self._lookup(relative)
        except (OSError, ValueError):
            return None

    def _lookup(self, relative: str) -> Path | None:
        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            return None

        if file_path.is_dir():
            index_path = file_path / self._index
            return index_path if index_path.is_file() else None

        # A trailing slash only ever names a directory
        if relative.endswith("/"):
            return None

        if file_path.is_file():
            return file_path

        if relative:
            html_path = file_path.with_name(file_path.name + ".html")
            if html_path.is_relative_to(self._directory) and html_path.is_file():
                return html_path

        return None

    async def serve(self, file_path: Path) -> Response:
        """Read a resolved file and build a response."""
        content_type, _ = mimetypes.guess_type(file_path.name)
        if content_type is None:
            content_type = OCTET_STREAM
        elif content_type.startswith("text/"):
            content_type = f"{content_type}; charset=utf-8"

        body = await anyio.Path(file_path).read_bytes()

        return Response(body=body, content_type=content_type).with_header(
            "Cache-Control", self._cache_control
        )

    def __repr__(self) -> str:
        return f"StaticFiles({str(self._directory)!r})"
