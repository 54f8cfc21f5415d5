"""Stream detection and file piping.

Handlers may return readable file objects (``io.BytesIO``, an open file)
or iterators of byte chunks. Both are sent as chunked bodies. Blocking
``read()`` calls run in a worker thread via anyio so a slow file never
stalls the event loop.
"""

from collections.abc import AsyncIterable, AsyncIterator, Iterator
from typing import Any, BinaryIO

import anyio.to_thread

CHUNK_SIZE = 64 * 1024


def is_file_like(value: Any) -> bool:
    """True for objects exposing a callable ``read()`` (file objects, BytesIO)."""
    return callable(getattr(value, "read", None))


def is_stream(value: Any) -> bool:
    """True if *value* should be piped rather than serialized.

    Strings, bytes, and containers are never streams. Generators,
    iterators, async iterators, and file-like objects are.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return is_file_like(value) or isinstance(value, (Iterator, AsyncIterable))


async def aiter_file(fileobj: BinaryIO, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Read *fileobj* in chunks off the event loop, closing it when exhausted."""
    try:
        while True:
            chunk = await anyio.to_thread.run_sync(fileobj.read, chunk_size)
            if not chunk:
                break
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk
    finally:
        close = getattr(fileobj, "close", None)
        if callable(close):
            close()
