"""Invoke helpers — call sync or async callables uniformly.

Handlers and filters can be ``def`` or ``async def``. Any code that calls
a user-provided callable must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def hello(name: str) -> str:
            return "Hello " + name

        # async — returns coroutine, awaited automatically
        async def hello(name: str) -> str:
            greeting = await load_greeting()
            return greeting + name
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
