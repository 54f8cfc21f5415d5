"""Shared type aliases used across wren modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler — user-defined function with variable signature
Handler: TypeAlias = Callable[..., Any]

# Observability hook — called once per dispatch with (method, path, status)
DispatchHook: TypeAlias = Callable[[str, str, int], None]
