"""Captured value parsing and type conversion.

Built-in converters for handler parameters and record fields annotated
``str``, ``int``, ``float``, or ``bool``. Numbers use a fixed decimal
syntax so that ``int("٣")``, ``" 42"``, ``"1e3"`` and ``"inf"`` are all
rejected the same way a malformed number is.
"""

import math
import re
import types
from collections.abc import Callable
from typing import Any, Union, get_args, get_origin

from wren.errors import BindingError

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

BOOLEANS: dict[str, bool] = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


def _to_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(value)
    return int(value)


def _to_float(value: str) -> float:
    if not _FLOAT_RE.fullmatch(value):
        raise ValueError(value)
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(value)
    return result


def _to_bool(value: str) -> bool:
    try:
        return BOOLEANS[value.lower()]
    except KeyError:
        raise ValueError(value) from None


# python_type -> parser for each supported scalar annotation
CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
}


def scalar_type(annotation: Any) -> type | None:
    """Return the convertible scalar type for *annotation*, or ``None``.

    Unwraps optional annotations, so ``int | None`` converts as ``int``.
    """
    if annotation in CONVERTERS:
        return annotation
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and members[0] in CONVERTERS:
            return members[0]
    return None


def convert_param(value: str, target_type: type, name: str = "value") -> Any:
    """Convert a captured string to *target_type*.

    Raises ``BindingError`` (400) if the string cannot be converted.
    Raises ``KeyError`` if *target_type* has no registered converter.
    """
    converter = CONVERTERS[target_type]
    try:
        return converter(value)
    except ValueError:
        msg = f"Invalid {target_type.__name__} for {name!r}: {value!r}"
        raise BindingError(msg) from None
