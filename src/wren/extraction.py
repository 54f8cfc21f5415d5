"""Typed extraction of form data into user-defined records.

Populates instances of user classes from a POST form body, converting
string values to the annotated field types. Used by the parameter
binder when a handler's single parameter is annotated with a record
type.

A record type is either a dataclass or a plain class with annotated
public attributes::

    @dataclass
    class Person:
        name: str
        age: int = 0

    class Human:
        firstName: str
        lastName: str

Rules:

- Only public (non-underscore) annotated fields are populated.
- Form keys with no matching field are ignored.
- Missing keys leave the field's default. A dataclass field without a
  default that is missing from the form is a binding error.
- Conversion failures raise ``BindingError`` (400).

Supported field types: ``str``, ``int``, ``float``, ``bool``, and their
optional forms (``int | None``).
"""

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any, ClassVar, get_origin, get_type_hints

from wren.errors import BindingError, ConfigurationError
from wren.routing.params import convert_param, scalar_type


def is_record_type(annotation: Any) -> bool:
    """Return True if *annotation* is a user-defined record class.

    Excludes builtins, mappings, and wren's own types (``Request``,
    ``Response``, etc.), which are never populated from form data.
    """
    if not isinstance(annotation, type) or get_origin(annotation) is not None:
        return False
    module = getattr(annotation, "__module__", "") or ""
    if module == "builtins" or module == "wren" or module.startswith("wren."):
        return False
    if issubclass(annotation, Mapping):
        return False
    return dataclasses.is_dataclass(annotation) or bool(_public_hints(annotation))


def record_fields(cls: type) -> dict[str, type]:
    """Return ``{field_name: scalar_type}`` for the populatable fields of *cls*.

    Raises ``ConfigurationError`` if a field has an unsupported type or
    a plain class cannot be created without arguments.
    """
    hints = _public_hints(cls)
    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls) if f.init and not f.name.startswith("_")]
    else:
        names = list(hints)
        try:
            inspect.signature(cls).bind()
        except TypeError:
            msg = f"Record type {cls.__qualname__} must be constructible without arguments."
            raise ConfigurationError(msg) from None
        except ValueError:
            pass

    fields: dict[str, type] = {}
    for name in names:
        target = scalar_type(hints.get(name, str))
        if target is None:
            msg = (
                f"Record field {cls.__qualname__}.{name} has unsupported type "
                f"{hints.get(name)!r}; use str, int, float or bool."
            )
            raise ConfigurationError(msg)
        fields[name] = target
    return fields


def extract_record[T](cls: type[T], data: Mapping[str, str]) -> T:
    """Create an instance of *cls* populated from *data* (usually form data).

    Args:
        cls: A record type accepted by ``is_record_type``.
        data: A mapping of string keys to string values.

    Returns:
        A new instance of *cls*.
    """
    fields = record_fields(cls)
    values = {
        name: convert_param(data[name], target, name)
        for name, target in fields.items()
        if name in data
    }

    if dataclasses.is_dataclass(cls):
        missing = [name for name in _required_fields(cls) if name not in values]
        if missing:
            msg = f"Missing form field(s): {', '.join(missing)}"
            raise BindingError(msg)
        return cls(**values)

    instance = cls()
    for name, value in values.items():
        setattr(instance, name, value)
    return instance


def _required_fields(cls: type) -> list[str]:
    return [
        f.name
        for f in dataclasses.fields(cls)
        if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    ]


def _public_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations for the public, non-ClassVar attributes of *cls*."""
    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError):
        return {}
    return {
        name: hint
        for name, hint in hints.items()
        if not name.startswith("_") and hint is not ClassVar and get_origin(hint) is not ClassVar
    }
