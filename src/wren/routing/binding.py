"""Handler signature inspection and parameter binding.

A handler's shape is resolved once, at registration, from its
signature. At request time the route hands the ordered captured values
and the request to a ``BoundHandler``, which converts them and calls
the handler. There is exactly one handler abstraction regardless of
arity.

Shapes:

- **positional** — each parameter receives one captured value, left to
  right, converted to its annotation (``str``, ``int``, ``float``,
  ``bool``; unannotated means ``str``).
- **mapping** — a single parameter annotated ``dict`` or ``Mapping``
  receives the query string (GET) or form body (POST) as a plain dict.
- **record** — a single parameter annotated with a user class receives
  the form body as an instance of that class (POST only).

A parameter named ``request`` or annotated ``Request`` receives the
request itself in any shape and does not count toward arity.
"""

import inspect
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, get_origin

from wren._internal.invoke import invoke
from wren.errors import ConfigurationError, HandlerError, HTTPError
from wren.extraction import extract_record, is_record_type, record_fields
from wren.http.request import Request
from wren.routing.params import convert_param, scalar_type

# Largest number of placeholders a single handler may bind
MAX_ARITY = 4

_MAPPING_TYPES: tuple[Any, ...] = (dict, Mapping, MutableMapping)


class Shape(Enum):
    """How captured values and request data reach a handler."""

    POSITIONAL = "positional"
    MAPPING = "mapping"
    RECORD = "record"


class _Kind(Enum):
    VALUE = "value"
    REQUEST = "request"
    MAPPING = "mapping"
    RECORD = "record"


@dataclass(frozen=True, slots=True)
class _Slot:
    """One handler parameter and where its argument comes from."""

    name: str
    kind: _Kind
    target: type | None = None
    keyword: bool = False


@dataclass(frozen=True, slots=True)
class HandlerSignature:
    """The resolved binding plan for one handler."""

    shape: Shape
    slots: tuple[_Slot, ...] = ()

    @property
    def arity(self) -> int:
        """Number of captured values the handler consumes."""
        return sum(1 for slot in self.slots if slot.kind is _Kind.VALUE)

    @property
    def record_type(self) -> type | None:
        for slot in self.slots:
            if slot.kind is _Kind.RECORD:
                return slot.target
        return None

    def bind(self, values: Sequence[str], request: Request) -> tuple[list[Any], dict[str, Any]]:
        """Build ``(args, kwargs)`` for one call.

        Raises ``BindingError`` if a value cannot be converted.
        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        captured = iter(values)

        for slot in self.slots:
            match slot.kind:
                case _Kind.VALUE:
                    value = convert_param(next(captured), slot.target or str, slot.name)
                case _Kind.REQUEST:
                    value = request
                case _Kind.MAPPING:
                    source = request.form if request.method == "POST" else request.query
                    value = source.to_dict()
                case _Kind.RECORD:
                    value = extract_record(slot.target, request.form)  # type: ignore[arg-type]

            if slot.keyword:
                kwargs[slot.name] = value
            else:
                args.append(value)

        return args, kwargs


def _is_request_param(param: inspect.Parameter) -> bool:
    if param.annotation is Request:
        return True
    return param.name == "request" and param.annotation in (inspect.Parameter.empty, Request)


def _is_mapping_annotation(annotation: Any) -> bool:
    return annotation in _MAPPING_TYPES or get_origin(annotation) in _MAPPING_TYPES


def inspect_handler(handler: Callable[..., Any]) -> HandlerSignature:
    """Resolve the binding plan for *handler*.

    Raises ``ConfigurationError`` for signatures wren cannot bind:
    ``*args``/``**kwargs``, required keyword-only parameters, unsupported
    annotations, or a mapping/record parameter mixed with other values.
    """
    name = getattr(handler, "__qualname__", repr(handler))
    try:
        sig = inspect.signature(handler, eval_str=True)
    except (ValueError, TypeError, NameError) as exc:
        msg = f"Cannot inspect handler {name}: {exc}"
        raise ConfigurationError(msg) from exc

    slots: list[_Slot] = []
    for param in sig.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            msg = f"Handler {name} cannot declare *{param.name}; declare each parameter."
            raise ConfigurationError(msg)

        keyword = param.kind is param.KEYWORD_ONLY

        if _is_request_param(param):
            slots.append(_Slot(param.name, _Kind.REQUEST, keyword=keyword))
            continue

        if keyword:
            if param.default is param.empty:
                msg = f"Handler {name} has required keyword-only parameter {param.name!r}."
                raise ConfigurationError(msg)
            continue

        annotation = param.annotation
        if annotation is param.empty:
            slots.append(_Slot(param.name, _Kind.VALUE, str))
        elif _is_mapping_annotation(annotation):
            slots.append(_Slot(param.name, _Kind.MAPPING))
        elif (target := scalar_type(annotation)) is not None:
            slots.append(_Slot(param.name, _Kind.VALUE, target))
        elif is_record_type(annotation):
            record_fields(annotation)
            slots.append(_Slot(param.name, _Kind.RECORD, annotation))
        else:
            msg = (
                f"Handler {name} parameter {param.name!r} has unsupported type "
                f"{annotation!r}; use str, int, float, bool, a mapping, or a record class."
            )
            raise ConfigurationError(msg)

    kinds = {slot.kind for slot in slots} - {_Kind.REQUEST}
    data_slots = [slot for slot in slots if slot.kind is not _Kind.REQUEST]

    if kinds & {_Kind.MAPPING, _Kind.RECORD}:
        if len(data_slots) != 1:
            msg = (
                f"Handler {name} must declare a mapping or record parameter alone "
                "(optionally with the request)."
            )
            raise ConfigurationError(msg)
        shape = Shape.MAPPING if _Kind.MAPPING in kinds else Shape.RECORD
    else:
        shape = Shape.POSITIONAL

    return HandlerSignature(shape=shape, slots=tuple(slots))


def _constant(value: Any) -> Callable[[], Any]:
    def handler() -> Any:
        return value

    handler.__qualname__ = f"constant({value!r})"
    return handler


@dataclass(frozen=True, slots=True)
class BoundHandler:
    """A handler together with its resolved binding plan.

    Usage::

        bound = BoundHandler.of(hello)
        result = await bound(("Dave",), request)
    """

    func: Callable[..., Any]
    signature: HandlerSignature

    @classmethod
    def of(cls, handler: Any) -> BoundHandler:
        """Inspect *handler*; a non-callable becomes a constant return value."""
        if not callable(handler):
            handler = _constant(handler)
        return cls(func=handler, signature=inspect_handler(handler))

    @property
    def arity(self) -> int:
        return self.signature.arity

    @property
    def shape(self) -> Shape:
        return self.signature.shape

    @property
    def name(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))

    async def __call__(self, values: Sequence[str], request: Request) -> Any:
        """Bind *values* and call the handler (sync or async).

        ``HTTPError`` raised by binding or by the handler propagates
        unchanged. Any other exception is wrapped in ``HandlerError``
        with the original chained as ``__cause__``.
        """
        args, kwargs = self.signature.bind(values, request)
        try:
            return await invoke(self.func, *args, **kwargs)
        except HTTPError:
            raise
        except Exception as exc:
            raise HandlerError() from exc
