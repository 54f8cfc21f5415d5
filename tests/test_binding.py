"""Tests for wren.routing.binding — handler shapes and parameter binding."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from wren.errors import BindingError, ConfigurationError, HandlerError, NotFound
from wren.http.request import Request
from wren.routing.binding import BoundHandler, Shape, inspect_handler


@dataclass
class Person:
    name: str
    age: int = 0


class TestInspectHandler:
    def test_zero_arity(self) -> None:
        sig = inspect_handler(lambda: "ok")
        assert sig.shape is Shape.POSITIONAL
        assert sig.arity == 0

    def test_unannotated_parameters_are_strings(self) -> None:
        sig = inspect_handler(lambda what, loud: what + loud)
        assert sig.arity == 2

    def test_typed_parameters(self) -> None:
        def add(left: int, right: float, flag: bool, name: str) -> Any: ...

        assert inspect_handler(add).arity == 4

    def test_request_does_not_count_toward_arity(self) -> None:
        def hello(request: Request, name: str) -> str: ...

        def by_name(request, name: str) -> str: ...

        assert inspect_handler(hello).arity == 1
        assert inspect_handler(by_name).arity == 1

    def test_mapping_shape(self) -> None:
        def keys(values: dict[str, str]) -> str: ...

        def abstract(values: Mapping) -> str: ...

        for handler in (keys, abstract):
            sig = inspect_handler(handler)
            assert sig.shape is Shape.MAPPING
            assert sig.arity == 0

    def test_record_shape(self) -> None:
        def create(person: Person) -> str: ...

        sig = inspect_handler(create)
        assert sig.shape is Shape.RECORD
        assert sig.record_type is Person
        assert sig.arity == 0

    def test_bound_method_skips_self(self) -> None:
        class Resource:
            def hello(self, name: str) -> str:
                return name

        assert inspect_handler(Resource().hello).arity == 1

    def test_defaulted_keyword_only_is_ignored(self) -> None:
        def hello(name: str, *, punctuation: str = "!") -> str: ...

        assert inspect_handler(hello).arity == 1

    @pytest.mark.parametrize(
        "source",
        [
            "def handler(*args): ...",
            "def handler(**kwargs): ...",
            "def handler(*, required): ...",
            "def handler(items: list[int]): ...",
            "def handler(values: dict, name: str): ...",
            "def handler(person: Person, name: str): ...",
        ],
    )
    def test_unbindable_signatures(self, source: str) -> None:
        namespace: dict[str, Any] = {"Person": Person}
        exec(source, namespace)
        with pytest.raises(ConfigurationError):
            inspect_handler(namespace["handler"])


class TestBoundHandler:
    async def test_positional_conversion(self) -> None:
        bound = BoundHandler.of(lambda left, right: left + right)
        assert await bound(("a", "b"), Request.build("GET", "/")) == "ab"

        def add(left: int, right: int) -> int:
            return left + right

        assert await BoundHandler.of(add)(("22", "20"), Request.build("GET", "/")) == 42

    async def test_async_handler(self) -> None:
        async def hello(name: str) -> str:
            return "Hello " + name

        assert await BoundHandler.of(hello)(("Dave",), Request.build("GET", "/")) == "Hello Dave"

    async def test_request_injected_in_position(self) -> None:
        def echo(name: str, request: Request) -> str:
            return f"{name} {request.method} {request.path}"

        request = Request.build("GET", "/echo/x")
        assert await BoundHandler.of(echo)(("x",), request) == "x GET /echo/x"

    async def test_keyword_only_request(self) -> None:
        def echo(*, request: Request) -> str:
            return request.path

        assert await BoundHandler.of(echo)((), Request.build("GET", "/p")) == "/p"

    async def test_mapping_receives_query_for_get(self) -> None:
        def keys(values: dict[str, str]) -> dict[str, str]:
            return values

        request = Request.build("GET", "/keys?a=1&b=2", form={"c": "3"})
        assert await BoundHandler.of(keys)((), request) == {"a": "1", "b": "2"}

    async def test_mapping_receives_form_for_post(self) -> None:
        def keys(values: dict[str, str]) -> dict[str, str]:
            return values

        request = Request.build("POST", "/keys?a=1", form={"firstName": "Jane"})
        assert await BoundHandler.of(keys)((), request) == {"firstName": "Jane"}

    async def test_record_receives_form(self) -> None:
        def create(person: Person) -> Person:
            return person

        request = Request.build("POST", "/person", form={"name": "John", "age": "42", "x": "y"})
        assert await BoundHandler.of(create)((), request) == Person(name="John", age=42)

    async def test_conversion_failure_is_binding_error(self) -> None:
        def add(left: int, right: int) -> int:
            return left + right

        with pytest.raises(BindingError):
            await BoundHandler.of(add)(("1", "two"), Request.build("GET", "/"))

    async def test_unexpected_exception_becomes_handler_error(self) -> None:
        def boom() -> str:
            raise RuntimeError("secret detail")

        with pytest.raises(HandlerError) as exc_info:
            await BoundHandler.of(boom)((), Request.build("GET", "/"))
        assert exc_info.value.status == 500
        assert "secret" not in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_http_errors_propagate_unchanged(self) -> None:
        def missing() -> str:
            raise NotFound("No such thing")

        with pytest.raises(NotFound, match="No such thing"):
            await BoundHandler.of(missing)((), Request.build("GET", "/"))

    async def test_constant_value(self) -> None:
        bound = BoundHandler.of("Hello")
        assert bound.arity == 0
        assert await bound((), Request.build("GET", "/")) == "Hello"
