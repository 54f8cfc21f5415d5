"""Tests for wren.routing.route — route variants and match outcomes."""

from dataclasses import dataclass

import pytest

from wren.errors import ConfigurationError
from wren.http.request import Request
from wren.routing.route import NO_MATCH, Handled, HandlerRoute, MethodMismatch, StaticAssetRoute
from wren.static import StaticFiles


@dataclass
class Person:
    name: str


class TestHandlerRouteBuild:
    def test_build(self) -> None:
        route = HandlerRoute.build("get", "/hello/:name", lambda name: name)
        assert route.method == "GET"
        assert route.pattern.source == "/hello/:name"
        assert route.arity == 1

    def test_arity_mismatch(self) -> None:
        with pytest.raises(ConfigurationError, match="Expected 1 parameters"):
            HandlerRoute.build("GET", "/hello/:name", lambda: "Hello")

    def test_too_many_handler_parameters(self) -> None:
        with pytest.raises(ConfigurationError):
            HandlerRoute.build("GET", "/hello", lambda name: name)

    def test_query_placeholders_count(self) -> None:
        route = HandlerRoute.build("GET", "/hello/:a?b=:b", lambda a, b: a + b)
        assert route.arity == 2
        with pytest.raises(ConfigurationError):
            HandlerRoute.build("GET", "/hello/:a?b=:b", lambda a: a)

    def test_declared_arity_must_agree(self) -> None:
        HandlerRoute.build("GET", "/a/:x", lambda x: x, arity=1)
        with pytest.raises(ConfigurationError, match="declared arity is 2"):
            HandlerRoute.build("GET", "/a/:x", lambda x: x, arity=2)

    def test_at_most_four_parameters(self) -> None:
        HandlerRoute.build("GET", "/:a/:b/:c/:d", lambda a, b, c, d: a)
        with pytest.raises(ConfigurationError, match="at most 4"):
            HandlerRoute.build("GET", "/:a/:b/:c/:d/:e", lambda a, b, c, d, e: a)

    def test_unsupported_method(self) -> None:
        with pytest.raises(ConfigurationError, match="PUT"):
            HandlerRoute.build("PUT", "/", lambda: "x")

    def test_record_handler_requires_post(self) -> None:
        def create(person: Person) -> str:
            return person.name

        HandlerRoute.build("POST", "/person", create)
        with pytest.raises(ConfigurationError, match="POST"):
            HandlerRoute.build("GET", "/person", create)

    def test_mapping_handler_requires_zero_placeholders(self) -> None:
        def keys(values: dict) -> dict:
            return values

        HandlerRoute.build("GET", "/keys", keys)
        with pytest.raises(ConfigurationError):
            HandlerRoute.build("GET", "/keys/:id", keys)


class TestHandlerRouteTryApply:
    async def test_handled(self) -> None:
        route = HandlerRoute.build("GET", "/hello/:name", lambda name: "Hello " + name)
        outcome = await route.try_apply(Request.build("GET", "/hello/Dave"))
        assert outcome == Handled("Hello Dave")

    async def test_no_match(self) -> None:
        route = HandlerRoute.build("GET", "/hello/:name", lambda name: name)
        assert await route.try_apply(Request.build("GET", "/bye/Dave")) is NO_MATCH

    async def test_method_mismatch(self) -> None:
        calls: list[str] = []
        route = HandlerRoute.build("GET", "/get", lambda: calls.append("ran"))
        outcome = await route.try_apply(Request.build("POST", "/get"))
        assert outcome == MethodMismatch("GET")
        assert calls == []

    async def test_missing_query_placeholder_is_no_match(self) -> None:
        route = HandlerRoute.build("GET", "/hello?name=:name", lambda name: name)
        assert await route.try_apply(Request.build("POST", "/hello")) is NO_MATCH
        assert await route.try_apply(Request.build("GET", "/hello?name=Bob")) == Handled("Bob")

    def test_repr(self) -> None:
        def hello(name: str) -> str:
            return name

        route = HandlerRoute.build("GET", "/hello/:name", hello)
        assert "GET /hello/:name" in repr(route)
        assert "hello" in repr(route)


class TestStaticAssetRoute:
    @pytest.fixture
    def route(self, tmp_path) -> StaticAssetRoute:
        (tmp_path / "index.html").write_text("<h1>Home</h1>")
        return StaticAssetRoute(StaticFiles(tmp_path))

    async def test_get_serves_file(self, route: StaticAssetRoute) -> None:
        outcome = await route.try_apply(Request.build("GET", "/"))
        assert isinstance(outcome, Handled)
        assert outcome.result.text == "<h1>Home</h1>"

    async def test_post_is_method_mismatch(self, route: StaticAssetRoute) -> None:
        outcome = await route.try_apply(Request.build("POST", "/index.html"))
        assert outcome == MethodMismatch("GET")

    async def test_unknown_file_is_no_match(self, route: StaticAssetRoute) -> None:
        assert await route.try_apply(Request.build("GET", "/missing.css")) is NO_MATCH
        assert await route.try_apply(Request.build("POST", "/missing.css")) is NO_MATCH
