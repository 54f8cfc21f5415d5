"""Tests for wren.filters — pre-route filters."""

from wren.filters import apply_filters
from wren.http.request import Request
from wren.http.response import Response
from wren.routing.route import Handled


class TestApplyFilters:
    async def test_no_filters_pass(self) -> None:
        assert await apply_filters((), Request.build("GET", "/")) is None

    async def test_none_passes(self) -> None:
        seen: list[str] = []

        def record(request: Request) -> None:
            seen.append(request.path)

        assert await apply_filters((record,), Request.build("GET", "/x")) is None
        assert seen == ["/x"]

    async def test_first_answer_short_circuits(self) -> None:
        calls: list[str] = []

        def first(request: Request) -> None:
            calls.append("first")

        def second(request: Request) -> str:
            calls.append("second")
            return "intercepted"

        def third(request: Request) -> str:
            calls.append("third")
            return "never"

        handled = await apply_filters((first, second, third), Request.build("GET", "/"))
        assert handled == Handled("intercepted")
        assert calls == ["first", "second"]

    async def test_async_filter(self) -> None:
        async def deny(request: Request) -> Response:
            return Response("Forbidden", status=403)

        handled = await apply_filters((deny,), Request.build("GET", "/"))
        assert handled is not None
        assert handled.result.status == 403

    async def test_falsy_values_still_answer(self) -> None:
        handled = await apply_filters((lambda request: "",), Request.build("GET", "/"))
        assert handled == Handled("")

    async def test_false_passes(self) -> None:
        calls: list[str] = []

        def gate(request: Request) -> bool:
            calls.append("gate")
            return False

        def answer(request: Request) -> str:
            calls.append("answer")
            return "reached"

        handled = await apply_filters((gate, answer), Request.build("GET", "/"))
        assert handled == Handled("reached")
        assert calls == ["gate", "answer"]
