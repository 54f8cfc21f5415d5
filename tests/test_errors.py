"""Tests for wren.errors and wren.server.errors — error types and responses."""

import logging

import pytest

from wren.errors import (
    BindingError,
    ConfigurationError,
    ContentTooLarge,
    HandlerError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    WrenError,
)
from wren.http.request import Request
from wren.server.errors import error_response, handle_http_error, handle_internal_error


class TestErrorTypes:
    def test_hierarchy(self) -> None:
        assert issubclass(ConfigurationError, WrenError)
        assert issubclass(HTTPError, WrenError)
        for cls in (BindingError, NotFound, MethodNotAllowed, HandlerError, ContentTooLarge):
            assert issubclass(cls, HTTPError)

    @pytest.mark.parametrize(
        ("error", "status", "detail"),
        [
            (BindingError(), 400, "Bad Request"),
            (NotFound(), 404, "Page not found"),
            (MethodNotAllowed(frozenset({"GET"})), 405, "Method not allowed"),
            (HandlerError(), 500, "An error occurred on the server"),
            (ContentTooLarge(10), 413, "Request body exceeds 10 bytes"),
        ],
    )
    def test_status_and_detail(self, error: HTTPError, status: int, detail: str) -> None:
        assert error.status == status
        assert error.detail == detail

    def test_allow_header_is_sorted(self) -> None:
        error = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert error.headers == (("Allow", "GET, POST"),)

    def test_str(self) -> None:
        assert str(NotFound()) == "404: Page not found"
        assert str(HTTPError(status=418)) == "418"

    def test_raisable_and_chainable(self) -> None:
        with pytest.raises(HandlerError) as exc_info:
            try:
                raise ValueError("boom")
            except ValueError as exc:
                raise HandlerError() from exc
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestErrorResponse:
    def test_body_is_detail(self) -> None:
        response = error_response(NotFound())
        assert response.status == 404
        assert response.text == "Page not found"
        assert response.content_type == "text/html; charset=utf-8"

    def test_headers_carried(self) -> None:
        response = error_response(MethodNotAllowed(frozenset({"GET"})))
        assert response.header("Allow") == "GET"

    def test_empty_detail(self) -> None:
        assert error_response(HTTPError(status=418)).text == "Error 418"


class TestErrorLogging:
    def test_4xx_logs_at_debug(self, caplog) -> None:
        request = Request.build("GET", "/missing")
        with caplog.at_level(logging.DEBUG, logger="wren.server"):
            handle_http_error(NotFound(), request)
        (record,) = caplog.records
        assert record.levelno == logging.DEBUG
        assert "404 GET /missing" in record.getMessage()

    def test_handler_error_logs_cause(self, caplog) -> None:
        request = Request.build("GET", "/boom")
        try:
            try:
                raise RuntimeError("kaboom")
            except RuntimeError as exc:
                raise HandlerError() from exc
        except HandlerError as exc:
            error = exc

        with caplog.at_level(logging.ERROR, logger="wren.server"):
            response = handle_http_error(error, request)

        assert response.status == 500
        (record,) = caplog.records
        assert "500 GET /boom" in record.getMessage()
        assert record.exc_info is not None
        assert record.exc_info[0] is RuntimeError

    def test_internal_error_hides_detail(self, caplog) -> None:
        request = Request.build("POST", "/boom")
        with caplog.at_level(logging.ERROR, logger="wren.server"):
            try:
                raise RuntimeError("secret detail")
            except RuntimeError:
                response = handle_internal_error(request)

        assert response.status == 500
        assert response.text == "An error occurred on the server"
        assert "secret detail" not in response.text
        assert caplog.records[0].exc_info is not None
