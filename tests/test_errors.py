"""Tests for apirouter.errors: exception hierarchy and classification."""

import pytest

from apirouter.errors import (
    ApiError,
    ApiRouterError,
    ConfigurationError,
    FailureKind,
    HeadersAlreadySent,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RouterMisuseError,
    classify,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [ApiError, ConfigurationError, HeadersAlreadySent, HTTPError, RouterMisuseError],
    )
    def test_package_errors_share_base(self, error_type: type) -> None:
        assert issubclass(error_type, ApiRouterError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)
        assert NotFound().status == 404


class TestApiError:
    def test_message_and_status(self) -> None:
        err = ApiError("not found", 404)
        assert err.message == "not found"
        assert err.status_code == 404
        assert str(err) == "404: not found"

    def test_status_optional(self) -> None:
        err = ApiError({"reason": "quota"})
        assert err.status_code is None
        assert err.message == {"reason": "quota"}
        assert str(err) == "{'reason': 'quota'}"


class TestMethodNotAllowed:
    def test_allow_header_sorted(self) -> None:
        err = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert err.status == 405
        assert err.headers == (("Allow", "GET, POST"),)
        assert "GET, POST" in err.detail


class TestClassify:
    def test_misuse(self) -> None:
        err = RouterMisuseError("no value")
        failure = classify(err)
        assert failure.kind is FailureKind.MISUSE
        assert failure.error is err

    def test_api(self) -> None:
        assert classify(ApiError("x", 400)).kind is FailureKind.API

    @pytest.mark.parametrize("err", [RuntimeError("x"), KeyError("k"), HeadersAlreadySent("h")])
    def test_everything_else_is_unclassified(self, err: Exception) -> None:
        assert classify(err).kind is FailureKind.UNCLASSIFIED
