"""Tests for apirouter.http.response: ResponseWriter and Response."""

import pytest

from apirouter.errors import HeadersAlreadySent
from apirouter.http.response import Response, ResponseWriter


class TestWriter:
    def test_defaults(self) -> None:
        writer = ResponseWriter()
        assert writer.status_code == 200
        assert writer.headers_sent is False

    def test_json_is_compact(self) -> None:
        writer = ResponseWriter()
        writer.json({"a": 1, "b": [1, 2]})
        sent = writer.to_response()
        assert sent.body == b'{"a":1,"b":[1,2]}'
        assert sent.content_type == "application/json"
        assert writer.headers_sent is True

    def test_status_is_chainable(self) -> None:
        writer = ResponseWriter()
        writer.status(404).json("not found")
        assert writer.to_response().status == 404

    def test_send_text(self) -> None:
        writer = ResponseWriter()
        writer.send("héllo")
        assert writer.to_response().body == "héllo".encode()

    def test_end_commits_empty_body(self) -> None:
        writer = ResponseWriter()
        writer.status(204).end()
        assert writer.headers_sent is True
        assert writer.to_response().body == b""

    def test_second_write_raises(self) -> None:
        writer = ResponseWriter()
        writer.send("first")
        with pytest.raises(HeadersAlreadySent):
            writer.json({"second": True})
        assert writer.to_response().text == "first"

    def test_header_after_send_raises(self) -> None:
        writer = ResponseWriter()
        writer.end()
        with pytest.raises(HeadersAlreadySent):
            writer.set_header("X-Late", "1")

    def test_unserializable_json_leaves_writer_open(self) -> None:
        writer = ResponseWriter()
        with pytest.raises(TypeError):
            writer.json({"when": object()})
        assert writer.headers_sent is False


class TestEvents:
    def test_emit_calls_listeners_in_order(self) -> None:
        calls: list[str] = []
        writer = ResponseWriter()
        writer.on("done", lambda value: calls.append(f"a:{value}"))
        writer.on("done", lambda value: calls.append(f"b:{value}"))

        assert writer.emit("done", 1) is True
        assert calls == ["a:1", "b:1"]

    def test_emit_without_listeners(self) -> None:
        assert ResponseWriter().emit("nothing") is False


class TestResponse:
    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response(headers=(("X-Request-Id", "abc"),))
        assert response.header("x-request-id") == "abc"
        assert response.header("missing") is None

    def test_frozen(self) -> None:
        response = Response()
        with pytest.raises(AttributeError):
            response.status = 500  # type: ignore[misc]
