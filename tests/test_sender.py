"""Tests for apirouter.server.sender response emission rules."""

import pytest

from apirouter.http.response import Response
from apirouter.server.sender import send_response


async def _collect(response: Response, method: str = "GET") -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send, method=method)
    return messages


class TestSendResponse:
    @pytest.mark.parametrize("status", [204, 304])
    async def test_no_body_statuses(self, status: int) -> None:
        messages = await _collect(Response(b"unexpected-body", status=status))

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_head_drops_body(self) -> None:
        messages = await _collect(Response(b"body"), method="HEAD")
        assert messages[1]["body"] == b""

    async def test_200_preserves_body_and_headers(self) -> None:
        response = Response(b"ok", content_type="application/json", headers=(("X-Id", "1"),))
        messages = await _collect(response)

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"x-id"] == b"1"
        assert headers[b"content-length"] == b"2"
        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b"ok"
