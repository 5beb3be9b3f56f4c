"""ASGI response sending: translates a Response into ASGI messages."""

from apirouter._internal.asgi import Send
from apirouter.http.response import Response


def _body_allowed(status: int, method: str) -> bool:
    """Whether the status code and request method permit a response body."""
    # RFC: 1xx, 204 and 304 responses, and any HEAD response, carry no body.
    if method == "HEAD":
        return False
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Translate an apirouter Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body if _body_allowed(response.status, method) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
