"""ASGI handler: translates ASGI scope/messages to apirouter types.

The only component that touches raw ASGI directly. Builds the Request
and ResponseWriter, runs the matched handler chain, and sends whatever
the writer holds once the chain is done.

Errors escaping the chain land here: HTTP errors become their status
code, anything else is logged and, if nothing was sent yet, answered
with a plain 500.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apirouter._internal.asgi import Receive, Scope, Send
from apirouter.errors import HTTPError
from apirouter.http.request import Request
from apirouter.http.response import ResponseWriter
from apirouter.server.chain import run_chain
from apirouter.server.sender import send_response

if TYPE_CHECKING:
    from apirouter.routing.router import Router

logger = logging.getLogger("apirouter.server")


async def handle_request(scope: Scope, receive: Receive, send: Send, *, router: Router) -> None:
    """Process a single ASGI connection scope."""
    if scope["type"] == "lifespan":
        await _handle_lifespan(receive, send)
        return
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = ResponseWriter()

    try:
        match = router.match(request.method, request.path)
        await run_chain(match.handlers, request.with_path_params(match.path_params), response)
    except HTTPError as exc:
        _answer_http_error(exc, request, response)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        if not response.headers_sent:
            response.status(500).send("Internal Server Error")

    if not response.headers_sent:
        logger.debug("%s %s finished without a response body", request.method, request.path)

    await send_response(response.to_response(), send, method=request.method)


def _answer_http_error(exc: HTTPError, request: Request, response: ResponseWriter) -> None:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    if response.headers_sent:
        return
    response.status(exc.status)
    for name, value in exc.headers:
        response.set_header(name, value)
    response.send(exc.detail or f"Error {exc.status}")


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge ASGI lifespan startup and shutdown."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
