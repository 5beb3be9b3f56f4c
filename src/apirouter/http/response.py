"""HTTP responses: a mutable writer for handlers, a frozen snapshot for transport.

Handlers receive a ``ResponseWriter`` and either write to it directly or
return a value that the API router writes for them::

    def legacy(request, response, next):
        response.status(201).json({"created": True})

The writer commits exactly once. After ``json()``, ``send()`` or
``end()`` the headers count as sent and any further write raises
``HeadersAlreadySent``. The ASGI handler then turns the writer into an
immutable ``Response`` and sends it.
"""

from __future__ import annotations

import json as json_module
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from apirouter._internal.types import Listener
from apirouter.errors import HeadersAlreadySent

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/html; charset=utf-8"


class ResponseWriter:
    """Mutable response handed to route handlers.

    Also an event emitter: observers subscribe with ``on()`` and the
    dispatcher reports misuse through ``emit()``.
    """

    __slots__ = (
        "_body",
        "_content_type",
        "_headers",
        "_headers_sent",
        "_listeners",
        "status_code",
    )

    def __init__(self) -> None:
        self.status_code: int = 200
        self._headers: list[tuple[str, str]] = []
        self._body: bytes = b""
        self._content_type: str = TEXT_CONTENT_TYPE
        self._headers_sent: bool = False
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    @property
    def headers_sent(self) -> bool:
        """True once the response has been committed."""
        return self._headers_sent

    # -- Header state (chainable) --

    def status(self, code: int) -> ResponseWriter:
        """Set the status code."""
        self._ensure_open()
        self.status_code = code
        return self

    def set_header(self, name: str, value: str) -> ResponseWriter:
        """Add a response header."""
        self._ensure_open()
        self._headers.append((name, value))
        return self

    # -- Committing writes --

    def json(self, value: Any) -> None:
        """Send *value* as a compact JSON body."""
        body = json_module.dumps(value, separators=(",", ":"))
        self._commit(body.encode("utf-8"), JSON_CONTENT_TYPE)

    def send(self, body: str | bytes) -> None:
        """Send a raw body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._commit(body, self._content_type)

    def end(self) -> None:
        """Commit the response without a body."""
        self._commit(b"", self._content_type)

    def _commit(self, body: bytes, content_type: str) -> None:
        self._ensure_open()
        self._body = body
        self._content_type = content_type
        self._headers_sent = True

    def _ensure_open(self) -> None:
        if self._headers_sent:
            msg = "Cannot write response: headers were already sent"
            raise HeadersAlreadySent(msg)

    # -- Events --

    def on(self, event: str, listener: Listener) -> ResponseWriter:
        """Subscribe *listener* to *event*."""
        self._listeners[event].append(listener)
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of *event*; return whether there were any."""
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    # -- Transport --

    def to_response(self) -> Response:
        """Freeze the current state into a ``Response``."""
        return Response(
            body=self._body,
            status=self.status_code,
            content_type=self._content_type,
            headers=tuple(self._headers),
        )


@dataclass(frozen=True, slots=True)
class Response:
    """An immutable HTTP response as sent over the wire."""

    body: bytes = b""
    status: int = 200
    content_type: str = TEXT_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    @property
    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body)

    def header(self, name: str) -> str | None:
        """First value of header *name*, case-insensitively."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None
