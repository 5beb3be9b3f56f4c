"""Immutable HTTP request.

Frozen metadata with async body access. Handlers receive it as their
first argument::

    def show_item(request, response, next):
        return store.get(request.path_params["id"])
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl

from apirouter._internal.asgi import Receive, Scope
from apirouter.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata is frozen at creation. The body is read once through
    ``.body()`` and cached for ``.json()`` and ``.text()``.
    """

    method: str
    path: str
    headers: Headers
    query: Mapping[str, str]
    path_params: Mapping[str, str]

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body (the dict itself stays mutable)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """Read the full request body (cached after the first call)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(await self.body())

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    def with_path_params(self, path_params: Mapping[str, str]) -> Request:
        """Return a copy bound to a matched route's parameters.

        The body cache is shared so a body read by one handler is visible
        to the next one in the chain.
        """
        return replace(self, path_params=path_params, _cache=self._cache)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        query_string = scope.get("query_string", b"").decode("latin-1")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=dict(parse_qsl(query_string, keep_blank_values=True)),
            path_params={},
            _receive=receive,
        )
