"""HTTP verbs and the per-verb registration surface.

Both the host ``Router`` and the ``ApiRouter`` decorator expose the same
surface: ``add_route(method, path, *handlers)`` plus one method per
standard verb. Each verb method can be called directly or used as a
decorator when given only a path::

    router.get("/items", list_items)

    @router.post("/items")
    def create_item(request, response, next): ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from http import HTTPMethod
from typing import Any

from apirouter._internal.types import Handler
from apirouter.errors import ConfigurationError

HTTP_METHODS: frozenset[str] = frozenset(method.value for method in HTTPMethod)


def normalize_method(method: str) -> str:
    """Upper-case *method* and check it is a standard HTTP verb."""
    normalized = method.upper().strip()
    if normalized not in HTTP_METHODS:
        msg = f"Unknown HTTP method {method!r}. Expected one of: {', '.join(sorted(HTTP_METHODS))}"
        raise ConfigurationError(msg)
    return normalized


def _verb(method: HTTPMethod) -> Callable[..., Any]:
    def register(self: RouteMethods, path: str, *handlers: Handler) -> Any:
        if handlers:
            self.add_route(method.value, path, *handlers)
            return None

        def decorator(func: Handler) -> Handler:
            self.add_route(method.value, path, func)
            return func

        return decorator

    register.__name__ = register.__qualname__ = method.name.lower()
    register.__doc__ = f"Register handlers for ``{method.value}`` requests on *path*."
    return register


class RouteMethods(ABC):
    """Mixin providing one registration method per HTTP verb.

    Subclasses implement ``add_route``; one that does not cannot be
    instantiated.
    """

    __slots__ = ()

    @abstractmethod
    def add_route(self, method: str, path: str, *handlers: Handler) -> None: ...

    get = _verb(HTTPMethod.GET)
    post = _verb(HTTPMethod.POST)
    put = _verb(HTTPMethod.PUT)
    patch = _verb(HTTPMethod.PATCH)
    delete = _verb(HTTPMethod.DELETE)
    head = _verb(HTTPMethod.HEAD)
    options = _verb(HTTPMethod.OPTIONS)
    trace = _verb(HTTPMethod.TRACE)
    connect = _verb(HTTPMethod.CONNECT)
