"""The registration capability the API router decorates.

Any object with a matching ``add_route`` works as a base; the framework
checks the shape, not the lineage::

    class Recorder:
        def __init__(self):
            self.routes = []

        def add_route(self, method, path, *handlers):
            self.routes.append((method, path, handlers))

    api = ApiRouter(Recorder())
"""

from typing import Protocol, runtime_checkable

from apirouter._internal.types import Handler


@runtime_checkable
class RouteRegistrar(Protocol):
    """Registers an ordered handler chain for a method and path pattern."""

    def add_route(self, method: str, path: str, *handlers: Handler) -> None: ...
