"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from apirouter._internal.types import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """One registration: a method, a path pattern and its handler chain."""

    method: str
    path: str
    handlers: tuple[Handler, ...]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    *routes* holds every registration for the matched method and path,
    in registration order; ``next()`` from the end of one chain moves on
    to the next.
    """

    routes: tuple[Route, ...]
    path_params: dict[str, str]

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """All handlers of all matched routes, flattened in order."""
        return tuple(handler for route in self.routes for handler in route.handlers)
