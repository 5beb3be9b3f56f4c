"""The API router: a decorator over any route registrar.

``ApiRouter`` exposes the same registration surface as the router it
wraps, but every handler may *return* its result instead of writing the
response itself::

    from apirouter import ApiError, ApiRouter

    api = ApiRouter()

    @api.get("/users/{id}")
    async def show_user(request, response, next):
        user = await db.get_user(request.path_params["id"])
        if user is None:
            raise ApiError("not found", 404)
        return {"user": user, "posts": db.posts_for(user)}  # awaitables welcome

The wrapped router is untouched; the API router only intercepts
registration, wraps each handler (see ``apirouter.dispatch``) and
forwards the chain in a single ``add_route`` call.
"""

from dataclasses import replace
from typing import Any

from apirouter._internal.asgi import Receive, Scope, Send
from apirouter._internal.types import ErrorFormatter, Handler
from apirouter.config import RouterConfig
from apirouter.dispatch import wrap_handler
from apirouter.errors import ConfigurationError
from apirouter.routing.methods import RouteMethods, normalize_method
from apirouter.routing.protocol import RouteRegistrar
from apirouter.routing.router import Router


class ApiRouter(RouteMethods):
    """Value-returning handlers on top of a base router.

    Args:
        base: The registrar to decorate. Defaults to a fresh host
            ``Router``, which makes the API router a complete ASGI app.
        config: Starting configuration.
        **options: ``RouterConfig`` fields applied over *config*, e.g.
            ``silence_misuse_errors=True``.
    """

    __slots__ = ("base", "config")

    def __init__(
        self,
        base: RouteRegistrar | None = None,
        config: RouterConfig | None = None,
        **options: Any,
    ) -> None:
        if base is not None and not isinstance(base, RouteRegistrar):
            msg = f"{type(base).__name__} has no add_route(method, path, *handlers)"
            raise ConfigurationError(msg)
        self.base: RouteRegistrar = base if base is not None else Router()
        self.config: RouterConfig = (config or RouterConfig()).with_options(**options)

    def set_error_formatter(self, formatter: ErrorFormatter | None) -> None:
        """Replace the error formatter, for old and new routes alike."""
        self.config = replace(self.config, error_formatter=formatter)

    def add_route(self, method: str, path: str, *handlers: Handler) -> None:
        """Wrap *handlers* and register them on the base router."""
        if not handlers:
            msg = f"No handlers given for route {path!r}"
            raise ConfigurationError(msg)
        method = normalize_method(method)
        route = f"{method} {path}"
        last_index = len(handlers) - 1
        wrapped = [
            wrap_handler(handler, route=route, last=index == last_index, get_config=self._get_config)
            for index, handler in enumerate(handlers)
        ]
        self.base.add_route(method, path, *wrapped)

    def _get_config(self) -> RouterConfig:
        return self.config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point, delegated to the base router."""
        if not callable(self.base):
            msg = f"{type(self.base).__name__} is not an ASGI application"
            raise TypeError(msg)
        await self.base(scope, receive, send)
