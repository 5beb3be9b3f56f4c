"""apirouter: route handlers that return values instead of writing responses.

Wrap a router, register handlers, return data. Awaitables nested
anywhere in the result are resolved; dicts and lists become JSON,
strings become the raw body, and errors map to status codes.

Basic usage::

    from apirouter import ApiError, ApiRouter

    api = ApiRouter()

    @api.get("/items/{id}")
    async def show_item(request, response, next):
        item = await store.find(request.path_params["id"])
        if item is None:
            raise ApiError("not found", 404)
        return {"item": item, "tags": store.tags_for(item)}

The router is an ASGI application; serve it with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "MISUSE_EVENT",
    "ApiError",
    "ApiRouter",
    "ApiRouterError",
    "ConfigurationError",
    "HTTPError",
    "HeadersAlreadySent",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Response",
    "ResponseWriter",
    "RouteRegistrar",
    "Router",
    "RouterConfig",
    "RouterMisuseError",
    "resolve_nested",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import apirouter`` fast while providing a clean top-level API.
    """
    if name == "ApiRouter":
        from apirouter.router import ApiRouter

        return ApiRouter

    if name == "RouterConfig":
        from apirouter.config import RouterConfig

        return RouterConfig

    if name == "MISUSE_EVENT":
        from apirouter.dispatch import MISUSE_EVENT

        return MISUSE_EVENT

    if name == "resolve_nested":
        from apirouter.resolve import resolve_nested

        return resolve_nested

    if name == "Request":
        from apirouter.http.request import Request

        return Request

    if name in ("Response", "ResponseWriter"):
        from apirouter.http import response as _resp

        return getattr(_resp, name)

    if name in ("Router", "RouteRegistrar"):
        from apirouter import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ApiError",
        "ApiRouterError",
        "ConfigurationError",
        "HTTPError",
        "HeadersAlreadySent",
        "MethodNotAllowed",
        "NotFound",
        "RouterMisuseError",
    ):
        from apirouter import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
