"""Host router: trie-based path matching over handler chains.

This is the collaborator the API router decorates. Handlers have the
``(request, response, next)`` shape and write to the response
themselves; the router is an ASGI application::

    router = Router()
    router.get("/users/{id:int}", load_user, show_user)
    match = router.match("GET", "/users/42")

Registering the same method and path twice stacks the chains: calling
``next()`` at the end of the first one continues into the second.
"""

import re
from dataclasses import dataclass

from apirouter._internal.asgi import Receive, Scope, Send
from apirouter._internal.types import Handler
from apirouter.errors import ConfigurationError, MethodNotAllowed, NotFound
from apirouter.routing.methods import RouteMethods, normalize_method
from apirouter.routing.params import CONVERTERS
from apirouter.routing.route import PathSegment, Route, RouteMatch

_PARAM_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/files/{rest:path}" -> [..., PathSegment("{rest:path}", is_param=True, param_type="path")]
    """
    if not path.startswith("/"):
        msg = f"Route path must start with '/': {path!r}"
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = f"Route {path!r} uses <param> syntax. Use {{param}} instead."
            raise ConfigurationError(msg)
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        param_name, _, param_type = part[1:-1].partition(":")
        param_type = param_type or "str"
        if not _PARAM_PATTERN.match(param_name):
            msg = f"Invalid parameter name {param_name!r} in route {path!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route {path!r}"
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=param_name, param_type=param_type)
        )
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all ({name:path}) edge, consumes the rest of the path
        self.catch_all: _ParamEdge | None = None
        # Registrations at this node, keyed by HTTP method
        self.routes_by_method: dict[str, list[Route]] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode


class Router(RouteMethods):
    """Express-style router: method + path -> ordered handler chain."""

    __slots__ = ("_root",)

    def __init__(self) -> None:
        self._root = _TrieNode()

    def add_route(self, method: str, path: str, *handlers: Handler) -> None:
        """Register *handlers* as one chain for *method* and *path*."""
        if not handlers:
            msg = f"No handlers given for route {path!r}"
            raise ConfigurationError(msg)
        method = normalize_method(method)
        route = Route(method=method, path=path, handlers=handlers)

        node = self._root
        for seg in parse_path(path):
            if seg.is_param and seg.param_type == "path":
                if node.catch_all is None:
                    node.catch_all = _ParamEdge(
                        param_name=seg.param_name or "path",
                        regex=re.compile(f"^{CONVERTERS['path']}$"),
                        node=_TrieNode(),
                    )
                node = node.catch_all.node
                break
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
                        node=_TrieNode(),
                    )
                elif node.param_child.param_name != seg.param_name:
                    msg = (
                        f"Route {path!r} names parameter {seg.param_name!r} where an "
                        f"earlier route uses {node.param_child.param_name!r}"
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        node.routes_by_method.setdefault(method, []).append(route)

    @property
    def routes(self) -> list[Route]:
        """All registrations, depth-first."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        for routes in node.routes_by_method.values():
            result.extend(routes)
        for child in node.children.values():
            self._collect_routes(child, result)
        for edge in (node.param_child, node.catch_all):
            if edge is not None:
                self._collect_routes(edge.node, result)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        node, params = result
        method = method.upper()
        routes = node.routes_by_method.get(method)
        if routes is None and method == "HEAD":
            routes = node.routes_by_method.get("GET")
        if routes is None:
            raise MethodNotAllowed(frozenset(node.routes_by_method))
        return RouteMatch(routes=tuple(routes), path_params=params)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_TrieNode, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.routes_by_method:
                return node, params
            return None

        part = parts[index]

        # 1. Static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        edge = node.param_child
        if edge is not None and edge.regex.match(part):
            result = self._match_node(
                edge.node, parts, index + 1, {**params, edge.param_name: part}
            )
            if result is not None:
                return result

        # 3. Catch-all
        if node.catch_all is not None and node.catch_all.node.routes_by_method:
            remaining = "/".join(parts[index:])
            return node.catch_all.node, {**params, node.catch_all.param_name: remaining}

        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        from apirouter.server.handler import handle_request

        await handle_request(scope, receive, send, router=self)
