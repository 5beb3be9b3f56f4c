"""Routing: the host router, its registration surface and protocol.

``Router`` matches paths through a trie and runs Express-style handler
chains. ``RouteRegistrar`` is the capability ``ApiRouter`` decorates.
"""

from apirouter.routing.methods import HTTP_METHODS, RouteMethods
from apirouter.routing.protocol import RouteRegistrar
from apirouter.routing.route import Route, RouteMatch
from apirouter.routing.router import Router

__all__ = [
    "HTTP_METHODS",
    "Route",
    "RouteMatch",
    "RouteMethods",
    "RouteRegistrar",
    "Router",
]
