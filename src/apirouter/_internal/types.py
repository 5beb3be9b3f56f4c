"""Shared type aliases used across apirouter modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: (request, response, next) -> value | awaitable | None
Handler: TypeAlias = Callable[..., Any]

# The ``next`` callback passed to handlers; an optional error aborts the chain
NextCallback: TypeAlias = Callable[..., None]

# Error formatter: (error, request, response) -> body | None, sync or async
ErrorFormatter: TypeAlias = Callable[..., Any]

# Response event listener
Listener: TypeAlias = Callable[..., Any]
