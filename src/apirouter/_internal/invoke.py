"""Invoke helpers: call sync or async callables uniformly.

Route handlers return plain values or awaitables, and error formatters
can be ``def`` or ``async def``. This module keeps the sync/async check
in exactly one place.

Usage::

    from apirouter._internal.invoke import invoke

    body = await invoke(formatter, error, request, response)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
