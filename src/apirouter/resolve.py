"""Nested awaitable resolution.

Route handlers may return a structure with awaitables anywhere inside
it. This module resolves them concurrently using anyio, recursing into
whatever each awaitable produces, until nothing awaitable is left::

    await resolve_nested({"user": fetch_user(1), "posts": [fetch_post(1), 2]})
    # -> {"user": {...}, "posts": [{...}, 2]}

Pipeline:

    1. Await the value itself while it is awaitable
    2. Lists and tuples: resolve every element concurrently, keep order
    3. Mappings: resolve every value concurrently, keep keys
    4. Anything else passes through unchanged

The first failing awaitable cancels its siblings and its exception is
raised as is, never wrapped in an exception group.
"""

import inspect
from collections.abc import Hashable, Mapping
from typing import Any

import anyio


async def resolve_nested(value: Any) -> Any:
    """Return *value* with every nested awaitable replaced by its result.

    Containers are rebuilt, never mutated: lists stay lists, tuples
    (including named tuples) stay tuples, mappings become plain dicts.
    """
    while inspect.isawaitable(value):
        value = await value

    if isinstance(value, list | tuple):
        results = await _gather(enumerate(value))
        items = [results[i] for i in range(len(value))]
        if isinstance(value, list):
            return items
        if hasattr(value, "_fields"):
            return value._make(items)
        return tuple(items)

    if isinstance(value, Mapping):
        results = await _gather(value.items())
        return {key: results[key] for key in value}

    return value


def contains_awaitable(value: Any) -> bool:
    """Check if *value* holds an awaitable anywhere in its structure."""
    if inspect.isawaitable(value):
        return True
    if isinstance(value, list | tuple):
        return any(contains_awaitable(item) for item in value)
    if isinstance(value, Mapping):
        return any(contains_awaitable(item) for item in value.values())
    return False


async def _gather(pairs: Any) -> dict[Hashable, Any]:
    """Resolve the values of (key, value) *pairs* concurrently."""
    results: dict[Hashable, Any] = {}
    pending: list[tuple[Hashable, Any]] = []

    for key, item in pairs:
        if contains_awaitable(item):
            pending.append((key, item))
        else:
            results[key] = item

    if not pending:
        return results

    async def _resolve(key: Hashable, item: Any) -> None:
        results[key] = await resolve_nested(item)

    try:
        async with anyio.create_task_group() as tg:
            for key, item in pending:
                tg.start_soon(_resolve, key, item)
    except BaseExceptionGroup as group:
        raise _first_failure(group) from None

    return results


def _first_failure(group: BaseExceptionGroup) -> BaseException:
    """Dig the first leaf exception out of a (possibly nested) group."""
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
