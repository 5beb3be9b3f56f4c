"""Handler chain execution.

Handlers run one at a time, in registration order. Each receives a
``next`` callback; the following handler runs only if ``next()`` was
called. ``next(error)`` stops the chain and raises *error* into the
ASGI handler's error path.
"""

from collections.abc import Sequence

from apirouter._internal.invoke import invoke
from apirouter._internal.types import Handler
from apirouter.http.request import Request
from apirouter.http.response import ResponseWriter


class _Next:
    """The ``next`` callback handed to a single handler invocation."""

    __slots__ = ("called", "error")

    def __init__(self) -> None:
        self.called = False
        self.error: BaseException | None = None

    def __call__(self, error: BaseException | None = None) -> None:
        self.called = True
        self.error = error


async def run_chain(
    handlers: Sequence[Handler],
    request: Request,
    response: ResponseWriter,
) -> None:
    """Run *handlers* until one of them stops calling ``next()``."""
    for handler in handlers:
        next_ = _Next()
        await invoke(handler, request, response, next_)
        if next_.error is not None:
            raise next_.error
        if not next_.called:
            return
