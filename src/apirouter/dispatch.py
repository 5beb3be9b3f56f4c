"""Response dispatch for value-returning route handlers.

``wrap_handler`` turns a handler that *returns* its result into one the
host router can run. After the handler is called, its return value is
resolved (nested awaitables included) and written to the response:

    ==========================  =====================================
    Resolved value              Response
    ==========================  =====================================
    dict / list / tuple         ``response.json(value)``
    str                         ``response.send(value)``
    anything else               nothing written
    ==========================  =====================================

Writing the response directly is outside this contract. Returning a
value once the response was sent raises ``RouterMisuseError``, and so
does a last handler that returns ``None``.

Failures are classified into three tiers and handled in order:

1. ``RouterMisuseError``: emitted on the response as ``MISUSE_EVENT``
   and logged (unless silenced). Never shown to the client.
2. ``ApiError``: ``status_code`` (default 500) with ``message`` as JSON.
3. Anything else: passed to the configured error formatter. A formatted
   body is sent with 500 and the error stops there. Without one, the
   default internal-error body is sent with 500 and the error is
   re-raised so the host still reports it.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

from apirouter._internal.invoke import invoke
from apirouter._internal.types import Handler, NextCallback
from apirouter.config import RouterConfig
from apirouter.errors import (
    ApiError,
    Failure,
    FailureKind,
    RouterMisuseError,
    classify,
)
from apirouter.http.request import Request
from apirouter.http.response import ResponseWriter
from apirouter.resolve import resolve_nested

logger = logging.getLogger("apirouter.dispatch")

# Response event carrying RouterMisuseError diagnostics
MISUSE_EVENT = "api_router_error"


def wrap_handler(
    handler: Handler,
    *,
    route: str,
    last: bool,
    get_config: Callable[[], RouterConfig],
) -> Handler:
    """Wrap *handler* so its return value becomes the response.

    Args:
        handler: The user handler, ``(request, response, next) -> value``.
        route: ``"METHOD /path"`` label used in misuse messages.
        last: Whether *handler* ends its chain. Only the last handler
            must return something.
        get_config: Returns the router's current configuration. Read at
            failure time so ``set_error_formatter()`` applies to routes
            registered earlier.
    """

    @functools.wraps(handler)
    async def dispatch(request: Request, response: ResponseWriter, next: NextCallback) -> None:
        try:
            value = handler(request, response, next)
            if value is None:
                if last:
                    msg = f"Route for {route} did not return a value"
                    raise RouterMisuseError(msg)
                return

            value = await resolve_nested(value)
            if response.headers_sent:
                msg = (
                    f"Route for {route} returned a value but headers were already "
                    "sent by the time it was resolved"
                )
                raise RouterMisuseError(msg)
            write_value(response, value)
        except Exception as exc:
            await handle_failure(classify(exc), request, response, get_config())

    return dispatch


def write_value(response: ResponseWriter, value: Any) -> None:
    """Write a fully resolved handler result to *response*."""
    match value:
        case dict() | list() | tuple():
            response.json(value)
        case str():
            response.send(value)
        case _:
            # Scalars and None carry no body
            pass


async def handle_failure(
    failure: Failure,
    request: Request,
    response: ResponseWriter,
    config: RouterConfig,
) -> None:
    """Handle a classified failure, tier by tier."""
    match failure.kind:
        case FailureKind.MISUSE:
            _signal_misuse(failure.error, response, config)
        case FailureKind.API:
            _respond_api_error(failure.error, response)
        case FailureKind.UNCLASSIFIED:
            await _respond_internal_error(failure.error, request, response, config)


def _signal_misuse(error: BaseException, response: ResponseWriter, config: RouterConfig) -> None:
    response.emit(MISUSE_EVENT, error)
    if not config.silence_misuse_errors:
        logger.error("%s", error, exc_info=error)


def _respond_api_error(error: Any, response: ResponseWriter) -> None:
    response.status(error.status_code or 500).json(error.message)


async def _respond_internal_error(
    error: BaseException,
    request: Request,
    response: ResponseWriter,
    config: RouterConfig,
) -> None:
    body = None
    if config.error_formatter is not None:
        try:
            body = await invoke(config.error_formatter, error, request, response)
        except ApiError as api_error:
            _respond_api_error(api_error, response)
            return
        except Exception as formatter_error:
            logger.error(
                "Error formatter raised %s while handling %s",
                type(formatter_error).__name__,
                type(error).__name__,
            )
            raise formatter_error from error

    if body:
        if not response.headers_sent:
            response.status(500).json(body)
        return

    if not response.headers_sent:
        response.status(500).json(config.internal_error_body)
    # Only unformatted errors travel on to the host
    raise error
