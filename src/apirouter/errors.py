"""apirouter exception hierarchy and failure classification.

Shared by the API router, the dispatcher and the host router so every
module raises and catches the same types.

Failures caught by the dispatcher are turned into a tagged ``Failure``
value by ``classify()`` and handled with an explicit ``match`` on the
``FailureKind``, one tier at a time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ApiRouterError(Exception):
    """Base for all apirouter-specific errors."""


class ConfigurationError(ApiRouterError):
    """Raised at registration time for malformed routes or methods."""


class RouterMisuseError(ApiRouterError):
    """A handler broke the return-value contract.

    Raised when the terminal handler of a chain returns nothing, or when
    a returned awaitable resolves after the response was already sent.
    Surfaced to operators, never to clients.
    """


class ApiError(ApiRouterError):
    """A deliberate, client-facing error.

    *data* becomes the JSON response body as is, so it may be a string,
    a mapping or a list::

        raise ApiError("not found", 404)
        raise ApiError({"field": "email", "reason": "taken"}, 409)

    A missing status code is answered with 500.
    """

    def __init__(self, data: Any, status_code: int | None = None) -> None:
        super().__init__(data)
        self.message = data
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.status_code}: {self.message}"
        return str(self.message)


class HeadersAlreadySent(ApiRouterError):  # noqa: N818
    """A response was committed twice."""


@dataclass(frozen=True, slots=True)
class HTTPError(ApiRouterError):
    """An error that maps directly to an HTTP status code.

    Raised by the host router when matching fails. The ASGI handler
    catches these and answers with the status as a plain-text body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class FailureKind(Enum):
    """The three tiers a dispatch failure can fall into."""

    MISUSE = "misuse"
    API = "api"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True, slots=True)
class Failure:
    """A classified dispatch failure: the tier plus the original error."""

    kind: FailureKind
    error: BaseException


def classify(exc: BaseException) -> Failure:
    """Tag *exc* with the tier it belongs to."""
    if isinstance(exc, RouterMisuseError):
        return Failure(FailureKind.MISUSE, exc)
    if isinstance(exc, ApiError):
        return Failure(FailureKind.API, exc)
    return Failure(FailureKind.UNCLASSIFIED, exc)
