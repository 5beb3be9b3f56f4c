"""API router configuration.

RouterConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. The router swaps in a
new instance when the error formatter changes.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from apirouter._internal.types import ErrorFormatter
from apirouter.errors import ConfigurationError

DEFAULT_INTERNAL_SERVER_ERROR: dict[str, str] = {"error": "Internal server error"}


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router-wide dispatch settings. Override what you need::

        config = RouterConfig(silence_misuse_errors=True)
    """

    # Don't log RouterMisuseError diagnostics (the response event still fires)
    silence_misuse_errors: bool = False

    # (error, request, response) -> body | None, sync or async
    error_formatter: ErrorFormatter | None = None

    # Body for unformatted 500s; empty values fall back to DEFAULT_INTERNAL_SERVER_ERROR
    internal_server_error: Any = None

    @property
    def internal_error_body(self) -> Any:
        """The JSON body written for an unformatted internal error."""
        if not self.internal_server_error:
            return DEFAULT_INTERNAL_SERVER_ERROR
        return self.internal_server_error

    def with_options(self, **options: Any) -> RouterConfig:
        """Return a copy with *options* applied.

        Raises ``ConfigurationError`` for names that are not config fields.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = f"Unknown router option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return replace(self, **options)
