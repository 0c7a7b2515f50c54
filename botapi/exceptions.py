"""Exception hierarchy for the Bot API client.

Two families hang off :class:`BotApiError` and never subclass one another:

* :class:`RequestException` — the API's answer could not be obtained or
  interpreted (network failure, undecodable body, failed file download).
* :class:`ApiRequestException` — the API answered with a structured
  rejection.  Subclasses name the actionable kinds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from botapi.models import ResponseParameters


class BotApiError(Exception):
    """Root of every exception raised by this library."""


class InvalidConfigurationError(BotApiError, ValueError):
    """A caller-supplied value (token, file path, destination) is unusable."""


class RequestException(BotApiError):
    """Transport or protocol failure below the API semantic layer.

    Attributes:
        http_status_code: HTTP status code, or ``None`` when no response was
            received at all.
        body: Raw response body text, when available.

    The underlying transport error, if any, is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        http_status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.message = message
        self.http_status_code = http_status_code
        self.body = body
        super().__init__(message)

    def __str__(self) -> str:
        if self.http_status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.http_status_code})"


class ApiRequestException(BotApiError):
    """Error reported by the API through a failed response envelope.

    Raised as-is for error codes without a dedicated subclass.

    Attributes:
        description: Human-readable description returned by the API.
        error_code: Numeric error code returned by the API.
        parameters: Optional structured hints (``retry_after``,
            ``migrate_to_chat_id`` …).
    """

    def __init__(
        self,
        description: str,
        error_code: int,
        parameters: Optional["ResponseParameters"] = None,
    ) -> None:
        self.description = description
        self.error_code = error_code
        self.parameters = parameters
        super().__init__(f"API error {error_code}: {description}")


class BadRequestException(ApiRequestException):
    """HTTP 400 — malformed or semantically invalid request."""


class UnauthorizedException(ApiRequestException):
    """HTTP 401 — the bot token was rejected."""


class ForbiddenException(ApiRequestException):
    """HTTP 403 — e.g. the bot was blocked or kicked from the chat."""


class NotFoundException(ApiRequestException):
    """HTTP 404 — unknown method or object."""


class ConflictException(ApiRequestException):
    """HTTP 409 — e.g. a webhook is active while polling, or two pollers run."""


class TooManyRequestsException(ApiRequestException):
    """HTTP 429 — flood control.

    Attributes:
        retry_after: Seconds to wait before repeating the request, if the
            API supplied it.  The library never retries on its own.
    """

    def __init__(
        self,
        description: str,
        error_code: int = 429,
        parameters: Optional["ResponseParameters"] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        super().__init__(description, error_code, parameters)
        self.retry_after = retry_after
