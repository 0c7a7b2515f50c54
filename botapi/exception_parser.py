"""Mapping from failed API envelopes to typed exceptions.

:class:`BotClient` delegates to an :class:`ExceptionParser` whenever the API
answers with a failure envelope.  Pass a custom implementation to the client
to introduce your own exception types.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Type

from botapi.exceptions import (
    ApiRequestException,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
    TooManyRequestsException,
    UnauthorizedException,
)
from botapi.models import ResponseParameters


class ExceptionParser(Protocol):
    """Turns ``(error_code, description, parameters)`` into an exception."""

    def parse(
        self,
        error_code: int,
        description: str,
        parameters: Optional[ResponseParameters] = None,
    ) -> ApiRequestException:
        """Build (but do not raise) the exception for a failed response."""


class DefaultExceptionParser:
    """Default error-code mapping.

    Codes without a dedicated subclass produce a plain
    :class:`ApiRequestException` carrying the raw code and description.
    """

    _BY_CODE: Dict[int, Type[ApiRequestException]] = {
        400: BadRequestException,
        401: UnauthorizedException,
        403: ForbiddenException,
        404: NotFoundException,
        409: ConflictException,
    }

    def parse(
        self,
        error_code: int,
        description: str,
        parameters: Optional[ResponseParameters] = None,
    ) -> ApiRequestException:
        if error_code == 429:
            retry_after = parameters.retry_after if parameters is not None else None
            return TooManyRequestsException(
                description, error_code, parameters, retry_after=retry_after
            )
        exc_type = self._BY_CODE.get(error_code, ApiRequestException)
        return exc_type(description, error_code, parameters)
