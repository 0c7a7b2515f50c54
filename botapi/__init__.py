"""Typed Bot API client — request dispatch, response envelopes, errors, and file download.

The :class:`BotClient` class sends typed requests (see :mod:`botapi.methods`)
and returns Pydantic models.  API rejections raise
:class:`ApiRequestException` subclasses; transport and decoding problems raise
:class:`RequestException`.

Usage::

    from botapi import BotClient, ApiRequestException, RequestException
    from botapi.methods import GetUpdatesRequest
    from botapi.models import Update
"""

from botapi.client import BotClient, get_default_client
from botapi.credentials import BotCredentials
from botapi.exception_parser import DefaultExceptionParser, ExceptionParser
from botapi.exceptions import (
    ApiRequestException,
    BadRequestException,
    BotApiError,
    ConflictException,
    ForbiddenException,
    InvalidConfigurationError,
    NotFoundException,
    RequestException,
    TooManyRequestsException,
    UnauthorizedException,
)

__all__ = [
    "BotClient",
    "get_default_client",
    "BotCredentials",
    "ExceptionParser",
    "DefaultExceptionParser",
    "BotApiError",
    "InvalidConfigurationError",
    "RequestException",
    "ApiRequestException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "TooManyRequestsException",
]
