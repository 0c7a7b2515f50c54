"""BotClient -- request dispatcher and file retrieval for the Bot API.

Requests are typed :class:`~botapi.methods.BaseRequest` objects; results are
decoded into Pydantic models.  HTTP calls use a :class:`requests.Session`
whose blocking calls are offloaded via :func:`asyncio.to_thread`, so every
public operation is a coroutine and can be cancelled like any other task.

Usage::

    from botapi import BotClient
    from botapi.methods import SendMessageRequest

    async with BotClient("1234567:secret") as client:
        me = await client.get_me()
        await client.make_request(SendMessageRequest(chat_id=42, text="hi"))
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, BinaryIO, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from botapi.credentials import DEFAULT_SERVER_URL, BotCredentials
from botapi.events import ApiRequestEventArgs, ApiResponseEventArgs, EventHook
from botapi.exception_parser import DefaultExceptionParser, ExceptionParser
from botapi.exceptions import (
    ApiRequestException,
    InvalidConfigurationError,
    RequestException,
)
from botapi.methods import BaseRequest, GetFileRequest, GetMeRequest
from botapi.models import (
    ApiResponse,
    FailedApiResponse,
    File,
    SuccessfulApiResponse,
    User,
)

_logger = logging.getLogger("botapi.client")

TResult = TypeVar("TResult")
TModel = TypeVar("TModel", bound=BaseModel)

_REQUIRED_PROPERTIES_MISSING = "Required properties not found in response."


class BotClient:
    """A client for the Bot API.

    Attributes:
        making_api_request: Hook fired with :class:`ApiRequestEventArgs`
            before each request is sent.
        api_response_received: Hook fired with :class:`ApiResponseEventArgs`
            after each response arrives, before its body is inspected.
    """

    _DEFAULT_TIMEOUT: float = 100.0
    _DEFAULT_CHUNK_SIZE: int = 64 * 1024

    def __init__(
        self,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: float = _DEFAULT_TIMEOUT,
        exception_parser: Optional[ExceptionParser] = None,
        server_url: str = DEFAULT_SERVER_URL,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Create a new client for the bot identified by *token*.

        Args:
            token: Bot API token, ``"<bot id>:<secret>"``.
            session: Transport to use.  A private session is created (and
                closed by :meth:`close`) when omitted.
            timeout: Per-request timeout in seconds.
            exception_parser: Maps failed responses to exceptions; defaults to
                :class:`DefaultExceptionParser`.
            server_url: Root of the Bot API server, e.g. a self-hosted one.
            chunk_size: Read size used when streaming file downloads.

        Raises:
            InvalidConfigurationError: If *token* is malformed.
        """
        self._credentials = BotCredentials.from_token(token, server_url)
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.exception_parser = exception_parser if exception_parser is not None else DefaultExceptionParser()
        self._chunk_size = chunk_size

        self.making_api_request: EventHook[ApiRequestEventArgs] = EventHook()
        self.api_response_received: EventHook[ApiResponseEventArgs] = EventHook()

    # ------------------------------------------------------------------
    #  Configuration
    # ------------------------------------------------------------------

    @property
    def bot_id(self) -> int:
        """Numeric bot identity taken from the token."""
        return self._credentials.bot_id

    @property
    def timeout(self) -> float:
        return self._timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        if value is None or value <= 0:
            raise InvalidConfigurationError(f"timeout must be a positive number of seconds, got {value!r}")
        self._timeout = value

    @property
    def exception_parser(self) -> ExceptionParser:
        return self._exception_parser

    @exception_parser.setter
    def exception_parser(self, value: ExceptionParser) -> None:
        if value is None:
            raise TypeError("exception_parser must not be None")
        self._exception_parser = value

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    async def _send(self, method: str, url: str, api_endpoint: str, **kwargs: Any) -> requests.Response:
        """Run a blocking session call in a thread and wrap transport errors.

        Raises:
            RequestException: On any :mod:`requests` transport failure; the
                original error is chained as ``__cause__``.
        """
        try:
            return await asyncio.to_thread(
                self._session.request, method, url, timeout=self._timeout, **kwargs
            )
        except requests.RequestException as exc:
            _logger.error("Request transport error", extra={"api_endpoint": api_endpoint, "status_code": None, "error_code": None, "error": str(exc)})
            raise RequestException("Exception during making request") from exc

    async def _send_api_request(self, request: BaseRequest[Any]) -> tuple[requests.Response, ApiRequestEventArgs]:
        url = self._credentials.base_request_url + request.method_name
        payload = request.to_payload()

        request_args = ApiRequestEventArgs(request.method_name, payload)
        self.making_api_request.fire(request_args)

        _logger.debug("Sending request", extra={"api_endpoint": request.method_name, "status_code": None, "error_code": None, "http_method": request.http_method})
        response = await self._send(request.http_method, url, request.method_name, json=payload)
        return response, request_args

    @staticmethod
    def _decode(model: Type[TModel], response: requests.Response, status_code: int, api_endpoint: str) -> TModel:
        """Validate the response body against *model*.

        Raises:
            RequestException: If the body is not JSON or lacks a required field.
        """
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            _logger.error("Undecodable response body", extra={"api_endpoint": api_endpoint, "status_code": status_code, "error_code": None, "error": str(exc)})
            raise RequestException(_REQUIRED_PROPERTIES_MISSING, status_code, response.text) from exc

    # ------------------------------------------------------------------
    #  Request dispatch
    # ------------------------------------------------------------------

    async def make_request(self, request: BaseRequest[TResult]) -> TResult:
        """Send *request* and return its decoded ``result``.

        Raises:
            ApiRequestException: The API rejected the request; the concrete
                subclass is chosen by :attr:`exception_parser`.
            RequestException: The request could not be sent or the response
                could not be decoded.
        """
        response, request_args = await self._send_api_request(request)
        with response:
            # Frozen before observers see the response.
            status_code = response.status_code
            self.api_response_received.fire(ApiResponseEventArgs(response, request_args))

            if status_code != requests.codes.ok:
                failed = self._decode(FailedApiResponse, response, status_code, request.method_name)
                _logger.warning("API request rejected", extra={"api_endpoint": request.method_name, "status_code": status_code, "error_code": failed.error_code, "description": failed.description})
                raise self._exception_parser.parse(failed.error_code, failed.description, failed.parameters)

            successful = self._decode(
                SuccessfulApiResponse[request.result_type], response, status_code, request.method_name
            )
            _logger.debug("Request succeeded", extra={"api_endpoint": request.method_name, "status_code": status_code, "error_code": None})
            return successful.result

    async def send_request(self, request: BaseRequest[TResult]) -> ApiResponse[TResult]:
        """Send *request* and return the raw response envelope.

        API-level failures are returned as data (``ok`` is ``False``), not
        raised.

        Raises:
            RequestException: The request could not be sent or the response
                could not be decoded.
        """
        response, request_args = await self._send_api_request(request)
        with response:
            status_code = response.status_code
            self.api_response_received.fire(ApiResponseEventArgs(response, request_args))

            envelope = self._decode(ApiResponse[request.result_type], response, status_code, request.method_name)
            _logger.debug("Raw response received", extra={"api_endpoint": request.method_name, "status_code": status_code, "error_code": envelope.error_code, "ok": envelope.ok})
            return envelope

    async def get_me(self) -> User:
        """Return basic information about the bot."""
        return await self.make_request(GetMeRequest())

    async def test_api(self) -> bool:
        """Check whether the token is accepted by the API.

        Returns ``False`` when the API answers with error code 401, whatever
        exception type :attr:`exception_parser` builds for it; every other
        failure propagates.
        """
        try:
            await self.get_me()
        except ApiRequestException as exc:
            if exc.error_code != 401:
                raise
            _logger.info("Token rejected by API", extra={"api_endpoint": GetMeRequest.method_name, "status_code": None, "error_code": exc.error_code, "bot_id": self.bot_id})
            return False
        return True

    # ------------------------------------------------------------------
    #  File retrieval
    # ------------------------------------------------------------------

    async def _copy_to(self, response: requests.Response, destination: BinaryIO, file_path: str) -> int:
        """Copy the body chunk by chunk; only the reads leave the event loop.

        Writes happen on the loop between reads, so a cancelled download
        stops writing to *destination* at the next chunk boundary.
        """
        chunks = response.iter_content(chunk_size=self._chunk_size)
        written = 0
        while True:
            try:
                chunk = await asyncio.to_thread(next, chunks, None)
            except requests.RequestException as exc:
                _logger.error("File stream interrupted", extra={"api_endpoint": "file", "file_path": file_path, "status_code": response.status_code, "error_code": None, "error": str(exc)})
                raise RequestException("Exception during file download", response.status_code) from exc
            if chunk is None:
                return written
            if chunk:
                destination.write(chunk)
                written += len(chunk)

    async def download_file(self, file_path: str, destination: BinaryIO) -> None:
        """Stream the file at *file_path* into *destination*.

        Args:
            file_path: The ``file_path`` of a :class:`~botapi.models.File`.
            destination: Writable binary stream receiving the content.

        Raises:
            InvalidConfigurationError: Before any I/O, if *file_path* is empty
                or shorter than 2 characters, or *destination* is ``None``.
            RequestException: On transport failure or a non-2xx status.
        """
        if not isinstance(file_path, str) or not file_path.strip() or len(file_path) < 2:
            raise InvalidConfigurationError(f"Invalid file path: {file_path!r}")
        if destination is None:
            raise InvalidConfigurationError("destination must be provided")

        url = self._credentials.base_file_url + file_path
        response = await self._send("GET", url, "file", stream=True)
        with response:
            status_code = response.status_code
            if not 200 <= status_code < 300:
                _logger.error("File download failed", extra={"api_endpoint": "file", "file_path": file_path, "status_code": status_code, "error_code": None})
                raise RequestException("File download failed", status_code, response.text)

            written = await self._copy_to(response, destination, file_path)
            _logger.debug("File downloaded", extra={"api_endpoint": "file", "file_path": file_path, "status_code": status_code, "error_code": None, "bytes": written})

    async def get_info_and_download_file(self, file_id: str, destination: BinaryIO) -> File:
        """Resolve *file_id* via ``getFile``, then stream it into *destination*.

        Nothing is written if the ``getFile`` call fails.
        """
        file = await self.make_request(GetFileRequest(file_id=file_id))
        await self.download_file(file.file_path, destination)
        return file

    # ------------------------------------------------------------------
    #  Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "BotClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "BotClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"BotClient(bot_id={self.bot_id})"


# ─────────────────────────────────────────────────────────────────────────────
# A lazily-initialised module-level :class:`BotClient` built from the values
# in :mod:`botconfig`, for scripts that do not manage a client themselves.
# ─────────────────────────────────────────────────────────────────────────────

_default_client: BotClient | None = None


def get_default_client() -> BotClient:
    """Return (and lazily create) the module-level client singleton.

    Raises:
        InvalidConfigurationError: If ``BOT_TOKEN`` is missing or malformed.
    """
    global _default_client
    if _default_client is None:
        import botconfig  # deferred so importing the SDK never reads the environment

        _default_client = BotClient(
            botconfig.BOT_TOKEN,
            timeout=botconfig.REQUEST_TIMEOUT,
            server_url=botconfig.BOT_API_SERVER_URL,
            chunk_size=botconfig.DOWNLOAD_CHUNK_SIZE,
        )
    return _default_client
