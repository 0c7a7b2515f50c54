"""Pydantic models for the Bot API response envelope and common result types.

The envelope models define what a decodable answer looks like: a required
field that is absent (or a body that is not JSON at all) makes validation
fail, which the client reports as a :class:`~botapi.exceptions.RequestException`.
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# ── Envelope ─────────────────────────────────────────────────────────────────


class ResponseParameters(BaseModel):
    """Contains information about why a request was unsuccessful."""

    migrate_to_chat_id: Optional[int] = None
    retry_after: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SuccessfulApiResponse(BaseModel, Generic[T]):
    """``{"ok": true, "result": …}``"""

    ok: bool
    result: T

    model_config = ConfigDict(populate_by_name=True)


class FailedApiResponse(BaseModel):
    """``{"ok": false, "error_code": …, "description": …, "parameters": …}``"""

    ok: bool = False
    error_code: int
    description: str
    parameters: Optional[ResponseParameters] = None

    model_config = ConfigDict(populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Raw envelope returned by :meth:`BotClient.send_request`.

    Only ``ok`` is required; the remaining fields are populated according to
    its value.  Nothing is raised for ``ok == False``.
    """

    ok: bool
    result: Optional[T] = None
    error_code: Optional[int] = None
    description: Optional[str] = None
    parameters: Optional[ResponseParameters] = None

    model_config = ConfigDict(populate_by_name=True)


# ── Result types ─────────────────────────────────────────────────────────────


class User(BaseModel):
    """This object represents a Telegram user or bot."""

    id: int
    is_bot: bool
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None
    can_join_groups: Optional[bool] = None
    can_read_all_group_messages: Optional[bool] = None
    supports_inline_queries: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True)


class Chat(BaseModel):
    """This object represents a chat."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class Message(BaseModel):
    """This object represents a message."""

    message_id: int
    date: int
    chat: Chat
    from_field: Optional[User] = Field(default=None, alias="from")
    sender_chat: Optional[Chat] = None
    text: Optional[str] = None
    caption: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class Update(BaseModel):
    """This object represents an incoming update."""

    update_id: int
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class File(BaseModel):
    """This object represents a file ready to be downloaded.

    The file can be downloaded via ``<server>/file/bot<token>/<file_path>``.
    """

    file_id: str
    file_unique_id: str
    file_size: Optional[int] = None
    file_path: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class WebhookInfo(BaseModel):
    """Contains information about the current status of a webhook."""

    url: str
    has_custom_certificate: bool
    pending_update_count: int
    ip_address: Optional[str] = None
    last_error_date: Optional[int] = None
    last_error_message: Optional[str] = None
    max_connections: Optional[int] = None
    allowed_updates: Optional[List[str]] = None

    model_config = ConfigDict(populate_by_name=True)


class BotCommand(BaseModel):
    """This object represents a bot command."""

    command: str
    description: str

    model_config = ConfigDict(populate_by_name=True)
