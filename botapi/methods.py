"""Typed request objects, one class per Bot API method.

Each request declares the API method name, the HTTP verb, and the type its
``result`` decodes into.  Field values become the JSON body; fields left at
``None`` are omitted.

Usage::

    from botapi.methods import SendMessageRequest

    message = await client.make_request(SendMessageRequest(chat_id=42, text="hi"))
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from botapi.models import BotCommand, File, Message, Update, User, WebhookInfo

TResult = TypeVar("TResult")


class BaseRequest(BaseModel, Generic[TResult]):
    """Base class for every API request.

    Subclasses set :attr:`method_name` and :attr:`result_type`; the verb
    defaults to ``POST``, which the API accepts for every method.
    """

    method_name: ClassVar[str]
    http_method: ClassVar[str] = "POST"
    result_type: ClassVar[Any] = Any

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Optional[Dict[str, Any]]:
        """Return the JSON-ready body, or ``None`` if there is nothing to send."""
        payload = self.model_dump(mode="json", exclude_none=True, by_alias=True)
        return payload or None


class GetMeRequest(BaseRequest[User]):
    """A simple method for testing your bot's auth token."""

    method_name: ClassVar[str] = "getMe"
    result_type: ClassVar[Any] = User


class GetFileRequest(BaseRequest[File]):
    """Get basic info about a file and prepare it for downloading."""

    method_name: ClassVar[str] = "getFile"
    result_type: ClassVar[Any] = File

    file_id: str


class GetUpdatesRequest(BaseRequest[List[Update]]):
    """Receive incoming updates using long polling."""

    method_name: ClassVar[str] = "getUpdates"
    result_type: ClassVar[Any] = List[Update]

    offset: Optional[int] = None
    limit: Optional[int] = None
    timeout: Optional[int] = None
    allowed_updates: Optional[List[str]] = None


class SendMessageRequest(BaseRequest[Message]):
    """Send a text message.  On success, the sent message is returned."""

    method_name: ClassVar[str] = "sendMessage"
    result_type: ClassVar[Any] = Message

    chat_id: Union[int, str]
    text: str
    parse_mode: Optional[str] = None
    disable_web_page_preview: Optional[bool] = None
    disable_notification: Optional[bool] = None
    reply_to_message_id: Optional[int] = None
    allow_sending_without_reply: Optional[bool] = None
    reply_markup: Optional[Dict[str, Any]] = None


class DeleteWebhookRequest(BaseRequest[bool]):
    """Remove webhook integration to switch back to getUpdates."""

    method_name: ClassVar[str] = "deleteWebhook"
    result_type: ClassVar[Any] = bool

    drop_pending_updates: Optional[bool] = None


class GetWebhookInfoRequest(BaseRequest[WebhookInfo]):
    """Get current webhook status."""

    method_name: ClassVar[str] = "getWebhookInfo"
    result_type: ClassVar[Any] = WebhookInfo


class SetMyCommandsRequest(BaseRequest[bool]):
    """Change the list of the bot's commands."""

    method_name: ClassVar[str] = "setMyCommands"
    result_type: ClassVar[Any] = bool

    commands: List[BotCommand]
