"""Bot token parsing and derived endpoint URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass

from botapi.exceptions import InvalidConfigurationError

DEFAULT_SERVER_URL = "https://api.telegram.org"

_BOT_ID_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class BotCredentials:
    """Immutable view of a bot token and the URLs derived from it.

    A valid token looks like ``"1234567:4TT8bAc8GHUspu3ERYn-KGcvsvGB9u_n4ddy"``;
    the numeric part before the first ``:`` is the bot's identity.  The
    token's authenticity is not checked locally — only a successful request
    proves it.
    """

    token: str
    bot_id: int
    base_request_url: str
    base_file_url: str

    @classmethod
    def from_token(cls, token: str | None, server_url: str = DEFAULT_SERVER_URL) -> "BotCredentials":
        """Parse *token* and derive ``<server>/bot<token>/`` style base URLs.

        Raises:
            InvalidConfigurationError: If *token* is not of the form
                ``<digits>:<secret>``.
        """
        if not isinstance(token, str):
            raise InvalidConfigurationError("Invalid token format: token must be a string")

        parts = token.split(":")
        if len(parts) < 2 or not _BOT_ID_RE.fullmatch(parts[0]):
            raise InvalidConfigurationError(
                'Invalid token format. A valid token looks like '
                '"1234567:4TT8bAc8GHUspu3ERYn-KGcvsvGB9u_n4ddy".'
            )

        server = server_url.rstrip("/")
        return cls(
            token=token,
            bot_id=int(parts[0]),
            base_request_url=f"{server}/bot{token}/",
            base_file_url=f"{server}/file/bot{token}/",
        )

    def __repr__(self) -> str:
        return f"BotCredentials(bot_id={self.bot_id}, token='{self.bot_id}:***')"
