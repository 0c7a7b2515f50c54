"""Library configuration — environment variables and derived constants.

Loads ``BOT_TOKEN``, ``BOT_API_SERVER_URL``, ``BOT_REQUEST_TIMEOUT``,
``BOT_DOWNLOAD_CHUNK_SIZE``, ``BOT_LOG_LEVEL`` and ``BOT_LOG_DIR`` from the
environment via ``python-dotenv``.  All values are resolved at import time
so other modules can ``from botconfig import …`` without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from botcore.logger import BotLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()

DEFAULT_SERVER_URL: str = "https://api.telegram.org"
DEFAULT_REQUEST_TIMEOUT: float = 100.0
DEFAULT_DOWNLOAD_CHUNK_SIZE: int = 64 * 1024


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_log_level(raw: str | None) -> int:
    """Map a level name such as ``"DEBUG"`` to its numeric value.

    Unknown names fall back to ``INFO``.
    """
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _parse_positive(raw: str | None, default: float, cast: type = float) -> tuple[float, bool]:
    """Parse *raw* as a positive number.

    Returns ``(value, ok)`` where *ok* is ``False`` when *raw* was set but
    unusable and *default* was substituted.
    """
    if raw is None or not raw.strip():
        return default, True
    try:
        value = cast(raw.strip())
    except ValueError:
        return default, False
    if value <= 0:
        return default, False
    return value, True


# ── Public constants ─────────────────────────────────────────────────────────

LOG_LEVEL: int = _parse_log_level(os.environ.get("BOT_LOG_LEVEL"))
LOG_DIR: str | None = os.environ.get("BOT_LOG_DIR") or None

# ── Logger (used for startup diagnostics at the bottom of this module) ───────
logger = BotLogger.get_logger(LOG_LEVEL, LOG_DIR)

BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN") or None
BOT_API_SERVER_URL: str = (os.environ.get("BOT_API_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/")

_raw_timeout = os.environ.get("BOT_REQUEST_TIMEOUT")
REQUEST_TIMEOUT, _timeout_ok = _parse_positive(_raw_timeout, DEFAULT_REQUEST_TIMEOUT)

_raw_chunk = os.environ.get("BOT_DOWNLOAD_CHUNK_SIZE")
_chunk, _chunk_ok = _parse_positive(_raw_chunk, DEFAULT_DOWNLOAD_CHUNK_SIZE, int)
DOWNLOAD_CHUNK_SIZE: int = int(_chunk)


# ── Startup diagnostics ─────────────────────────────────────────────────────

if BOT_TOKEN:
    logger.info("Config loaded — BOT_TOKEN is set", extra={"server_url": BOT_API_SERVER_URL})
else:
    logger.warning("Config loaded — BOT_TOKEN is NOT set")

if not _timeout_ok:
    logger.warning("Invalid BOT_REQUEST_TIMEOUT, using default", extra={"raw_value": _raw_timeout, "timeout": REQUEST_TIMEOUT})

if not _chunk_ok:
    logger.warning("Invalid BOT_DOWNLOAD_CHUNK_SIZE, using default", extra={"raw_value": _raw_chunk, "chunk_size": DOWNLOAD_CHUNK_SIZE})
