"""Core utilities shared by the client library — currently structured logging.

This package is framework-agnostic. It must NEVER import from ``botapi/``.
"""

from botcore.logger import BotLogger

__all__ = [
    "BotLogger",
]
