"""Observation hooks fired by :class:`~botapi.client.BotClient`.

Handlers are plain callables invoked synchronously, in subscription order,
at fixed points of the request pipeline.  Their return values are ignored
and their exceptions are not caught.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import requests

TArgs = TypeVar("TArgs")


@dataclass(frozen=True)
class ApiRequestEventArgs:
    """Passed to ``making_api_request`` handlers before a request is sent."""

    method_name: str
    payload: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ApiResponseEventArgs:
    """Passed to ``api_response_received`` handlers once a response arrives.

    ``api_request_event_args`` is the same object the matching
    ``making_api_request`` handlers received.
    """

    response: requests.Response
    api_request_event_args: ApiRequestEventArgs


class EventHook(Generic[TArgs]):
    """A multicast list of handlers.

    Usage::

        client.making_api_request += lambda args: print(args.method_name)
    """

    def __init__(self) -> None:
        self._handlers: List[Callable[[TArgs], Any]] = []

    def subscribe(self, handler: Callable[[TArgs], Any]) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: Callable[[TArgs], Any]) -> None:
        """Remove one registration of *handler*; unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def __iadd__(self, handler: Callable[[TArgs], Any]) -> "EventHook[TArgs]":
        self.subscribe(handler)
        return self

    def __isub__(self, handler: Callable[[TArgs], Any]) -> "EventHook[TArgs]":
        self.unsubscribe(handler)
        return self

    def __len__(self) -> int:
        return len(self._handlers)

    def fire(self, args: TArgs) -> None:
        # Iterate over a snapshot so handlers may unsubscribe themselves.
        for handler in list(self._handlers):
            handler(args)
