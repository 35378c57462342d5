"""Dispatch table mapping message type tags to handler functions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from apps.sidecar.errors import ErrorCatalogue, ErrorKind
from apps.sidecar.models import RequestEnvelope, ResponseEnvelope

from .context import HandlerContext

__all__ = ["Handler", "HandlerRegistry"]

LOGGER = logging.getLogger(__name__)


class Handler(Protocol):
    def __call__(
        self, request_id: str, payload: str | None, context: HandlerContext
    ) -> ResponseEnvelope: ...


class HandlerRegistry:
    """Exact, case-sensitive lookup of handlers by ``type``."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def add(self, message_type: str, handler: Handler) -> None:
        if not message_type:
            raise ValueError("message_type must be a non-empty string")
        if message_type in self._handlers:
            raise ValueError(f"Handler already registered for '{message_type}'")
        self._handlers[message_type] = handler

    def register(self, message_type: str) -> Callable[[Handler], Handler]:
        def decorator(fn: Handler) -> Handler:
            self.add(message_type, fn)
            return fn

        return decorator

    def get(self, message_type: str) -> Handler | None:
        return self._handlers.get(message_type)

    def types(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def dispatch(self, request: RequestEnvelope, context: HandlerContext) -> ResponseEnvelope:
        handler = self._handlers.get(request.type)
        if handler is None:
            LOGGER.debug("No handler for message type %r", request.type)
            return ResponseEnvelope.failure(
                request.id, ErrorCatalogue.message(ErrorKind.UNKNOWN_TYPE)
            )
        return handler(request.id, request.payload, context)
