from __future__ import annotations

import logging

from pydantic import ValidationError

from apps.sidecar.errors import ErrorCatalogue
from apps.sidecar.models import ResponseEnvelope, SetPidPayload

from .context import HandlerContext

__all__ = ["MESSAGE_TYPE", "handle_set_pid"]

MESSAGE_TYPE = "SET_PID"
HANDSHAKE_MESSAGE = "Handshake Successful"

LOGGER = logging.getLogger(__name__)


def handle_set_pid(
    request_id: str, payload: str | None, context: HandlerContext
) -> ResponseEnvelope:
    """Acknowledge the frontend handshake. The pid is not stored."""

    if payload is not None:
        try:
            parsed = SetPidPayload.from_raw(payload)
        except ValidationError:
            return ResponseEnvelope.failure(
                request_id, ErrorCatalogue.invalid_payload(MESSAGE_TYPE)
            )
        LOGGER.debug("Handshake from pid %s", parsed.pid)
    return ResponseEnvelope.success(request_id, {"message": HANDSHAKE_MESSAGE})
