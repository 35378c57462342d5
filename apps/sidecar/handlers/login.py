from __future__ import annotations

from pydantic import ValidationError

from apps.sidecar.errors import ErrorCatalogue
from apps.sidecar.models import LoginPayload, ResponseEnvelope

from .context import HandlerContext

__all__ = ["MESSAGE_TYPE", "TOKEN_PREFIX", "handle_login", "mock_token"]

MESSAGE_TYPE = "LOGIN"
TOKEN_PREFIX = "mock.jwt"


def mock_token(user: str, timestamp_ns: int) -> str:
    return f"{TOKEN_PREFIX}.{user}.{timestamp_ns}"


def handle_login(
    request_id: str, payload: str | None, context: HandlerContext
) -> ResponseEnvelope:
    """Issue a mock token for ``user``; ``pass`` is never checked."""

    if payload is None:
        return ResponseEnvelope.failure(request_id, ErrorCatalogue.invalid_payload(MESSAGE_TYPE))
    try:
        parsed = LoginPayload.from_raw(payload)
    except ValidationError:
        return ResponseEnvelope.failure(request_id, ErrorCatalogue.invalid_payload(MESSAGE_TYPE))
    token = mock_token(parsed.user, context.clock_ns())
    return ResponseEnvelope.success(request_id, {"token": token})
