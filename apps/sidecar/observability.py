"""Per-request log records for the sidecar."""

from __future__ import annotations

import json
import logging
from typing import Any

from .models import ResponseEnvelope

LOGGER_NAME = "sidecar.requests"

logger = logging.getLogger(LOGGER_NAME)


def log_response(
    response: ResponseEnvelope, *, message_type: str | None, duration_ms: float
) -> None:
    """Log the outcome of one request line as a single JSON object.

    Decode failures have no ``type``. The record mirrors the response
    envelope's ``id``/``ok``/``error`` so stderr lines can be matched with
    stdout lines.
    """

    if not logger.isEnabledFor(logging.INFO):
        return
    record: dict[str, Any] = {
        "id": response.id,
        "ok": response.ok,
        "type": message_type,
        "duration_ms": duration_ms,
    }
    if response.error is not None:
        record["error"] = response.error
    logger.info(json.dumps(record, sort_keys=True, ensure_ascii=False))
