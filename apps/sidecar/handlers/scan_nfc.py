from __future__ import annotations

import logging

from apps.sidecar.errors import EntropyUnavailableError, ErrorCatalogue, ErrorKind
from apps.sidecar.models import ResponseEnvelope

from .context import HandlerContext

__all__ = ["MESSAGE_TYPE", "NFC_ID_BYTES", "handle_scan_nfc"]

MESSAGE_TYPE = "SCAN_NFC"
NFC_ID_BYTES = 4

LOGGER = logging.getLogger(__name__)


def handle_scan_nfc(
    request_id: str, payload: str | None, context: HandlerContext
) -> ResponseEnvelope:
    """Simulate a tag scan by returning a random 8-hex-digit id.

    Any payload is ignored. Ids are not tracked, so repeats are possible.
    """

    try:
        raw = context.random_source.read(NFC_ID_BYTES)
    except EntropyUnavailableError as exc:
        LOGGER.warning("Random source unavailable: %s", exc)
        return ResponseEnvelope.failure(
            request_id, ErrorCatalogue.message(ErrorKind.RESOURCE_UNAVAILABLE)
        )
    return ResponseEnvelope.success(request_id, {"id": raw.hex()})
