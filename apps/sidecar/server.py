"""STDIO line-protocol server for the mock sidecar."""

from __future__ import annotations

import logging
import sys
import time
from typing import BinaryIO

from .codec import decode_request, encode_response
from .config import SidecarSettings, ValidationMode
from .errors import ErrorCatalogue, ErrorKind, TransportError
from .framing import iter_lines
from .handlers import HandlerContext, HandlerRegistry, create_default_registry
from .models import DecodeFailure, RequestEnvelope, ResponseEnvelope
from .observability import log_response
from .validation import ResponseShadowValidator

__all__ = ["SidecarStdioServer"]

LOGGER = logging.getLogger(__name__)


class SidecarStdioServer:
    """Read one request line, answer with one response line, repeat."""

    def __init__(
        self,
        *,
        registry: HandlerRegistry | None = None,
        context: HandlerContext | None = None,
        settings: SidecarSettings | None = None,
        input_stream: BinaryIO | None = None,
        output_stream: BinaryIO | None = None,
        shadow_validator: ResponseShadowValidator | None = None,
    ) -> None:
        self._registry = create_default_registry() if registry is None else registry
        self._context = context or HandlerContext()
        self._settings = settings or SidecarSettings()
        self._input = input_stream or sys.stdin.buffer
        self._output = output_stream or sys.stdout.buffer
        if shadow_validator is None and self._settings.response_validation is ValidationMode.SHADOW:
            shadow_validator = ResponseShadowValidator()
        self._shadow_validator = shadow_validator

    def serve_forever(self) -> int:
        """Run until end-of-stream or a transport failure; return responses written."""

        written = 0
        try:
            for line in iter_lines(self._input, max_line_bytes=self._settings.max_line_bytes):
                self.write_response(self.process_line(line))
                written += 1
                if self._settings.once:
                    break
        except TransportError as exc:
            LOGGER.error("%s", ErrorCatalogue.message(ErrorKind.TRANSPORT, detail=str(exc)))
        return written

    def process_line(self, raw_line: bytes | str) -> ResponseEnvelope:
        """Decode one framed line and resolve it to a response."""

        started = time.perf_counter()
        decoded = decode_request(raw_line)
        if isinstance(decoded, DecodeFailure):
            response = ResponseEnvelope.failure("", ErrorCatalogue.invalid_request(decoded.detail))
            self._log(response, None, started)
            return response
        response = self.handle_request(decoded)
        self._log(response, decoded.type, started)
        return response

    def handle_request(self, request: RequestEnvelope) -> ResponseEnvelope:
        try:
            return self._registry.dispatch(request, self._context)
        except Exception:
            LOGGER.exception("Unhandled error in %s handler", request.type)
            return ResponseEnvelope.failure(
                request.id, ErrorCatalogue.message(ErrorKind.INTERNAL_ERROR)
            )

    def write_response(self, response: ResponseEnvelope) -> None:
        if self._shadow_validator is not None:
            self._shadow_validator.check(response.to_dict())
        # Unpaired surrogates cannot be encoded as UTF-8; they are written as "?".
        data = (encode_response(response) + "\n").encode("utf-8", "replace")
        try:
            self._output.write(data)
            self._output.flush()
        except OSError as exc:
            LOGGER.error("stdout write error: %s", exc)

    def _log(self, response: ResponseEnvelope, message_type: str | None, started: float) -> None:
        log_response(
            response,
            message_type=message_type,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
