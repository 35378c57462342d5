"""Newline framing over a binary input stream."""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

from .errors import TransportError

__all__ = ["DEFAULT_MAX_LINE_BYTES", "iter_lines"]

DEFAULT_MAX_LINE_BYTES = 64 * 1024


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def iter_lines(
    stream: BinaryIO, *, max_line_bytes: int = DEFAULT_MAX_LINE_BYTES
) -> Iterator[bytes]:
    """Yield trimmed, non-blank lines from ``stream`` until end-of-stream.

    Raises :class:`TransportError` when the stream fails or a line exceeds
    ``max_line_bytes`` (terminator excluded). A final unterminated line is
    still yielded.
    """

    if max_line_bytes <= 0:
        raise ValueError("max_line_bytes must be a positive integer")

    while True:
        try:
            raw = stream.readline(max_line_bytes + 2)
        except (OSError, ValueError) as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        if not raw:
            return
        content = _strip_terminator(raw)
        if len(content) > max_line_bytes:
            raise TransportError("token too long")
        # Trim Unicode whitespace; undecodable bytes pass through for the decoder.
        text = content.decode("utf-8", "surrogateescape").strip()
        if not text:
            continue
        yield text.encode("utf-8", "surrogateescape")
