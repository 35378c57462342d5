from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "EntropyUnavailableError",
    "ErrorCatalogue",
    "ErrorKind",
    "SidecarError",
    "TransportError",
]


class ErrorKind(str, Enum):
    """Categories of failure the protocol loop distinguishes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    RESOURCE_UNAVAILABLE = "RESOURCE_UNAVAILABLE"
    UNKNOWN_TYPE = "UNKNOWN_TYPE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TRANSPORT = "TRANSPORT"


@dataclass(frozen=True)
class _ErrorSpec:
    kind: ErrorKind
    description: str
    message: str


class ErrorCatalogue:
    """Protocol error messages keyed by :class:`ErrorKind`.

    Messages may carry ``str.format`` fields, filled in by :meth:`message`.
    """

    _SPECS: tuple[_ErrorSpec, ...] = (
        _ErrorSpec(
            ErrorKind.INVALID_REQUEST,
            "Input line is not a valid request envelope",
            "invalid request: {detail}",
        ),
        _ErrorSpec(
            ErrorKind.INVALID_PAYLOAD,
            "Payload missing or not matching the handler schema",
            "invalid {message_type} payload",
        ),
        _ErrorSpec(
            ErrorKind.RESOURCE_UNAVAILABLE,
            "Secure random source could not supply bytes",
            "failed generating NFC ID",
        ),
        _ErrorSpec(
            ErrorKind.UNKNOWN_TYPE,
            "No handler registered for the request type",
            "unknown message type",
        ),
        _ErrorSpec(
            ErrorKind.INTERNAL_ERROR,
            "Handler raised an unexpected exception",
            "internal error",
        ),
        _ErrorSpec(
            ErrorKind.TRANSPORT,
            "Input stream failed; reported on stderr only",
            "stdin read error: {detail}",
        ),
    )

    _MESSAGES: dict[ErrorKind, str] = {spec.kind: spec.message for spec in _SPECS}

    @classmethod
    def message(cls, kind: ErrorKind, **fields: str) -> str:
        if kind not in cls._MESSAGES:
            raise KeyError(f"{kind} does not have a message mapping")
        return cls._MESSAGES[kind].format(**fields)

    @classmethod
    def invalid_request(cls, detail: str) -> str:
        """Return the wire message for an undecodable envelope."""

        return cls.message(ErrorKind.INVALID_REQUEST, detail=detail)

    @classmethod
    def invalid_payload(cls, message_type: str) -> str:
        """Return the handler-specific wire message for a bad payload."""

        return cls.message(ErrorKind.INVALID_PAYLOAD, message_type=message_type)


class SidecarError(Exception):
    """Base class for sidecar failures."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR


class TransportError(SidecarError):
    """The input stream failed or produced an unframeable line."""

    kind = ErrorKind.TRANSPORT


class EntropyUnavailableError(SidecarError):
    """The random source could not supply the requested bytes."""

    kind = ErrorKind.RESOURCE_UNAVAILABLE
