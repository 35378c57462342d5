"""Data models used by the sidecar protocol loop."""

from .envelope import DecodeFailure, RequestEnvelope, ResponseEnvelope
from .payloads import LoginPayload, SetPidPayload

__all__ = [
    "DecodeFailure",
    "LoginPayload",
    "RequestEnvelope",
    "ResponseEnvelope",
    "SetPidPayload",
]
