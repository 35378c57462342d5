"""Envelope decoding and encoding for the line protocol."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from .models import DecodeFailure, RequestEnvelope, ResponseEnvelope

__all__ = ["decode_request", "dumps_compact", "encode_response"]

_JSON_TYPE_NAMES = {
    list: "array",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


def dumps_compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _replace_surrogates(value: Any) -> Any:
    """Swap unpaired UTF-16 surrogates left by JSON escapes for U+FFFD."""

    if isinstance(value, str):
        return _LONE_SURROGATE.sub("\ufffd", value)
    if isinstance(value, list):
        return [_replace_surrogates(item) for item in value]
    if isinstance(value, dict):
        return {
            _replace_surrogates(key): _replace_surrogates(item) for key, item in value.items()
        }
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name!r}")


def _describe_validation(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "request"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def decode_request(line: bytes | str) -> RequestEnvelope | DecodeFailure:
    """Decode one framed line into a request envelope.

    Failures are returned as :class:`DecodeFailure` rather than raised so the
    caller can still answer the line.
    """

    if isinstance(line, bytes):
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            return DecodeFailure(detail=f"invalid UTF-8: {exc}")
    else:
        text = line

    try:
        message = _replace_surrogates(json.loads(text, parse_constant=_reject_constant))
    except RecursionError:
        return DecodeFailure(detail="JSON nesting too deep")
    except ValueError as exc:
        return DecodeFailure(detail=str(exc))

    if not isinstance(message, dict):
        kind = _JSON_TYPE_NAMES.get(type(message), type(message).__name__)
        return DecodeFailure(detail=f"request must be a JSON object, got {kind}")

    fields: dict[str, Any] = {
        key: message[key] for key in ("id", "type") if message.get(key) is not None
    }
    if "payload" in message:
        fields["payload"] = dumps_compact(message["payload"])

    try:
        return RequestEnvelope.model_validate(fields)
    except ValidationError as exc:
        return DecodeFailure(detail=_describe_validation(exc))


def encode_response(envelope: ResponseEnvelope) -> str:
    """Serialise a response envelope to compact JSON without a delimiter."""

    return dumps_compact(envelope.to_dict())
