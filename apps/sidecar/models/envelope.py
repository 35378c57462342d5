"""Request and response envelopes for the sidecar line protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = ["DecodeFailure", "RequestEnvelope", "ResponseEnvelope"]


class RequestEnvelope(BaseModel):
    """Incoming request; ``payload`` stays raw JSON text until a handler parses it."""

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    id: str = Field(default="", description="Caller-supplied correlation id")
    type: str = Field(default="", description="Message type tag selecting the handler")
    payload: str | None = Field(default=None, description="Raw JSON payload, if supplied")


class ResponseEnvelope(BaseModel):
    """Outgoing response; exactly one of ``data``/``error`` is populated."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    ok: bool
    data: Any | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> ResponseEnvelope:
        if self.ok:
            if self.data is None or self.error is not None:
                raise ValueError("successful responses carry data and no error")
        elif not self.error or self.data is not None:
            raise ValueError("failed responses carry a non-empty error and no data")
        return self

    @classmethod
    def success(cls, request_id: str, data: Any) -> ResponseEnvelope:
        return cls(id=request_id, ok=True, data=data, error=None)

    @classmethod
    def failure(cls, request_id: str, error: str) -> ResponseEnvelope:
        return cls(id=request_id, ok=False, data=None, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire mapping with absent members omitted."""

        payload: dict[str, Any] = {"id": self.id, "ok": self.ok}
        if self.data is not None:
            payload["data"] = self.data
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """Outcome of a line that could not be decoded into a :class:`RequestEnvelope`."""

    detail: str
