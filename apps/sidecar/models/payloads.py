"""Per-handler payload schemas, parsed only once the handler is selected."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["HandlerPayload", "LoginPayload", "SetPidPayload"]

_PayloadT = TypeVar("_PayloadT", bound="HandlerPayload")


class HandlerPayload(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    @classmethod
    def from_raw(cls: type[_PayloadT], raw: str) -> _PayloadT:
        """Parse raw payload JSON; a JSON ``null`` yields the all-defaults payload."""

        if raw == "null":
            return cls()
        return cls.model_validate_json(raw)


class SetPidPayload(HandlerPayload):
    """Handshake payload; ``pid`` is accepted and otherwise ignored."""

    pid: int | None = None


class LoginPayload(HandlerPayload):
    user: str = ""
    password: str = Field(default="", alias="pass")

    @field_validator("user", "password", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return "" if value is None else value
