"""Runtime settings resolved from defaults, environment and CLI flags."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum

from .framing import DEFAULT_MAX_LINE_BYTES

__all__ = ["LOG_LEVELS", "SidecarSettings", "ValidationMode"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

ENV_LOG_LEVEL = "SIDECAR_LOG_LEVEL"
ENV_MAX_LINE_BYTES = "SIDECAR_MAX_LINE_BYTES"
ENV_RESPONSE_VALIDATION = "SIDECAR_RESPONSE_VALIDATION"


class ValidationMode(Enum):
    OFF = "off"
    SHADOW = "shadow"

    @classmethod
    def from_str(cls, raw: str | None) -> ValidationMode:
        if not raw:
            return cls.OFF
        normalised = raw.strip().lower()
        for mode in cls:
            if mode.value == normalised:
                return mode
        raise ValueError(f"Unknown response validation mode: {raw!r}")


@dataclass(frozen=True, slots=True)
class SidecarSettings:
    """Process-wide configuration; read-only once the loop starts."""

    log_level: str = "WARN"
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES
    response_validation: ValidationMode = ValidationMode.OFF
    once: bool = False

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if self.max_line_bytes <= 0:
            raise ValueError("max_line_bytes must be a positive integer")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SidecarSettings:
        env = os.environ if environ is None else environ
        base = cls()
        raw_level = env.get(ENV_LOG_LEVEL)
        raw_max = env.get(ENV_MAX_LINE_BYTES)
        if raw_max:
            try:
                max_line_bytes = int(raw_max)
            except ValueError as exc:
                raise ValueError(f"{ENV_MAX_LINE_BYTES} must be an integer") from exc
        else:
            max_line_bytes = base.max_line_bytes
        return cls(
            log_level=raw_level.strip().upper() if raw_level else base.log_level,
            max_line_bytes=max_line_bytes,
            response_validation=ValidationMode.from_str(env.get(ENV_RESPONSE_VALIDATION)),
        )

    def with_overrides(
        self,
        *,
        log_level: str | None = None,
        max_line_bytes: int | None = None,
        response_validation: str | None = None,
        once: bool | None = None,
    ) -> SidecarSettings:
        """Return a copy where every non-``None`` argument replaces the current value."""

        changes: dict[str, object] = {}
        if log_level is not None:
            changes["log_level"] = log_level.upper()
        if max_line_bytes is not None:
            changes["max_line_bytes"] = max_line_bytes
        if response_validation is not None:
            changes["response_validation"] = ValidationMode.from_str(response_validation)
        if once is not None:
            changes["once"] = once
        return replace(self, **changes)
