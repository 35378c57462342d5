"""Random byte sources used by handlers."""

from __future__ import annotations

import secrets
from typing import Protocol

from .errors import EntropyUnavailableError

__all__ = ["RandomSource", "SystemRandomSource"]


class RandomSource(Protocol):
    """Narrow capability returning ``n`` random bytes."""

    def read(self, n: int) -> bytes:
        """Return exactly ``n`` bytes or raise :class:`EntropyUnavailableError`."""


class SystemRandomSource:
    """Operating system CSPRNG."""

    def read(self, n: int) -> bytes:
        try:
            data = secrets.token_bytes(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailableError(str(exc) or "random source unavailable") from exc
        if len(data) != n:
            raise EntropyUnavailableError(f"short read: wanted {n} bytes, got {len(data)}")
        return data
