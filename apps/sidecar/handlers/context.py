from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from apps.sidecar.entropy import RandomSource, SystemRandomSource

__all__ = ["HandlerContext"]


@dataclass(frozen=True, slots=True)
class HandlerContext:
    """Capabilities handed to every handler call.

    Handlers read nothing else from the process, so tests swap in fakes here.
    """

    random_source: RandomSource = field(default_factory=SystemRandomSource)
    clock_ns: Callable[[], int] = time.time_ns
