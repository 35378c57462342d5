from __future__ import annotations

import io
import pathlib
import sys

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from apps.sidecar.handlers import HandlerContext  # noqa: E402
from tests.helpers.sidecar_fakes import FixedClock, FixedRandomSource  # noqa: E402


@pytest.fixture(scope="session")
def repo_root() -> pathlib.Path:
    return REPO_ROOT


@pytest.fixture
def fixed_context() -> HandlerContext:
    return HandlerContext(
        random_source=FixedRandomSource(bytes.fromhex("deadbeef")),
        clock_ns=FixedClock(1_700_000_000_123_456_789),
    )


@pytest.fixture
def output_stream() -> io.BytesIO:
    return io.BytesIO()
