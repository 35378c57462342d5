"""Property-based checks for decoder survival and handler invariants."""

from __future__ import annotations

import io
import json
import re

from hypothesis import given, settings
from hypothesis import strategies as st

from apps.sidecar.codec import decode_request
from apps.sidecar.framing import iter_lines
from apps.sidecar.handlers import HandlerContext, create_default_registry
from apps.sidecar.handlers.login import handle_login
from apps.sidecar.handlers.scan_nfc import handle_scan_nfc
from apps.sidecar.handlers.set_pid import handle_set_pid
from apps.sidecar.models import DecodeFailure, RequestEnvelope
from apps.sidecar.server import SidecarStdioServer
from tests.helpers.sidecar_fakes import FixedClock, FixedRandomSource

_CONTEXT = HandlerContext(
    random_source=FixedRandomSource(b"\x01\x02\x03\x04"), clock_ns=FixedClock(42)
)
_KNOWN_TYPES = ("SET_PID", "SCAN_NFC", "LOGIN")
# Lone surrogates are replaced on decode, so they cannot round-trip.
_TEXT = st.text(alphabet=st.characters(exclude_categories=("Cs",)))


def _framed(line: bytes) -> list[bytes]:
    return list(iter_lines(io.BytesIO(line + b"\n")))


@given(st.binary(min_size=1, max_size=200).filter(lambda b: b.strip() and b"\n" not in b))
@settings(max_examples=200)
def test_undecodable_lines_fail_with_empty_id_and_loop_survives(line: bytes) -> None:
    framed = _framed(line)
    if not framed or isinstance(decode_request(framed[0]), RequestEnvelope):
        return
    output = io.BytesIO()
    follow_up = b'{"id":"next","type":"SET_PID"}'
    SidecarStdioServer(
        context=_CONTEXT,
        input_stream=io.BytesIO(line + b"\n" + follow_up + b"\n"),
        output_stream=output,
    ).serve_forever()
    first, second = (json.loads(item) for item in output.getvalue().splitlines())
    assert first["ok"] is False
    assert first["id"] == ""
    assert first["error"]
    assert second == {"id": "next", "ok": True, "data": {"message": "Handshake Successful"}}


@given(st.one_of(st.none(), st.integers()))
def test_set_pid_always_succeeds_for_integer_pids(pid: int | None) -> None:
    payload = None if pid is None else json.dumps({"pid": pid})
    response = handle_set_pid("p", payload, _CONTEXT)
    assert response.ok is True
    assert response.data == {"message": "Handshake Successful"}


@given(st.binary(min_size=4, max_size=4))
def test_scan_nfc_id_is_eight_lowercase_hex(raw: bytes) -> None:
    context = HandlerContext(random_source=FixedRandomSource(raw))
    response = handle_scan_nfc("s", None, context)
    assert re.fullmatch(r"[0-9a-f]{8}", response.data["id"])


@given(_TEXT, _TEXT)
def test_login_token_embeds_user_literally(user: str, password: str) -> None:
    response = handle_login("l", json.dumps({"user": user, "pass": password}), _CONTEXT)
    assert response.ok is True
    assert response.data == {"token": f"mock.jwt.{user}.42"}


@given(_TEXT, _TEXT.filter(lambda value: value not in _KNOWN_TYPES))
def test_unknown_types_echo_id(request_id: str, message_type: str) -> None:
    response = create_default_registry().dispatch(
        RequestEnvelope(id=request_id, type=message_type), _CONTEXT
    )
    assert response.to_dict() == {"id": request_id, "ok": False, "error": "unknown message type"}


@given(_TEXT, st.sampled_from(_KNOWN_TYPES))
def test_decoded_ids_are_echoed(request_id: str, message_type: str) -> None:
    line = json.dumps({"id": request_id, "type": message_type, "payload": {}})
    decoded = decode_request(line)
    assert not isinstance(decoded, DecodeFailure)
    response = create_default_registry().dispatch(decoded, _CONTEXT)
    assert response.id == request_id
