from __future__ import annotations

import json

import pytest

from apps.sidecar.codec import decode_request, encode_response
from apps.sidecar.models import DecodeFailure, RequestEnvelope, ResponseEnvelope


def test_decode_request_keeps_payload_raw() -> None:
    decoded = decode_request(b'{"id":"1","type":"SET_PID","payload":{"pid":42}}')
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.id == "1"
    assert decoded.type == "SET_PID"
    assert decoded.payload == '{"pid":42}'


def test_decode_request_accepts_text() -> None:
    decoded = decode_request('{"id":"x","type":"LOGIN"}')
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.payload is None


def test_decode_request_defaults_missing_members() -> None:
    decoded = decode_request(b"{}")
    assert decoded == RequestEnvelope(id="", type="", payload=None)


def test_decode_request_keeps_null_payload_distinct_from_absent() -> None:
    decoded = decode_request(b'{"id":"1","type":"LOGIN","payload":null}')
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.payload == "null"


def test_decode_request_replaces_lone_surrogates() -> None:
    decoded = decode_request(
        b'{"id":"\\ud800","type":"LOGIN","payload":{"user":"a\\udfffb","\\ud83d":1}}'
    )
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.id == "\ufffd"
    assert json.loads(decoded.payload) == {"user": "a\ufffdb", "\ufffd": 1}


def test_decode_request_keeps_surrogate_pairs() -> None:
    decoded = decode_request(b'{"id":"\\ud83d\\ude00","type":"SCAN_NFC"}')
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.id == "\U0001f600"


def test_decode_request_ignores_unknown_members() -> None:
    decoded = decode_request(b'{"id":"1","type":"SCAN_NFC","extra":[1,2]}')
    assert isinstance(decoded, RequestEnvelope)
    assert decoded.type == "SCAN_NFC"


@pytest.mark.parametrize(
    "line",
    [
        b"not json",
        b'{"id":"1"',
        b"[1,2,3]",
        b'"just a string"',
        b"null",
        b'{"id":1,"type":"SET_PID"}',
        b'{"id":"1","type":true}',
        b'{"id":"1","type":"SET_PID","payload":NaN}',
        b"\xff\xfe{}",
    ],
)
def test_decode_request_reports_failures(line: bytes) -> None:
    decoded = decode_request(line)
    assert isinstance(decoded, DecodeFailure)
    assert decoded.detail


def test_decode_failure_names_json_type() -> None:
    decoded = decode_request(b"[]")
    assert decoded == DecodeFailure(detail="request must be a JSON object, got array")


def test_decode_failure_names_offending_member() -> None:
    decoded = decode_request(b'{"id":7}')
    assert isinstance(decoded, DecodeFailure)
    assert decoded.detail.startswith("id:")


def test_decode_request_survives_deep_nesting() -> None:
    line = b'{"id":"1","payload":' + b"[" * 100_000 + b"]" * 100_000 + b"}"
    assert isinstance(decode_request(line), DecodeFailure)


def test_encode_response_is_compact_and_ordered() -> None:
    envelope = ResponseEnvelope.success("1", {"message": "Handshake Successful"})
    assert encode_response(envelope) == (
        '{"id":"1","ok":true,"data":{"message":"Handshake Successful"}}'
    )


def test_encode_response_omits_data_on_failure() -> None:
    envelope = ResponseEnvelope.failure("5", "unknown message type")
    assert encode_response(envelope) == '{"id":"5","ok":false,"error":"unknown message type"}'


def test_encode_response_keeps_non_ascii() -> None:
    envelope = ResponseEnvelope.success("é", {"token": "mock.jwt.zoë.1"})
    encoded = encode_response(envelope)
    assert "zoë" in encoded
    assert json.loads(encoded)["id"] == "é"
