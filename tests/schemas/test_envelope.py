"""Envelope Schema — sparse JSON encoding, strict decoding, round-trips.

Tests cover:
    - code always emitted, every other empty field omitted
    - 2-space indentation and wire field order
    - round-trip for partial, full and nested envelopes
    - null fields decode as defaults, at every nesting level
    - DecodeError for invalid JSON, wrong shapes, excessive nesting
    - SerializationError for values with no JSON form, NaN and Infinity included
"""

import json

import pytest
from pydantic import ValidationError

from fake_service_db.core.errors import DecodeError, SerializationError
from fake_service_db.schemas.envelope import MAX_UPSTREAM_DEPTH, Envelope


def _full_envelope() -> Envelope:
    return Envelope(
        name="web",
        uri="http://web:9090",
        type="HTTP",
        ip_addresses=["10.0.0.4"],
        path=["ingress", "web"],
        start_time="2026-10-17T09:00:00.000001",
        end_time="2026-10-17T09:00:00.001235",
        duration="1.234ms",
        headers={"Content-Type": "application/json"},
        cookies={"session": "abc"},
        body={"nested": [1, 2.5, True, None]},
        upstream_calls={
            "http://customers:9090": Envelope(
                name="customers", body="Hello Alice Bob", code=200,
            ),
        },
        code=200,
        error="none",
    )


def _nested(depth: int) -> Envelope:
    envelope = Envelope(name="leaf", code=200)
    for level in range(depth):
        envelope = Envelope(name=f"hop{level}", upstream_calls={"next": envelope}, code=200)
    return envelope


# --- Sparse encoding ----------------------------------------------------------

def test_only_code_is_emitted_for_default_envelope():
    assert json.loads(Envelope().to_json()) == {"code": 0}


def test_code_only_envelope():
    assert json.loads(Envelope(code=200).to_json()) == {"code": 200}


def test_explicit_empty_collections_are_omitted():
    envelope = Envelope(ip_addresses=[], headers={}, upstream_calls={}, code=204)
    assert json.loads(envelope.to_json()) == {"code": 204}


def test_present_falsy_body_is_emitted():
    for body in ("", 0, False, [], {}):
        assert json.loads(Envelope(body=body, code=200).to_json())["body"] == body


def test_body_string_is_json_quoted():
    payload = Envelope(body="Hello Alice Bob", code=200).to_json()
    assert b'"body": "Hello Alice Bob"' in payload


def test_body_with_quotes_is_escaped():
    envelope = Envelope(body='pq: relation "customers" does not exist', code=500)
    assert json.loads(envelope.to_json())["body"] == 'pq: relation "customers" does not exist'


def test_two_space_indentation_and_field_order():
    text = Envelope(name="customers", body="hi", code=200).to_json().decode()
    assert text == '{\n  "name": "customers",\n  "body": "hi",\n  "code": 200\n}'


def test_nested_envelopes_are_sparse_too():
    data = json.loads(_full_envelope().to_json())
    assert data["upstream_calls"]["http://customers:9090"] == {
        "name": "customers", "body": "Hello Alice Bob", "code": 200,
    }


def test_error_follows_code():
    keys = list(json.loads(Envelope(code=500, error="boom").to_json()))
    assert keys == ["code", "error"]


# --- Round-trip ---------------------------------------------------------------

@pytest.mark.parametrize("envelope", [
    Envelope(),
    Envelope(code=200),
    Envelope(name="customers", start_time="2026-10-17T09:00:00.000001", code=500),
    Envelope(path=["a", "b"], body=["x", 1], code=201),
    _full_envelope(),
])
def test_round_trip(envelope):
    assert Envelope.from_json(envelope.to_json()) == envelope


def test_timestamps_round_trip_as_opaque_strings():
    envelope = Envelope(start_time="not a time", duration="forever", code=200)
    decoded = Envelope.from_json(envelope.to_json())
    assert decoded.start_time == "not a time"
    assert decoded.duration == "forever"


# --- Decoding -----------------------------------------------------------------

def test_decode_accepts_str_and_ignores_unknown_keys():
    envelope = Envelope.from_json('{"code": 200, "name": "web", "extra": 1}')
    assert envelope == Envelope(name="web", code=200)


def test_missing_code_decodes_as_zero():
    assert Envelope.from_json(b'{"name": "web"}').code == 0


@pytest.mark.parametrize("payload", [
    b"not json",
    b"",
    b'"OK"',
    b"[1, 2]",
    b'{"code": "200"}',
    b'{"code": 200.5}',
    b'{"code": true}',
    b'{"code": 200, "path": "a"}',
    b'{"code": 200, "headers": {"a": 1}}',
    b'{"code": 200, "upstream_calls": {"x": {"code": "bad"}}}',
])
def test_invalid_documents_raise_decode_error(payload):
    with pytest.raises(DecodeError):
        Envelope.from_json(payload)


def test_null_fields_decode_as_defaults():
    envelope = Envelope.from_json(
        b'{"name": null, "path": null, "body": null, "code": 200,'
        b' "upstream_calls": {"x": {"name": null, "code": 200}}}',
    )
    assert envelope == Envelope(upstream_calls={"x": Envelope(code=200)}, code=200)


def test_null_code_decodes_as_zero():
    assert Envelope.from_json(b'{"name": "web", "code": null}').code == 0


def test_null_inside_a_list_is_still_rejected():
    with pytest.raises(DecodeError, match="path"):
        Envelope.from_json(b'{"path": ["a", null], "code": 200}')


def test_decode_error_names_the_field():
    with pytest.raises(DecodeError, match="code"):
        Envelope.from_json(b'{"code": "200"}')


def test_decode_returns_fresh_envelope():
    first = Envelope.from_json(b'{"name": "a", "body": "x", "code": 200}')
    second = Envelope.from_json(b'{"code": 500}')
    assert second == Envelope(code=500)
    assert first.name == "a"


# --- Nesting ------------------------------------------------------------------

def test_nesting_depth():
    assert Envelope().nesting_depth() == 0
    assert _full_envelope().nesting_depth() == 1
    assert _nested(5).nesting_depth() == 5


def test_nesting_within_limit_decodes():
    envelope = _nested(MAX_UPSTREAM_DEPTH)
    assert Envelope.from_json(envelope.to_json()) == envelope


def test_nesting_beyond_limit_rejected():
    with pytest.raises(DecodeError, match="nested"):
        Envelope.from_json(_nested(4).to_json(), max_depth=3)


# --- Serialization failures and immutability ------------------------------------

def test_unserializable_body_raises_serialization_error():
    with pytest.raises(SerializationError):
        Envelope(body=object(), code=200).to_json()


def test_unserializable_nested_body_raises_serialization_error():
    envelope = Envelope(
        upstream_calls={"x": Envelope(body=object(), code=200)}, code=200,
    )
    with pytest.raises(SerializationError):
        envelope.to_json()


@pytest.mark.parametrize("body", [
    float("nan"),
    float("inf"),
    float("-inf"),
    [1, float("nan")],
    {"ratio": float("inf")},
])
def test_non_finite_body_raises_serialization_error(body):
    with pytest.raises(SerializationError, match="cannot encode envelope"):
        Envelope(body=body, code=200).to_json()


def test_non_finite_nested_body_raises_serialization_error():
    envelope = Envelope(
        upstream_calls={"x": Envelope(body=[1, float("nan")], code=200)},
        code=200,
    )
    with pytest.raises(SerializationError):
        envelope.to_json()


def test_non_ascii_body_is_written_as_utf8():
    payload = Envelope(body="Olá Zoë", code=200).to_json()
    assert "\"body\": \"Olá Zoë\"".encode("utf-8") in payload


def test_envelope_is_frozen():
    envelope = Envelope(code=200)
    with pytest.raises(ValidationError):
        envelope.code = 500
