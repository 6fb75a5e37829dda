"""Envelope Schema — the JSON document every chained fake service answers with.

Invariants:
    - Field order is the wire order: name ... upstream_calls, code, error
    - code is always emitted, even when 0
    - Every other field is omitted when empty; body is omitted only when absent
    - Envelopes are frozen: built once per request, never mutated after
    - Decoding is strict: "200" or 200.5 is not a valid code
    - A null field decodes as that field's default
    - NaN and Infinity have no JSON form: to_json() refuses them
    - from_json(to_json(e)) == e for every serializable envelope

Design Decisions:
    - Sparse encoding lives in a wrap model_serializer so nested upstream envelopes
      are filtered by the same rule at every depth
    - body is Any, not JsonValue: an unserializable body surfaces at to_json() as
      SerializationError instead of failing envelope construction
"""

import json
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, SerializerFunctionWrapHandler, ValidationError,
    model_serializer, model_validator,
)
from pydantic_core import PydanticSerializationError

from fake_service_db.core.errors import DecodeError, SerializationError

MAX_UPSTREAM_DEPTH = 32

_EMPTY = ("", [], {})


class Envelope(BaseModel):
    """Observable outcome of one service call, nesting across upstream hops."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    uri: str = ""
    type: str = ""
    ip_addresses: list[str] = []
    path: list[str] = []
    start_time: str = ""
    end_time: str = ""
    duration: str = ""
    headers: dict[str, str] = {}
    cookies: dict[str, str] = {}
    body: Any = None
    upstream_calls: dict[str, "Envelope"] = {}
    code: int = 0
    error: str = ""

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @model_serializer(mode="wrap")
    def omit_empty_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {
            key: value for key, value in data.items()
            if not _is_omitted(key, value)
        }

    def nesting_depth(self) -> int:
        """Levels of upstream_calls below this envelope (0 for a leaf)."""
        if not self.upstream_calls:
            return 0
        return 1 + max(
            child.nesting_depth() for child in self.upstream_calls.values()
        )

    def to_json(self) -> bytes:
        """Pretty-printed (2-space) sparse JSON; raises SerializationError."""
        try:
            data = self.model_dump()
            return json.dumps(
                data, indent=2, ensure_ascii=False, allow_nan=False,
            ).encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode envelope: {exc}") from exc

    @classmethod
    def from_json(
        cls, data: bytes | str, max_depth: int = MAX_UPSTREAM_DEPTH,
    ) -> "Envelope":
        """Decode a fresh envelope; raises DecodeError on bad JSON or shape."""
        try:
            envelope = cls.model_validate_json(data, strict=True)
        except ValidationError as exc:
            raise DecodeError(_describe(exc)) from exc

        depth = envelope.nesting_depth()
        if depth > max_depth:
            raise DecodeError(
                f"upstream_calls nested {depth} levels deep (limit {max_depth})",
            )
        return envelope


def _is_omitted(key: str, value: Any) -> bool:
    if key == "code":
        return False
    if key == "body":
        return value is None
    return value is None or value in _EMPTY


def _describe(exc: ValidationError) -> str:
    """First validation failure as 'location: message'."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if not location:
        return f"invalid envelope: {first['msg']}"
    return f"invalid envelope field {location}: {first['msg']}"
