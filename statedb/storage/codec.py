"""
JSON codec for state documents.

Decoding validates the raw bytes against StateDocument in one pass, so
malformed JSON and a wrongly shaped document fail the same way.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import JsonValue, TypeAdapter, ValidationError

from statedb.core.errors import DecodeError, EncodeError
from statedb.core.models import StateDocument


_json_value = TypeAdapter(JsonValue)


def _dump(obj: Any, indent: Optional[int] = None) -> bytes:
    return json.dumps(obj, indent=indent, ensure_ascii=False, allow_nan=False).encode("utf-8")


def decode(raw: bytes | str) -> StateDocument:
    """
    Parse a state document.

    Documents that parse but could not be written back, such as ones
    holding NaN/Infinity or lone surrogates, are rejected as well.

    Args:
        raw: JSON text or bytes

    Returns:
        The parsed document

    Raises:
        DecodeError: If the input is not JSON or not shaped like a state document
    """
    try:
        document = StateDocument.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Invalid state document: {e.error_count()} error(s)") from e
    try:
        _dump(document.to_dict())
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid state document: {e}") from e
    return document


def encode(document: StateDocument, indent: Optional[int] = 2) -> bytes:
    """
    Serialize a state document, omitting empty mappings.

    Raises:
        EncodeError: If any stored value is not JSON-representable
    """
    try:
        return _dump(document.to_dict(), indent=indent)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Failed to encode state document: {e}") from e


def validate_key(name: Any, kind: str = "key") -> str:
    """
    Check that an entity ID or key can be used as a JSON object key.

    Raises:
        EncodeError: If name is not a string encodable as UTF-8
    """
    if not isinstance(name, str):
        raise EncodeError(f"{kind} must be a string, not {type(name).__name__}: {name!r}")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeError(f"{kind} is not valid UTF-8: {name!r}") from e
    return name


def validate_value(value: Any) -> JsonValue:
    """
    Check that a value can be stored.

    Raises:
        EncodeError: If the value is not a JSON value
    """
    try:
        validated = _json_value.validate_python(value)
        _dump(validated)
    except (ValidationError, TypeError, ValueError) as e:
        raise EncodeError(f"Value is not JSON-representable: {value!r}") from e
    return validated
