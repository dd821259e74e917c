"""Shared JSON serialization for metrics records.

This module converts records to and from JSON-safe payloads.
It is reused by the document decoder, the warehouse sink and the
file-export sink so every destination sees identical rows.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import datetime
import json
from types import UnionType
from typing import Any, Mapping, Union, get_args, get_origin, get_type_hints

from core.records import (
    ImageEventUnion,
    LeaseEventUnion,
    PassThroughRecord,
    format_timestamp,
    parse_timestamp,
)


def record_to_payload(record: object) -> dict[str, Any]:
    """Serialize a record into a JSON-safe payload.

    Unset union fields are omitted, never written as null or zero.

    Args:
        record: Union or pass-through record.

    Returns:
        Dictionary payload for JSON encoding.

    Raises:
        TypeError: If the record type is unknown.
    """
    if isinstance(record, PassThroughRecord):
        return dict(record.payload)
    if isinstance(record, (LeaseEventUnion, ImageEventUnion)):
        return {
            item.name: _to_json_value(getattr(record, item.name))
            for item in fields(record)
            if getattr(record, item.name) is not None
        }
    raise TypeError(f"Unsupported record type {type(record).__name__}")


def record_to_json_line(record: object) -> str:
    """Serialize one record as a compact JSON line (no trailing newline).

    Raises:
        ValueError: If the record holds NaN or infinite floats.
    """
    return json.dumps(record_to_payload(record), separators=(",", ":"), allow_nan=False)


def union_record_from_payload(record_type: type, payload: Mapping[str, Any]) -> Any:
    """Build a union record from its JSON object.

    Unknown keys are ignored; null and missing keys stay unset.

    Args:
        record_type: LeaseEventUnion or ImageEventUnion.
        payload: Decoded JSON object.

    Returns:
        Populated union record.

    Raises:
        ValueError: If a field value does not match its declared type.
    """
    hints = get_type_hints(record_type)
    values: dict[str, Any] = {}
    for item in fields(record_type):
        raw_value = payload.get(item.name)
        if raw_value is None:
            continue
        values[item.name] = _from_json_value(item.name, hints[item.name], raw_value)
    return record_type(**values)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, Mapping):
        return dict(value)
    return value


def _from_json_value(name: str, annotation: Any, raw_value: Any) -> Any:
    """Coerce one JSON value to the field's declared scalar type."""
    expected = strip_optional(annotation)
    expected = get_origin(expected) or expected
    if expected is datetime:
        if not isinstance(raw_value, str):
            raise ValueError(f"field '{name}' expected RFC 3339 string, got {raw_value!r}")
        try:
            return parse_timestamp(raw_value)
        except ValueError as error:
            raise ValueError(f"field '{name}' has invalid timestamp {raw_value!r}") from error
    if expected is bool:
        if not isinstance(raw_value, bool):
            raise ValueError(f"field '{name}' expected boolean, got {raw_value!r}")
        return raw_value
    if expected is int:
        if isinstance(raw_value, bool) or not isinstance(raw_value, int):
            raise ValueError(f"field '{name}' expected integer, got {raw_value!r}")
        return raw_value
    if expected is float:
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            raise ValueError(f"field '{name}' expected number, got {raw_value!r}")
        return float(raw_value)
    if expected is str:
        if not isinstance(raw_value, str):
            raise ValueError(f"field '{name}' expected string, got {raw_value!r}")
        return raw_value
    if not isinstance(raw_value, dict):
        raise ValueError(f"field '{name}' expected object, got {raw_value!r}")
    return raw_value


def strip_optional(annotation: Any) -> Any:
    """Return the non-None member of an optional annotation."""
    if get_origin(annotation) in (Union, UnionType):
        members = [member for member in get_args(annotation) if member is not type(None)]
        return members[0]
    return annotation
