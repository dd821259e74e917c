"""Metrics document decoding.

This module parses the raw bytes of a metrics file into a typed
MetricsDocument. Malformed JSON and shape mismatches are fatal.
"""

from __future__ import annotations

import json
from typing import Any

from core.categories import CATEGORIES, Category
from core.errors import CiMetricsDecodeError
from core.records import MetricsDocument
from store.record_payload import union_record_from_payload


def decode_metrics_document(data: bytes | str) -> MetricsDocument:
    """Decode a metrics file.

    Args:
        data: Raw JSON bytes or text.

    Returns:
        Immutable metrics document; absent or null categories are empty.

    Raises:
        CiMetricsDecodeError: If the JSON is malformed or does not match
            the metrics document shape.
    """
    try:
        payload = json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as error:
        raise CiMetricsDecodeError(f"failed to decode metrics JSON: {error}") from error
    if not isinstance(payload, dict):
        raise CiMetricsDecodeError(
            f"failed to decode metrics JSON: expected object at top level, "
            f"got {type(payload).__name__}"
        )
    values: dict[str, tuple[Any, ...]] = {}
    for category in CATEGORIES:
        raw_records = payload.get(category.attribute)
        if raw_records is None:
            continue
        if not isinstance(raw_records, list):
            raise CiMetricsDecodeError(
                f"failed to decode metrics JSON: '{category.attribute}' must be a list, "
                f"got {type(raw_records).__name__}"
            )
        values[category.attribute] = tuple(
            _decode_record(category, index, raw_record)
            for index, raw_record in enumerate(raw_records)
        )
    return MetricsDocument(**values)


def _reject_constant(constant: str) -> Any:
    """Reject NaN and Infinity, which are not valid JSON."""
    raise ValueError(f"invalid JSON constant {constant}")

def _decode_record(category: Category, index: int, raw_record: Any) -> Any:
    """Decode one record of a category."""
    location = f"{category.attribute}[{index}]"
    if not isinstance(raw_record, dict):
        raise CiMetricsDecodeError(
            f"failed to decode metrics JSON: {location} must be an object, "
            f"got {type(raw_record).__name__}"
        )
    if category.is_pass_through:
        return category.record_type(payload=raw_record)
    try:
        return union_record_from_payload(category.record_type, raw_record)
    except ValueError as error:
        raise CiMetricsDecodeError(f"failed to decode metrics JSON: {location}: {error}") from error
