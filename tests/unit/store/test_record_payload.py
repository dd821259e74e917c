"""Unit tests for record payload serialization."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from core.records import ImageEventUnion, LeaseEventUnion, NodeEvent
from store.record_payload import (
    record_to_json_line,
    record_to_payload,
    union_record_from_payload,
)


def test_acquisition_lease_omits_release_fields() -> None:
    """Unset release-side fields must not appear in serialized output."""
    lease = LeaseEventUnion(
        name="aws-quota-slice",
        acquisition_duration_seconds=12.5,
        leases_remaining_at_acquisition=3,
        timestamp=datetime(2025, 3, 1, 9, 59, tzinfo=timezone.utc),
    )

    payload = record_to_payload(lease)

    assert "release_duration_seconds" not in payload
    assert "leases_available_at_release" not in payload
    assert payload == {
        "name": "aws-quota-slice",
        "acquisition_duration_seconds": 12.5,
        "leases_remaining_at_acquisition": 3,
        "timestamp": "2025-03-01T09:59:00Z",
    }


def test_zero_values_are_kept_when_present() -> None:
    """Zero and false values are distinct from absent fields."""
    lease = LeaseEventUnion(leases_available_at_release=0, released=False)

    payload = record_to_payload(lease)

    assert payload == {"leases_available_at_release": 0, "released": False}


def test_pass_through_payload_is_preserved() -> None:
    """Pass-through records serialize to their original object."""
    node = NodeEvent(payload={"node_name": "n1", "labels": {"role": "worker"}, "gone": None})

    line = record_to_json_line(node)

    assert json.loads(line) == {"node_name": "n1", "labels": {"role": "worker"}, "gone": None}


def test_union_record_from_payload_parses_typed_fields() -> None:
    """Union decoding should convert timestamps and ignore unknown keys."""
    image = union_record_from_payload(
        ImageEventUnion,
        {
            "tag_name": "src",
            "retry_count": 2,
            "duration_seconds": 3,
            "success": None,
            "additional_context": {"k": "v"},
            "start_time": "2025-03-01T10:00:00Z",
            "unexpected": "ignored",
        },
    )

    assert image == ImageEventUnion(
        tag_name="src",
        retry_count=2,
        duration_seconds=3.0,
        additional_context={"k": "v"},
        start_time=datetime(2025, 3, 1, 10, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    "payload",
    [
        {"leases_total": "20"},
        {"leases_total": 2.5},
        {"released": 1},
        {"acquisition_duration_seconds": True},
        {"name": 7},
        {"timestamp": "not-a-time"},
        {"timestamp": 1700000000},
    ],
)
def test_union_record_from_payload_rejects_type_mismatch(payload: dict) -> None:
    """Mismatched JSON types should raise ValueError."""
    with pytest.raises(ValueError):
        union_record_from_payload(LeaseEventUnion, payload)


def test_union_record_from_payload_rejects_non_object_map() -> None:
    """Open map fields must be JSON objects."""
    with pytest.raises(ValueError):
        union_record_from_payload(ImageEventUnion, {"image_stream_details": ["a"]})


def test_record_to_payload_rejects_unknown_types() -> None:
    """Arbitrary objects are not records."""
    with pytest.raises(TypeError):
        record_to_payload({"not": "a record"})


def test_record_to_json_line_rejects_non_finite_floats() -> None:
    """NaN has no JSON representation and must not be written."""
    with pytest.raises(ValueError):
        record_to_json_line(NodeEvent(payload={"cpu": float("nan")}))
