"""Unit tests for destination schema inference."""

from __future__ import annotations

from core.categories import CATEGORIES
from core.records import ImageEventUnion, LeaseEventUnion, PodLifecycleEvent
from core.types import SchemaField
from store.schema_inference import (
    infer_payload_schema,
    infer_record_type_schema,
    infer_schema,
)


def _columns(schema: tuple[SchemaField, ...]) -> dict[str, tuple[str, str]]:
    return {column.name: (column.field_type, column.mode) for column in schema}


def test_lease_schema_is_nullable_and_typed() -> None:
    """Every lease column should be nullable with its scalar type."""
    columns = _columns(infer_record_type_schema(LeaseEventUnion))

    assert columns["acquisition_duration_seconds"] == ("FLOAT", "NULLABLE")
    assert columns["leases_total"] == ("INTEGER", "NULLABLE")
    assert columns["released"] == ("BOOLEAN", "NULLABLE")
    assert columns["timestamp"] == ("TIMESTAMP", "NULLABLE")
    assert {mode for _, mode in columns.values()} == {"NULLABLE"}


def test_image_schema_maps_open_maps_to_json() -> None:
    """Open key/value maps should become flexible JSON columns."""
    schema = infer_record_type_schema(ImageEventUnion)
    columns = _columns(schema)

    assert columns["image_stream_details"] == ("JSON", "NULLABLE")
    assert columns["additional_context"] == ("JSON", "NULLABLE")
    assert [column.name for column in schema][0] == "namespace"


def test_payload_schema_keeps_first_seen_order_and_widens() -> None:
    """Observed payloads should merge into widened nullable columns."""
    schema = infer_payload_schema(
        [
            {"name": "a", "count": 1, "tags": ["x"], "extra": None},
            {"name": "b", "count": 2.5, "labels": {"k": "v"}, "extra": None},
        ]
    )

    assert [column.name for column in schema] == ["name", "count", "tags", "extra", "labels"]
    assert _columns(schema) == {
        "name": ("STRING", "NULLABLE"),
        "count": ("FLOAT", "NULLABLE"),
        "tags": ("STRING", "REPEATED"),
        "extra": ("STRING", "NULLABLE"),
        "labels": ("JSON", "NULLABLE"),
    }


def test_payload_schema_falls_back_to_json_on_conflicts() -> None:
    """Incompatible observations should widen to JSON."""
    schema = infer_payload_schema(
        [
            {"value": "text", "items": [1], "nested": [[1]], "empty": []},
            {"value": True, "items": 3},
        ]
    )

    assert _columns(schema) == {
        "value": ("JSON", "NULLABLE"),
        "items": ("JSON", "NULLABLE"),
        "nested": ("JSON", "NULLABLE"),
        "empty": ("STRING", "REPEATED"),
    }


def test_infer_schema_dispatches_on_category_shape() -> None:
    """Pass-through categories infer from payloads, unions from types."""
    pods = next(category for category in CATEGORIES if category.name == "pods")
    leases = next(category for category in CATEGORIES if category.name == "leases")

    pod_schema = infer_schema(pods, [PodLifecycleEvent(payload={"pod_name": "p"})])
    lease_schema = infer_schema(leases, [])

    assert pod_schema == (SchemaField(name="pod_name", field_type="STRING"),)
    assert len(lease_schema) == 12
