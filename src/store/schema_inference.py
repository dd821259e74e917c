"""Destination schema inference from record shapes.

Union records are introspected from their dataclass definitions.
Pass-through records carry no static shape, so their columns are
derived from the payloads being loaded. Every inferred column is
NULLABLE or REPEATED; open maps become flexible JSON columns.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence, get_args, get_origin, get_type_hints

from core.categories import Category
from core.types import SchemaField
from store.record_payload import record_to_payload, strip_optional

_SCALAR_TYPES: tuple[tuple[type, str], ...] = (
    (bool, "BOOLEAN"),
    (int, "INTEGER"),
    (float, "FLOAT"),
    (str, "STRING"),
    (datetime, "TIMESTAMP"),
)
_NUMERIC_TYPES = frozenset({"INTEGER", "FLOAT"})


def infer_schema(category: Category, records: Sequence[object]) -> tuple[SchemaField, ...]:
    """Infer the destination schema for one category.

    Args:
        category: Category being loaded.
        records: Records that will be written.

    Returns:
        Ordered destination columns.
    """
    if category.is_pass_through:
        return infer_payload_schema(record_to_payload(record) for record in records)
    return infer_record_type_schema(category.record_type)


def infer_record_type_schema(record_type: type) -> tuple[SchemaField, ...]:
    """Derive columns from a dataclass record type.

    Raises:
        TypeError: If the type is not a dataclass or a field type is unsupported.
    """
    if not is_dataclass(record_type):
        raise TypeError(f"Cannot infer schema from non-dataclass {record_type!r}")
    hints = get_type_hints(record_type)
    return tuple(_field_for_annotation(item.name, hints[item.name]) for item in fields(record_type))


def infer_payload_schema(payloads: Iterable[Mapping[str, Any]]) -> tuple[SchemaField, ...]:
    """Derive columns from observed JSON payloads.

    Keys keep first-seen order. Keys that are only ever null or empty
    become STRING columns.
    """
    columns: dict[str, SchemaField | None] = {}
    list_keys: set[str] = set()
    for payload in payloads:
        for key, value in payload.items():
            if isinstance(value, list):
                list_keys.add(key)
            candidate = _field_for_value(key, value)
            columns[key] = _merge_fields(columns.get(key), candidate)
    return tuple(
        column if column is not None else _fallback_field(key, key in list_keys)
        for key, column in columns.items()
    )


def _fallback_field(name: str, is_list: bool) -> SchemaField:
    return SchemaField(name=name, field_type="STRING", mode="REPEATED" if is_list else "NULLABLE")


def _field_for_annotation(name: str, annotation: Any) -> SchemaField:
    target = strip_optional(annotation)
    origin = get_origin(target) or target
    if isinstance(origin, type) and issubclass(origin, Mapping):
        return SchemaField(name=name, field_type="JSON")
    if origin in (list, tuple):
        element = _field_for_annotation(name, get_args(target)[0])
        return SchemaField(name=name, field_type=element.field_type, mode="REPEATED")
    for python_type, field_type in _SCALAR_TYPES:
        if origin is python_type:
            return SchemaField(name=name, field_type=field_type)
    raise TypeError(f"Unsupported field type {annotation!r} for column '{name}'")


def _field_for_value(name: str, value: Any) -> SchemaField | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return SchemaField(name=name, field_type="JSON")
    if isinstance(value, list):
        return _field_for_list(name, value)
    for python_type, field_type in _SCALAR_TYPES:
        if isinstance(value, python_type):
            return SchemaField(name=name, field_type=field_type)
    return SchemaField(name=name, field_type="JSON")


def _field_for_list(name: str, values: list[Any]) -> SchemaField | None:
    element: SchemaField | None = None
    for value in values:
        if isinstance(value, list):
            # Nested arrays have no warehouse column type.
            return SchemaField(name=name, field_type="JSON")
        element = _merge_fields(element, _field_for_value(name, value))
    if element is None:
        return None
    return SchemaField(name=name, field_type=element.field_type, mode="REPEATED")


def _merge_fields(current: SchemaField | None, candidate: SchemaField | None) -> SchemaField | None:
    """Widen two observations of the same column into one."""
    if current is None:
        return candidate
    if candidate is None or candidate == current:
        return current
    if current.mode != candidate.mode:
        return SchemaField(name=current.name, field_type="JSON")
    types = {current.field_type, candidate.field_type}
    if types == _NUMERIC_TYPES:
        return SchemaField(name=current.name, field_type="FLOAT", mode=current.mode)
    return SchemaField(name=current.name, field_type="JSON", mode=current.mode)
