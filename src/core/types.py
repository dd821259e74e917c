"""Shared typed models.

This module defines immutable request and result models used by the
ingest, store and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class SchemaField:
    """Destination column derived from a record shape.

    Attributes:
        name: Column name, equal to the serialized JSON key.
        field_type: Warehouse type, e.g. STRING, FLOAT, JSON.
        mode: NULLABLE, REQUIRED or REPEATED.
        fields: Nested columns for RECORD types.
    """

    name: str
    field_type: str
    mode: str = "NULLABLE"
    fields: tuple["SchemaField", ...] = ()


@dataclass(frozen=True)
class DispatchSummary:
    """Outcome of one dispatch pass.

    Attributes:
        sink: Sink identifier, ``warehouse`` or ``export``.
        target: Dataset reference or export directory.
        counts: Records written per destination, in dispatch order.
    """

    sink: str
    target: str
    counts: Mapping[str, int] = field(default_factory=dict)

    @property
    def total_records(self) -> int:
        """Total records written across destinations."""
        return sum(self.counts.values())


@dataclass(frozen=True)
class LoadOptions:
    """Manual load command options.

    Attributes:
        source_uri: gs://, s3:// or local path of the metrics file.
        project_id: Warehouse project identifier.
        dataset_id: Warehouse dataset identifier.
        export_dir: Optional directory; switches to the file-export sink.
    """

    source_uri: str
    project_id: str
    dataset_id: str
    export_dir: str | None = None
