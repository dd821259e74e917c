"""Public SDK surface for the CI metrics loader.

This module provides a stable import path for library users.
It re-exports the record model, sinks and load entry points.
"""

from __future__ import annotations

from core.categories import CATEGORIES, DESTINATION_NAMES, Category
from core.config import CiMetricsConfig
from core.records import (
    BuildEvent,
    Event,
    ImageEventUnion,
    InsightsEvent,
    LeaseEventUnion,
    MetricsDocument,
    NodeEvent,
    PodLifecycleEvent,
    is_metrics_file,
)
from core.types import DispatchSummary, LoadOptions
from ingest.document_decoder import decode_metrics_document
from ingest.pipeline import export_to_directory, handle_storage_event, load_into_warehouse, run_load
from store.file_export import FileExportSink
from store.warehouse_sink import WarehouseSink

__all__ = [
    "BuildEvent",
    "CATEGORIES",
    "Category",
    "CiMetricsConfig",
    "DESTINATION_NAMES",
    "DispatchSummary",
    "Event",
    "FileExportSink",
    "ImageEventUnion",
    "InsightsEvent",
    "LeaseEventUnion",
    "LoadOptions",
    "MetricsDocument",
    "NodeEvent",
    "PodLifecycleEvent",
    "WarehouseSink",
    "decode_metrics_document",
    "export_to_directory",
    "handle_storage_event",
    "is_metrics_file",
    "load_into_warehouse",
    "run_load",
]
