"""Load orchestration for metrics files.

This module ties object fetch, decoding and sink dispatch together
for the manual (CLI) and trigger-based (storage event) entry points.
Each call decodes exactly one document and dispatches it once.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

from core.config import CiMetricsConfig
from core.constants import METRICS_FILE_NAME
from core.errors import CiMetricsAdmissionError
from core.logging_config import get_logger
from core.object_uri import ObjectLocation, object_location, parse_object_uri
from core.records import MetricsDocument, is_metrics_file
from core.types import DispatchSummary, LoadOptions
from ingest.document_decoder import decode_metrics_document
from ingest.object_reader import read_object_bytes
from store.bigquery_warehouse import BigQueryWarehouse, create_bigquery_client
from store.file_export import FileExportSink
from store.warehouse_sink import WarehouseClient, WarehouseSink


def read_metrics_document(location: ObjectLocation, config: CiMetricsConfig) -> MetricsDocument:
    """Fetch and decode one metrics file.

    Raises:
        CiMetricsSourceError: If the object cannot be read.
        CiMetricsDecodeError: If the content is not a metrics document.
    """
    return decode_metrics_document(read_object_bytes(location, config))


def load_into_warehouse(
    location: ObjectLocation,
    config: CiMetricsConfig,
    warehouse: WarehouseClient | None = None,
) -> DispatchSummary:
    """Load one metrics file into the configured warehouse dataset.

    Args:
        location: Metrics file location.
        config: Runtime configuration naming the project and dataset.
        warehouse: Optional pre-built warehouse client; a BigQuery client
            is created and closed when omitted.

    Returns:
        Rows loaded per table.
    """
    logger = get_logger(__name__, component="pipeline", source=location.uri)
    document = read_metrics_document(location, config)
    logger.info("document_decoded", record_count=document.record_count)
    if warehouse is not None:
        return WarehouseSink(warehouse).load(document)
    bigquery_warehouse = BigQueryWarehouse(
        create_bigquery_client(config), config.project_id, config.dataset_id
    )
    try:
        return WarehouseSink(bigquery_warehouse).load(document)
    finally:
        bigquery_warehouse.close()


def export_to_directory(
    location: ObjectLocation,
    export_dir: str | Path,
    config: CiMetricsConfig,
) -> DispatchSummary:
    """Export one metrics file as newline-delimited JSON files."""
    logger = get_logger(__name__, component="pipeline", source=location.uri)
    document = read_metrics_document(location, config)
    logger.info("document_decoded", record_count=document.record_count)
    return FileExportSink(export_dir).export(document)


def run_load(options: LoadOptions, config: CiMetricsConfig) -> DispatchSummary:
    """Run a manual load, choosing the sink from the options.

    An export directory switches from the warehouse sink to file export.
    """
    location = parse_object_uri(options.source_uri)
    if options.export_dir:
        return export_to_directory(location, options.export_dir, config)
    warehouse_config = replace(
        config, project_id=options.project_id, dataset_id=options.dataset_id
    )
    return load_into_warehouse(location, warehouse_config)


def handle_storage_event(
    event: Mapping[str, Any],
    config: CiMetricsConfig,
    warehouse: WarehouseClient | None = None,
) -> DispatchSummary:
    """Handle an object-finalized storage event.

    Args:
        event: Event payload carrying ``bucket`` and ``name``.
        config: Runtime configuration.
        warehouse: Optional pre-built warehouse client.

    Raises:
        CiMetricsAdmissionError: If the object is not a metrics file;
            nothing is fetched or decoded in that case.
    """
    bucket = str(event.get("bucket", ""))
    name = str(event.get("name", ""))
    logger = get_logger(__name__, component="storage_trigger", bucket=bucket, object_name=name)
    if not is_metrics_file(name):
        logger.error("non_metrics_file_received")
        raise CiMetricsAdmissionError(
            f"unexpected file received: {name} (expected {METRICS_FILE_NAME})"
        )
    location = object_location(bucket, name)
    logger.info("processing_metrics_file", source=location.uri)
    summary = load_into_warehouse(location, config, warehouse)
    logger.info("metrics_loaded", total_records=summary.total_records)
    return summary
