"""BigQuery adapter for the warehouse sink.

This module encapsulates google-cloud-bigquery client creation,
table creation and streaming inserts behind the WarehouseClient
operations used by the warehouse sink.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from core.config import CiMetricsConfig
from core.errors import CiMetricsDependencyError, CiMetricsWarehouseError
from core.types import SchemaField


class RowInsertError(Exception):
    """Raised when BigQuery rejects rows of a streaming insert.

    Attributes:
        row_errors: Per-row error mappings returned by the API.
    """

    def __init__(self, destination: str, row_errors: Sequence[Mapping[str, Any]]) -> None:
        super().__init__(
            f"{len(row_errors)} rows rejected by {destination}; first error: {row_errors[0]}"
        )
        self.row_errors = list(row_errors)


def create_bigquery_client(config: CiMetricsConfig) -> Any:
    """Create a BigQuery client for the configured project.

    Raises:
        CiMetricsDependencyError: If google-cloud-bigquery is missing.
        CiMetricsWarehouseError: If the client cannot be created, e.g.
            when no default credentials are available.
    """
    bigquery = _import_bigquery()
    try:
        return bigquery.Client(project=config.project_id)
    except Exception as error:
        raise CiMetricsWarehouseError(
            f"Failed to create BigQuery client for project {config.project_id}: {error}. "
            "Check Google Cloud credentials or use --export to write JSON files."
        ) from error


class BigQueryWarehouse:
    """WarehouseClient implementation backed by a BigQuery dataset."""

    def __init__(self, client: Any, project_id: str, dataset_id: str) -> None:
        self._client = client
        self._project_id = project_id
        self._dataset_id = dataset_id

    @property
    def target(self) -> str:
        """Dataset reference in ``project.dataset`` form."""
        return f"{self._project_id}.{self._dataset_id}"

    def create_table(self, destination: str, schema: Sequence[SchemaField]) -> None:
        """Create a table; BigQuery raises Conflict (409) if it exists."""
        bigquery = _import_bigquery()
        table = bigquery.Table(
            self._table_id(destination),
            schema=[_to_bigquery_field(bigquery, item) for item in schema],
        )
        self._client.create_table(table)

    def insert_rows(
        self,
        destination: str,
        schema: Sequence[SchemaField],
        rows: Sequence[Mapping[str, Any]],
    ) -> None:
        """Stream rows into a table.

        Raises:
            RowInsertError: If any row is rejected.
        """
        json_columns = {item.name: item.mode for item in schema if item.field_type == "JSON"}
        encoded_rows = [_encode_json_columns(row, json_columns) for row in rows]
        row_errors = self._client.insert_rows_json(self._table_id(destination), encoded_rows)
        if row_errors:
            raise RowInsertError(destination, row_errors)

    def close(self) -> None:
        """Release client transport resources."""
        self._client.close()

    def _table_id(self, destination: str) -> str:
        return f"{self._project_id}.{self._dataset_id}.{destination}"


def _to_bigquery_field(bigquery: Any, item: SchemaField) -> Any:
    return bigquery.SchemaField(
        item.name,
        item.field_type,
        mode=item.mode,
        fields=[_to_bigquery_field(bigquery, child) for child in item.fields],
    )


def _encode_json_columns(row: Mapping[str, Any], json_columns: Mapping[str, str]) -> dict[str, Any]:
    """Encode JSON column values as JSON text, as streaming inserts require."""
    encoded = dict(row)
    for name, mode in json_columns.items():
        if name not in encoded or encoded[name] is None:
            continue
        value = encoded[name]
        if mode == "REPEATED" and isinstance(value, list):
            encoded[name] = [json.dumps(item) for item in value]
        else:
            encoded[name] = json.dumps(value)
    return encoded


def _import_bigquery() -> Any:
    try:
        from google.cloud import bigquery
    except ImportError as error:
        raise CiMetricsDependencyError(
            "Warehouse loading requires google-cloud-bigquery, but it is not installed. "
            "Install google-cloud-bigquery or use --export to write JSON files."
        ) from error
    return bigquery
