"""Warehouse sink for metrics documents.

Each non-empty category is loaded into its own table. Tables are
created on first use from the inferred category schema; an existing
table is not an error. Inserts are not deduplicated, so re-running a
partially loaded document duplicates rows already written.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from core.categories import Category
from core.constants import HTTP_CONFLICT
from core.errors import CiMetricsDestinationError, CiMetricsWriteError
from core.logging_config import get_logger
from core.records import MetricsDocument
from core.types import DispatchSummary, SchemaField
from store.dispatch import dispatch_document
from store.record_payload import record_to_payload
from store.schema_inference import infer_schema


class WarehouseClient(Protocol):
    """Table-level warehouse operations used by the sink."""

    @property
    def target(self) -> str:
        """Dataset reference, e.g. ``project.dataset``."""
        ...

    def create_table(self, destination: str, schema: Sequence[SchemaField]) -> None:
        """Create a table; raise a 409-coded error if it already exists."""
        ...

    def insert_rows(
        self,
        destination: str,
        schema: Sequence[SchemaField],
        rows: Sequence[Mapping[str, Any]],
    ) -> None:
        """Insert all rows or raise."""
        ...


class WarehouseSink:
    """Load metrics documents into warehouse tables."""

    sink_name = "warehouse"

    def __init__(self, client: WarehouseClient) -> None:
        self._client = client
        self.target = client.target
        self._logger = get_logger(__name__, component="warehouse_sink", target=self.target)

    def load(self, document: MetricsDocument) -> DispatchSummary:
        """Load every non-empty category in fixed order.

        Raises:
            CiMetricsDestinationError: If a table cannot be created.
            CiMetricsWriteError: If rows cannot be inserted.
        """
        return dispatch_document(document, self, self._logger)

    def write_category(self, category: Category, records: Sequence[object]) -> None:
        """Ensure the category table exists and insert its records."""
        schema = self._ensure_destination(category, records)
        rows = [record_to_payload(record) for record in records]
        try:
            self._client.insert_rows(category.destination, schema, rows)
        except Exception as error:
            raise CiMetricsWriteError(
                category.name,
                f"failed to insert {len(rows)} rows into {self.target}.{category.destination}: "
                f"{error}",
            ) from error

    def _ensure_destination(
        self,
        category: Category,
        records: Sequence[object],
    ) -> tuple[SchemaField, ...]:
        try:
            schema = infer_schema(category, records)
        except TypeError as error:
            raise CiMetricsDestinationError(
                category.name, f"failed to infer schema: {error}"
            ) from error
        try:
            self._client.create_table(category.destination, schema)
        except Exception as error:
            if not is_already_exists_error(error):
                raise CiMetricsDestinationError(
                    category.name,
                    f"failed to create table {self.target}.{category.destination}: {error}",
                ) from error
            self._logger.debug(
                "table_already_exists",
                category=category.name,
                destination=category.destination,
            )
        return schema


def is_already_exists_error(error: BaseException) -> bool:
    """Return whether an error is a conflict-class (HTTP 409) response."""
    return getattr(error, "code", None) == HTTP_CONFLICT
