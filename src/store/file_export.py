"""File-export sink for metrics documents.

This module writes one newline-delimited JSON file per non-empty
category, suitable for manual warehouse import. Row content matches
what the warehouse sink inserts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.categories import Category
from core.constants import EXPORT_FILE_SUFFIX
from core.errors import CiMetricsExportError, CiMetricsWriteError
from core.logging_config import get_logger
from core.records import MetricsDocument
from core.types import DispatchSummary
from store.dispatch import dispatch_document
from store.record_payload import record_to_json_line


class FileExportSink:
    """Export metrics documents into a local directory."""

    sink_name = "export"

    def __init__(self, target_dir: str | Path) -> None:
        self._export_dir = Path(target_dir).expanduser()
        self.target = str(self._export_dir)
        self._logger = get_logger(__name__, component="file_export", target=self.target)

    def export(self, document: MetricsDocument) -> DispatchSummary:
        """Export every non-empty category in fixed order.

        Raises:
            CiMetricsExportError: If the export directory cannot be created.
            CiMetricsWriteError: If a category file cannot be written.
        """
        _create_export_dir(self._export_dir)
        self._logger.info("export_started")
        return dispatch_document(document, self, self._logger)

    def write_category(self, category: Category, records: Sequence[object]) -> None:
        """Write one category file."""
        file_path = export_file_path(self._export_dir, category)
        try:
            lines = [record_to_json_line(record) for record in records]
        except ValueError as error:
            raise CiMetricsWriteError(
                category.name, f"failed to encode record: {error}", operation="export"
            ) from error
        try:
            file_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as error:
            raise CiMetricsWriteError(
                category.name, f"failed to create {file_path.name}: {error}", operation="export"
            ) from error


def export_file_path(export_dir: Path, category: Category) -> Path:
    """Return the export file path for a category."""
    return export_dir / f"{category.destination}{EXPORT_FILE_SUFFIX}"


def _create_export_dir(export_dir: Path) -> None:
    """Create the export directory and any missing parents."""
    try:
        export_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise CiMetricsExportError(
            f"Failed to create export directory {export_dir}: {error}. "
            "Choose a writable --export directory."
        ) from error
