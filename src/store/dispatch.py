"""Ordered per-category dispatch shared by all sinks.

Every sink applies the same protocol: skip empty categories, hand the
rest to the sink's writer in fixed category order, and stop at the
first failure. Categories written before a failure stay written.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from core.categories import CATEGORIES, Category
from core.records import MetricsDocument
from core.types import DispatchSummary


class CategoryWriter(Protocol):
    """Sink-specific write step for one non-empty category."""

    sink_name: str
    target: str

    def write_category(self, category: Category, records: Sequence[object]) -> None:
        """Write all records of one category or raise a category error."""
        ...


def dispatch_document(
    document: MetricsDocument,
    writer: CategoryWriter,
    logger: Any,
) -> DispatchSummary:
    """Dispatch every non-empty category of a document to one writer.

    Args:
        document: Decoded metrics document.
        writer: Sink write step.
        logger: Bound structured logger for per-category counts.

    Returns:
        Records written per destination.

    Raises:
        CiMetricsCategoryError: From the writer; later categories are skipped.
    """
    counts: dict[str, int] = {}
    for category in CATEGORIES:
        records = category.records(document)
        if not records:
            continue
        writer.write_category(category, records)
        counts[category.destination] = len(records)
        logger.info(
            "category_loaded",
            category=category.name,
            destination=category.destination,
            record_count=len(records),
        )
    return DispatchSummary(sink=writer.sink_name, target=writer.target, counts=counts)
