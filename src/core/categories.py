"""Fixed category table shared by every sink.

Each entry ties a document attribute to its destination name and
record shape. Dispatch iterates this table in order; the order is
part of the loader contract because loads are not transactional.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.records import (
    BuildEvent,
    Event,
    ImageEventUnion,
    InsightsEvent,
    LeaseEventUnion,
    MetricsDocument,
    NodeEvent,
    PodLifecycleEvent,
)


@dataclass(frozen=True)
class Category:
    """One record category.

    Attributes:
        name: Short name used in logs and error messages.
        destination: Table or export file base name.
        attribute: MetricsDocument attribute and input JSON key.
        record_type: Record class for this category.
    """

    name: str
    destination: str
    attribute: str
    record_type: type

    def records(self, document: MetricsDocument) -> Sequence[object]:
        """Extract this category's records from a document."""
        return getattr(document, self.attribute)

    @property
    def is_pass_through(self) -> bool:
        """Whether records are opaque producer payloads."""
        return self.record_type not in (ImageEventUnion, LeaseEventUnion)


CATEGORIES: tuple[Category, ...] = (
    Category("images", "images", "images", ImageEventUnion),
    Category("nodes", "nodes", "nodes", NodeEvent),
    Category("insights", "test_platform_insights", "test_platform_insights", InsightsEvent),
    Category("leases", "leases", "leases", LeaseEventUnion),
    Category("builds", "openshift_builds", "openshift_builds", BuildEvent),
    Category("pods", "pods", "pods", PodLifecycleEvent),
    Category("events", "events", "events", Event),
)

DESTINATION_NAMES: dict[str, str] = {
    category.attribute: category.destination for category in CATEGORIES
}
