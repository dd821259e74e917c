"""Typed record model for CI metrics documents.

Leases and images arrive from two producer-side event kinds each
(acquisition/release, image stream/tag import). Both kinds are
flattened into one union record per category whose fields all default
to absent. Nothing enforces that a record populates only one side;
``kind`` reports which side(s) a record actually carries.

The remaining categories are pass-through records: opaque JSON objects
routed to their destination without inspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
import re
from typing import Any, Mapping

from core.constants import METRICS_FILE_NAME

_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def is_metrics_file(name: str) -> bool:
    """Return whether an object name is a CI operator metrics file."""
    return name.endswith(METRICS_FILE_NAME)


@dataclass(frozen=True)
class LeaseEventUnion:
    """Union of lease acquisition and lease release events.

    Attributes:
        name: Lease name.
        slice: Lease slice.
        region: Cloud region the lease belongs to.
        raw_lease_name: Unparsed lease name as reported by the lease server.
        acquisition_duration_seconds: Time spent acquiring (acquisition only).
        release_duration_seconds: Time spent releasing (release only).
        leases_remaining_at_acquisition: Free leases after acquiring.
        leases_available_at_release: Free leases after releasing.
        leases_total: Total leases in the pool.
        released: Whether the lease was released.
        error: Error message reported by the producer.
        timestamp: Event time.
    """

    name: str | None = None
    slice: str | None = None
    region: str | None = None
    raw_lease_name: str | None = None
    acquisition_duration_seconds: float | None = None
    release_duration_seconds: float | None = None
    leases_remaining_at_acquisition: int | None = None
    leases_available_at_release: int | None = None
    leases_total: int | None = None
    released: bool | None = None
    error: str | None = None
    timestamp: datetime | None = None

    @property
    def kind(self) -> str:
        """Producer event kind inferred from populated fields."""
        return _union_kind(
            self,
            ("acquisition_duration_seconds", "leases_remaining_at_acquisition"),
            ("release_duration_seconds", "leases_available_at_release", "released"),
            ("acquisition", "release"),
        )


@dataclass(frozen=True)
class ImageEventUnion:
    """Union of image stream and tag import events.

    Attributes:
        namespace: Namespace holding the image stream.
        image_stream_name: Image stream name.
        full_name: Namespaced image stream name.
        tag_name: Imported tag name.
        full_tag_name: Fully-qualified imported tag.
        source_image: Pull spec the tag was imported from.
        source_image_kind: Kind of the import source, e.g. DockerImage.
        start_time: Operation start time.
        completion_time: Operation completion time.
        duration_seconds: Operation duration.
        retry_count: Import retries performed.
        success: Whether the operation succeeded.
        error: Error message reported by the producer.
        image_stream_details: Open key/value details about the stream.
        additional_context: Open key/value producer context.
        timestamp: Event time.
    """

    namespace: str | None = None
    image_stream_name: str | None = None
    full_name: str | None = None
    tag_name: str | None = None
    full_tag_name: str | None = None
    source_image: str | None = None
    source_image_kind: str | None = None
    start_time: datetime | None = None
    completion_time: datetime | None = None
    duration_seconds: float | None = None
    retry_count: int | None = None
    success: bool | None = None
    error: str | None = None
    image_stream_details: Mapping[str, Any] | None = None
    additional_context: Mapping[str, Any] | None = None
    timestamp: datetime | None = None

    @property
    def kind(self) -> str:
        """Producer event kind inferred from populated fields."""
        return _union_kind(
            self,
            ("full_name", "image_stream_details"),
            ("tag_name", "full_tag_name", "source_image", "source_image_kind", "retry_count"),
            ("image_stream", "tag_import"),
        )


@dataclass(frozen=True)
class PassThroughRecord:
    """Opaque producer record routed without interpretation.

    Attributes:
        payload: Decoded JSON object, key order preserved.
    """

    payload: Mapping[str, Any] = field(default_factory=dict)


class Event(PassThroughRecord):
    """Generic CI operator event."""


class NodeEvent(PassThroughRecord):
    """Cluster node event."""


class BuildEvent(PassThroughRecord):
    """OpenShift build event."""


class PodLifecycleEvent(PassThroughRecord):
    """Pod lifecycle metrics event."""


class InsightsEvent(PassThroughRecord):
    """Test platform insights event."""


@dataclass(frozen=True)
class MetricsDocument:
    """Decoded metrics file, one ordered record sequence per category.

    Built once per invocation and never mutated. An absent or null
    category decodes to an empty tuple.
    """

    events: tuple[Event, ...] = ()
    images: tuple[ImageEventUnion, ...] = ()
    leases: tuple[LeaseEventUnion, ...] = ()
    nodes: tuple[NodeEvent, ...] = ()
    openshift_builds: tuple[BuildEvent, ...] = ()
    pods: tuple[PodLifecycleEvent, ...] = ()
    test_platform_insights: tuple[InsightsEvent, ...] = ()

    @property
    def record_count(self) -> int:
        """Total records across all categories."""
        return sum(len(getattr(self, item.name)) for item in fields(self))


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp.

    Fractional seconds beyond microsecond precision are truncated.

    Raises:
        ValueError: If the text is not a valid timestamp.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_PATTERN.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, 1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as RFC 3339 UTC text with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _union_kind(
    record: object,
    first_fields: tuple[str, ...],
    second_fields: tuple[str, ...],
    labels: tuple[str, str],
) -> str:
    has_first = any(getattr(record, name) is not None for name in first_fields)
    has_second = any(getattr(record, name) is not None for name in second_fields)
    if has_first and has_second:
        return "mixed"
    if has_first:
        return labels[0]
    if has_second:
        return labels[1]
    return "unknown"
