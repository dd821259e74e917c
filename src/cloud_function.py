"""Storage-triggered function entry point.

The function host calls ``load_metrics_from_gcs`` for every finalized
object in the watched bucket. Failures are re-raised so the host's
retry policy decides on redelivery.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.config import CiMetricsConfig
from core.logging_config import configure_logging
from ingest.pipeline import handle_storage_event


def load_metrics_from_gcs(event: Mapping[str, Any], context: Any = None) -> None:
    """Load a finalized metrics object into BigQuery.

    Args:
        event: Storage event payload with ``bucket`` and ``name``.
        context: Host-provided event metadata; unused.

    Raises:
        CiMetricsError: On admission, fetch, decode or load failures.
    """
    config = CiMetricsConfig.from_env()
    configure_logging(config.log_level)
    handle_storage_event(event, config)
