"""Runtime configuration model for the metrics loader.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_DATASET_ID,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROJECT_ID,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import CiMetricsConfigError


@dataclass(frozen=True)
class CiMetricsConfig:
    """Validated runtime configuration.

    Attributes:
        project_id: Google Cloud project owning the warehouse dataset.
        dataset_id: BigQuery dataset receiving one table per category.
        s3_region: Optional default AWS region for s3:// sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
        log_level: Minimum structured log level.
    """

    project_id: str
    dataset_id: str
    s3_region: str | None
    s3_profile: str | None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "CiMetricsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CiMetricsConfigError: If environment values are invalid.
        """
        project_id = os.getenv("CI_METRICS_PROJECT_ID", DEFAULT_PROJECT_ID)
        dataset_id = os.getenv("CI_METRICS_DATASET", DEFAULT_DATASET_ID)
        log_level = _parse_log_level(os.getenv("CI_METRICS_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            project_id=_require_value("CI_METRICS_PROJECT_ID", project_id),
            dataset_id=_require_value("CI_METRICS_DATASET", dataset_id),
            s3_region=os.getenv("CI_METRICS_S3_REGION"),
            s3_profile=os.getenv("CI_METRICS_S3_PROFILE"),
            log_level=log_level,
        )


def _require_value(variable: str, raw_value: str) -> str:
    """Reject blank identifiers.

    Raises:
        CiMetricsConfigError: If the value is empty.
    """
    value = raw_value.strip()
    if not value:
        raise CiMetricsConfigError(
            f"Invalid {variable} value: expected a non-empty identifier. "
            f"Unset {variable} to use the default or provide a value."
        )
    return value


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased level name.

    Raises:
        CiMetricsConfigError: If value is not a supported level.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise CiMetricsConfigError(
            "Invalid CI_METRICS_LOG_LEVEL value: "
            f"expected one of {SUPPORTED_LOG_LEVELS}, got '{raw_value}'. "
            "Set CI_METRICS_LOG_LEVEL to a supported level."
        )
    return level
