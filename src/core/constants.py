"""Core constants used across loader modules.

This module centralizes fixed names and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

METRICS_FILE_NAME = "ci-operator-metrics.json"
DEFAULT_PROJECT_ID = "openshift-gce-devel"
DEFAULT_DATASET_ID = "ci_operator_metrics"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
EXPORT_FILE_SUFFIX = ".json"
GCS_SCHEME = "gs"
S3_SCHEME = "s3"
LOCAL_SCHEME = "file"
HTTP_CONFLICT = 409
