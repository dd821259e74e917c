"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import CiMetricsConfig
from core.errors import CiMetricsConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the default project and dataset."""
    monkeypatch.delenv("CI_METRICS_PROJECT_ID", raising=False)
    monkeypatch.delenv("CI_METRICS_DATASET", raising=False)

    config = CiMetricsConfig.from_env()

    assert (config.project_id, config.dataset_id) == ("openshift-gce-devel", "ci_operator_metrics")


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read project, dataset and S3 settings from environment."""
    monkeypatch.setenv("CI_METRICS_PROJECT_ID", "my-project")
    monkeypatch.setenv("CI_METRICS_DATASET", "metrics")
    monkeypatch.setenv("CI_METRICS_S3_REGION", "eu-west-1")
    monkeypatch.setenv("CI_METRICS_LOG_LEVEL", "debug")

    config = CiMetricsConfig.from_env()

    assert config.project_id == "my-project" and config.dataset_id == "metrics"
    assert config.s3_region == "eu-west-1" and config.log_level == "DEBUG"


def test_from_env_raises_for_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for an unknown log level."""
    monkeypatch.setenv("CI_METRICS_LOG_LEVEL", "chatty")

    with pytest.raises(CiMetricsConfigError):
        CiMetricsConfig.from_env()

    assert os.getenv("CI_METRICS_LOG_LEVEL") == "chatty"


def test_from_env_raises_for_blank_dataset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject a blank dataset identifier."""
    monkeypatch.setenv("CI_METRICS_DATASET", "  ")

    with pytest.raises(CiMetricsConfigError):
        CiMetricsConfig.from_env()
