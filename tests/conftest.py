"""Pytest configuration and shared fixtures for loader tests."""

from __future__ import annotations

import copy
import json
import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_SAMPLE_PAYLOAD: dict[str, Any] = {
    "events": [
        {"reason": "StepStarted", "step": "e2e-aws", "timestamp": "2025-03-01T10:00:00Z"},
    ],
    "images": [
        {
            "namespace": "ci-op-abc",
            "image_stream_name": "pipeline",
            "full_name": "ci-op-abc/pipeline",
            "start_time": "2025-03-01T10:00:00Z",
            "completion_time": "2025-03-01T10:00:05.123456789Z",
            "duration_seconds": 5.12,
            "success": True,
            "image_stream_details": {"tags": 4},
            "timestamp": "2025-03-01T10:00:05Z",
        },
        {
            "namespace": "ci-op-abc",
            "tag_name": "src",
            "full_tag_name": "pipeline:src",
            "source_image": "quay.io/openshift/ci:src",
            "source_image_kind": "DockerImage",
            "retry_count": 0,
            "success": False,
            "error": "manifest unknown",
            "additional_context": {"attempt": "1"},
            "timestamp": "2025-03-01T10:01:00Z",
        },
    ],
    "leases": [
        {
            "name": "aws-quota-slice",
            "slice": "us-east-1--aws-quota-slice-07",
            "region": "us-east-1",
            "raw_lease_name": "us-east-1--aws-quota-slice-07",
            "acquisition_duration_seconds": 12.5,
            "leases_remaining_at_acquisition": 3,
            "leases_total": 20,
            "timestamp": "2025-03-01T09:59:00Z",
        },
        {
            "name": "aws-quota-slice",
            "release_duration_seconds": 0.4,
            "leases_available_at_release": 4,
            "leases_total": 20,
            "released": True,
            "timestamp": "2025-03-01T11:00:00Z",
        },
    ],
    "nodes": [
        {"node_name": "ip-10-0-1-1", "event": "added", "labels": {"role": "worker"}},
    ],
    "openshift_builds": [
        {"build_name": "src", "namespace": "ci-op-abc", "duration_seconds": 93},
    ],
    "pods": [
        {"pod_name": "e2e-aws", "phase": "Succeeded", "containers": ["test", "sidecar"]},
        {"pod_name": "e2e-aws-setup", "phase": "Failed", "containers": ["setup"]},
    ],
    "test_platform_insights": [
        {"insight": "slow_step", "step": "e2e-aws", "value": 1.5},
    ],
}


@pytest.fixture
def metrics_payload() -> dict[str, Any]:
    """Return a fresh metrics document payload with every category populated."""
    return copy.deepcopy(_SAMPLE_PAYLOAD)


@pytest.fixture
def metrics_file(tmp_path: Path, metrics_payload: dict[str, Any]) -> Path:
    """Write the sample payload to a local ci-operator metrics file."""
    file_path = tmp_path / "artifacts" / "ci-operator-metrics.json"
    file_path.parent.mkdir(parents=True)
    file_path.write_text(json.dumps(metrics_payload), encoding="utf-8")
    return file_path
