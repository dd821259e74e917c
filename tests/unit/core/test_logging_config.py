"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

from core.logging_config import configure_logging, get_logger


def test_get_logger_accepts_name_as_context_field(capsys) -> None:
    """A bound ``name`` field should not collide with the logger name."""
    configure_logging("INFO")

    logger = get_logger("ingest.pipeline", name="logs/ci-operator-metrics.json")
    logger.info("storage_event_received")
    event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])

    assert event["logger"] == "ingest.pipeline"
    assert event["name"] == "logs/ci-operator-metrics.json"


def test_log_lines_go_to_stderr(capsys) -> None:
    """Log output should leave stdout free for command results."""
    configure_logging("INFO")

    get_logger(__name__, component="cli").info("category_exported", count=3)
    captured = capsys.readouterr()

    assert captured.out == "" and '"count": 3' in captured.err
