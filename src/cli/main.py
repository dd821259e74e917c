"""CI metrics loader CLI entry point.
This module loads one ci-operator metrics file into BigQuery, or
exports it as JSON files for manual import when --export is given.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from core.config import CiMetricsConfig
from core.errors import CiMetricsError
from core.logging_config import configure_logging, get_logger
from core.types import DispatchSummary, LoadOptions
from ingest.pipeline import run_load


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="ci-metrics-loader",
        description="Load ci-operator metrics into BigQuery",
    )
    parser.add_argument(
        "--gcs-path",
        required=True,
        help="Full path to a metrics file: gs://bucket/object, s3://bucket/key or local path",
    )
    parser.add_argument(
        "--google-project-id",
        help="GCP project ID (defaults to CI_METRICS_PROJECT_ID)",
    )
    parser.add_argument(
        "--bigquery-dataset",
        help="BigQuery dataset ID (defaults to CI_METRICS_DATASET)",
    )
    parser.add_argument(
        "--export",
        dest="export_dir",
        help="Export data to directory as JSON files for manual BigQuery import "
        "(instead of writing to BigQuery)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the loader CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = CiMetricsConfig.from_env()
    except CiMetricsError as error:
        parser.error(str(error))
    configure_logging(config.log_level)
    options = LoadOptions(
        source_uri=args.gcs_path,
        project_id=args.google_project_id or config.project_id,
        dataset_id=args.bigquery_dataset or config.dataset_id,
        export_dir=args.export_dir,
    )
    logger = get_logger(__name__, component="cli", source=options.source_uri)
    try:
        summary = run_load(options, config)
    except CiMetricsError as error:
        logger.error("load_failed", error=str(error))
        print(f"error={error}", file=sys.stderr)
        return 1
    _print_summary(summary)
    return 0


def _print_summary(summary: DispatchSummary) -> None:
    """Print per-destination counts."""
    for destination, count in summary.counts.items():
        print(f"{destination}={count}")
    print(f"total_records={summary.total_records}")
