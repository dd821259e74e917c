"""Object readers for metrics files.

This module fetches the raw bytes of one metrics file from Google
Cloud Storage, S3 or the local filesystem. It performs no retries;
timeouts are left to the client libraries.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.config import CiMetricsConfig
from core.constants import GCS_SCHEME, S3_SCHEME
from core.errors import CiMetricsDependencyError, CiMetricsSourceError
from core.object_uri import ObjectLocation


def read_object_bytes(location: ObjectLocation, config: CiMetricsConfig) -> bytes:
    """Read a metrics object.

    Args:
        location: Parsed source location.
        config: Runtime configuration for client defaults.

    Returns:
        Raw object bytes.

    Raises:
        CiMetricsSourceError: If the object cannot be read.
        CiMetricsDependencyError: If the storage client library is missing.
    """
    if location.scheme == GCS_SCHEME:
        return _read_gcs_object(location, config)
    if location.scheme == S3_SCHEME:
        return _read_s3_object(location, config)
    return _read_local_object(Path(location.name).expanduser())


def _read_local_object(source_path: Path) -> bytes:
    """Read a metrics file from local disk."""
    if not source_path.is_file():
        raise CiMetricsSourceError(
            f"Failed to read source at {source_path}: file does not exist. "
            "Provide an existing metrics file."
        )
    try:
        return source_path.read_bytes()
    except OSError as error:
        raise CiMetricsSourceError(f"Failed to read source at {source_path}: {error}") from error


def _read_gcs_object(location: ObjectLocation, config: CiMetricsConfig) -> bytes:
    """Download a metrics object from Google Cloud Storage."""
    gcs_client = _create_gcs_client(config)
    try:
        blob = gcs_client.bucket(location.bucket).blob(location.name)
        return blob.download_as_bytes()
    except Exception as error:
        raise CiMetricsSourceError(
            f"Failed to open GCS object {location.uri}: {error}. "
            "Check the object path and Google Cloud credentials."
        ) from error
    finally:
        gcs_client.close()


def _create_gcs_client(config: CiMetricsConfig) -> Any:
    """Create a google-cloud-storage client.

    Raises:
        CiMetricsDependencyError: If google-cloud-storage is missing.
        CiMetricsSourceError: If the client cannot be created.
    """
    try:
        from google.cloud import storage
    except ImportError as error:
        raise CiMetricsDependencyError(
            "GCS support requires google-cloud-storage, but it is not installed. "
            "Install google-cloud-storage to read gs:// sources."
        ) from error
    try:
        return storage.Client(project=config.project_id)
    except Exception as error:
        raise CiMetricsSourceError(
            f"Failed to create GCS client: {error}. Check Google Cloud credentials."
        ) from error


def _read_s3_object(location: ObjectLocation, config: CiMetricsConfig) -> bytes:
    """Download a metrics object from S3."""
    s3_client = _create_s3_client(config)
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.name)
        return response["Body"].read()
    except Exception as error:
        raise CiMetricsSourceError(
            f"Failed to open S3 object {location.uri}: {error}. "
            "Check the object path and AWS credentials."
        ) from error


def _create_s3_client(config: CiMetricsConfig) -> Any:
    """Create a boto3 S3 client.

    Raises:
        CiMetricsDependencyError: If boto3 is missing.
        CiMetricsSourceError: If the session or client cannot be created,
            e.g. for an unknown profile.
    """
    try:
        import boto3
    except ImportError as error:
        raise CiMetricsDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to read s3:// sources."
        ) from error
    try:
        session = boto3.session.Session(**_build_boto3_session_kwargs(config))
        return session.client("s3")
    except Exception as error:
        raise CiMetricsSourceError(
            f"Failed to create S3 client: {error}. Check AWS credentials and profile."
        ) from error


def _build_boto3_session_kwargs(config: CiMetricsConfig) -> dict[str, str]:
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
