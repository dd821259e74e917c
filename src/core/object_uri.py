"""Object locator parsing helpers.

This module centralizes source URI parsing for the ingest layer.
It keeps locator validation behavior consistent across entry points.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import GCS_SCHEME, LOCAL_SCHEME, S3_SCHEME
from core.errors import CiMetricsSourceError

_REMOTE_SCHEMES = (GCS_SCHEME, S3_SCHEME)


@dataclass(frozen=True)
class ObjectLocation:
    """Parsed object location model.

    Attributes:
        scheme: ``gs``, ``s3`` or ``file``.
        bucket: Bucket name; empty for local files.
        name: Object key, or filesystem path for local files.
    """

    scheme: str
    bucket: str
    name: str

    @property
    def uri(self) -> str:
        """Render the location back into URI form."""
        if self.scheme == LOCAL_SCHEME:
            return self.name
        return f"{self.scheme}://{self.bucket}/{self.name}"


def parse_object_uri(uri: str) -> ObjectLocation:
    """Parse and validate a source locator.

    Args:
        uri: ``gs://bucket/object``, ``s3://bucket/key`` or a local path.

    Returns:
        Parsed location.

    Raises:
        CiMetricsSourceError: If the locator is empty, uses an unsupported
            scheme, or lacks a bucket or object name.
    """
    if not uri.strip():
        raise CiMetricsSourceError(
            "Invalid source path '': expected gs://bucket/object, "
            "s3://bucket/key, or a local file path."
        )
    if "://" not in uri:
        return ObjectLocation(scheme=LOCAL_SCHEME, bucket="", name=uri)
    scheme, remainder = uri.split("://", 1)
    if scheme not in _REMOTE_SCHEMES:
        raise CiMetricsSourceError(
            f"Invalid source path '{uri}': path must use gs:// or s3:// scheme, "
            f"got {scheme}://."
        )
    bucket, _, name = remainder.partition("/")
    if not bucket:
        raise CiMetricsSourceError(f"Invalid source path '{uri}': bucket name is required.")
    if not name:
        raise CiMetricsSourceError(f"Invalid source path '{uri}': object path is required.")
    return ObjectLocation(scheme=scheme, bucket=bucket, name=name)


def object_location(bucket: str, name: str, scheme: str = GCS_SCHEME) -> ObjectLocation:
    """Build a remote location from a bucket/object pair.

    Raises:
        CiMetricsSourceError: If either part is empty.
    """
    return parse_object_uri(f"{scheme}://{bucket}/{name}")
