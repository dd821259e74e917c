"""CI metrics loader exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each loader stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class CiMetricsError(Exception):
    """Base exception for all loader failures."""


class CiMetricsConfigError(CiMetricsError):
    """Raised for invalid runtime configuration."""


class CiMetricsAdmissionError(CiMetricsError):
    """Raised when an incoming object is not a metrics file."""


class CiMetricsSourceError(CiMetricsError):
    """Raised for invalid source locators and object fetch failures."""


class CiMetricsDecodeError(CiMetricsError):
    """Raised when input bytes cannot be decoded into a metrics document."""


class CiMetricsDependencyError(CiMetricsError):
    """Raised when an optional runtime dependency is missing."""


class CiMetricsWarehouseError(CiMetricsError):
    """Raised when the warehouse client cannot be created."""


class CiMetricsCategoryError(CiMetricsError):
    """Base for failures tied to one record category.

    Attributes:
        category: Category name that failed, e.g. ``leases``.
        operation: Sink operation verb, ``load`` or ``export``.
    """

    def __init__(self, category: str, message: str, operation: str = "load") -> None:
        super().__init__(f"failed to {operation} {category}: {message}")
        self.category = category
        self.operation = operation


class CiMetricsDestinationError(CiMetricsCategoryError):
    """Raised when a destination table cannot be created."""


class CiMetricsWriteError(CiMetricsCategoryError):
    """Raised when category records cannot be written to their destination."""


class CiMetricsExportError(CiMetricsError):
    """Raised when the export directory cannot be prepared."""
