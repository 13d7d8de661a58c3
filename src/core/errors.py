"""Sift exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each layer raises a specific error type for debuggability.
"""

from __future__ import annotations


class SiftError(Exception):
    """Base exception for all Sift failures."""


class SiftConfigError(SiftError):
    """Raised for invalid runtime configuration."""


class SiftLocationError(SiftError):
    """Raised for malformed or unsupported location strings."""


class SiftResourceNotFoundError(SiftError):
    """Raised when metadata is requested for an absent resource."""


class SiftStorageError(SiftError):
    """Raised for storage backend faults.

    Attributes:
        code: HTTP-like status code reported by the backend, when known.
        bucket: Bucket involved in the failed call, when known.
        key: Object key involved in the failed call, when known.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        bucket: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.bucket = bucket
        self.key = key


class SiftDependencyError(SiftError):
    """Raised when an optional runtime dependency is missing."""
