"""Storage location parsing helpers.

This module centralizes the ``s3://bucket/key`` location grammar.
It keeps bucket and key derivation consistent across loaders and resolvers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import PATH_DELIMITER, PROTOCOL_PREFIX, VERSION_DELIMITER
from core.errors import SiftLocationError


@dataclass(frozen=True)
class StorageLocation:
    """Parsed storage location model."""

    bucket: str
    key: str

    @property
    def location(self) -> str:
        """Canonical location string for this bucket and key."""
        return build_location(self.bucket, self.key)


def is_storage_location(location: str | None) -> bool:
    """Return whether a location uses the storage protocol marker.

    Args:
        location: Location string to test.

    Returns:
        True when the location starts with the marker, in any case.

    Raises:
        SiftLocationError: If location is None.
    """
    if location is None:
        raise SiftLocationError("Location must not be None.")
    return location.lower().startswith(PROTOCOL_PREFIX)


def bucket_name(location: str) -> str:
    """Extract the bucket segment of a storage location.

    Args:
        location: Location in format ``s3://bucket/key``.

    Returns:
        Bucket name.

    Raises:
        SiftLocationError: If the location is not a storage location or
            has no bucket segment.
    """
    bucket_end = _bucket_end_index(location)
    return location[len(PROTOCOL_PREFIX):bucket_end]


def object_key(location: str) -> str:
    """Extract the object key of a storage location.

    A version qualifier after ``^`` is excluded and a trailing separator
    is stripped from directory-style keys.

    Args:
        location: Location in format ``s3://bucket/key[^version][/]``.

    Returns:
        Object key, possibly empty.

    Raises:
        SiftLocationError: If the location is not a storage location or
            has no bucket segment.
    """
    bucket_end = _bucket_end_index(location)
    if VERSION_DELIMITER in location:
        return object_key(location[:location.index(VERSION_DELIMITER)])
    if location.endswith(PATH_DELIMITER):
        return location[bucket_end + 1:-1]
    return location[bucket_end + 1:]


def strip_protocol(location: str) -> str:
    """Remove the protocol marker from a storage location.

    Args:
        location: Storage location.

    Returns:
        Location without its leading marker.

    Raises:
        SiftLocationError: If the location is not a storage location.
    """
    _require_storage_location(location)
    return location[len(PROTOCOL_PREFIX):]


def build_location(bucket: str | None, key: str | None) -> str:
    """Build a storage location from bucket and key.

    Args:
        bucket: Bucket name.
        key: Object key.

    Returns:
        Location string ``s3://bucket/key``.

    Raises:
        SiftLocationError: If bucket or key is None.
    """
    if bucket is None:
        raise SiftLocationError("Bucket name must not be None.")
    if key is None:
        raise SiftLocationError("Object key must not be None.")
    return f"{PROTOCOL_PREFIX}{bucket}{PATH_DELIMITER}{key}"


def parse_location(location: str) -> StorageLocation:
    """Parse a storage location into bucket and key.

    Args:
        location: Storage location.

    Returns:
        Parsed bucket and key pair.

    Raises:
        SiftLocationError: If the location is malformed.
    """
    return StorageLocation(bucket=bucket_name(location), key=object_key(location))


def _bucket_end_index(location: str) -> int:
    """Locate the separator that terminates the bucket segment.

    Args:
        location: Storage location.

    Returns:
        Index of the first separator after the marker.

    Raises:
        SiftLocationError: If the bucket segment is missing or empty.
    """
    _require_storage_location(location)
    bucket_end = location.find(PATH_DELIMITER, len(PROTOCOL_PREFIX))
    if bucket_end in (-1, len(PROTOCOL_PREFIX)):
        raise SiftLocationError(
            f"Invalid storage location '{location}': missing bucket name. "
            f"Use {PROTOCOL_PREFIX}bucket/key."
        )
    return bucket_end


def _require_storage_location(location: str) -> None:
    """Raise unless the location carries the storage marker."""
    if not is_storage_location(location):
        raise SiftLocationError(
            f"Invalid storage location '{location}': expected the {PROTOCOL_PREFIX} prefix."
        )
