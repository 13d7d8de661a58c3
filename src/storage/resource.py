"""Addressable object-storage resources.

This module defines the bucket and key handle returned by loaders and
resolvers. Metadata is fetched lazily once per instance and never refreshed;
construct a new resource to observe newer backend state.
"""

from __future__ import annotations

from datetime import datetime
from functools import cached_property
from typing import BinaryIO
from urllib.parse import ParseResult, urlparse

from core.constants import ABSENT_STATUS_CODES, PATH_DELIMITER
from core.errors import SiftResourceNotFoundError, SiftStorageError
from core.location import build_location
from core.types import ObjectMetadata
from storage.backend import StorageBackend


class StorageResource:
    """Handle on one object identified by bucket and key."""

    def __init__(self, backend: StorageBackend, bucket: str, key: str) -> None:
        """Create resource handle without contacting the backend.

        Args:
            backend: Shared storage backend.
            bucket: Bucket name.
            key: Object key.
        """
        self._backend = backend
        self._bucket = bucket
        self._key = key

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def key(self) -> str:
        return self._key

    @property
    def filename(self) -> str:
        return self._key

    @property
    def location(self) -> str:
        """Canonical ``s3://bucket/key`` location of this resource."""
        return build_location(self._bucket, self._key)

    @property
    def description(self) -> str:
        return f"Object storage resource [bucket='{self._bucket}' and key='{self._key}']"

    def exists(self) -> bool:
        """Return whether the backend holds a record for this object.

        Raises:
            SiftStorageError: For backend faults other than not-found or moved.
        """
        return self._metadata is not None

    def size(self) -> int:
        """Return object size in bytes.

        Raises:
            SiftResourceNotFoundError: If the object is absent.
        """
        return self._required_metadata().size

    def last_modified(self) -> datetime:
        """Return the object's last update time.

        Raises:
            SiftResourceNotFoundError: If the object is absent.
        """
        return self._required_metadata().updated

    def self_reference(self) -> str:
        """Return the backend URL addressing this object.

        Raises:
            SiftResourceNotFoundError: If the object is absent.
        """
        return self._required_metadata().self_url

    def url(self) -> ParseResult:
        """Return the parsed self reference URL."""
        return urlparse(self.self_reference())

    def is_writable(self) -> bool:
        return True

    def get_file(self) -> None:
        """Objects have no local file; always raises.

        Raises:
            SiftStorageError: Always.
        """
        raise SiftStorageError(
            f"{self.description} cannot be resolved to a local file. "
            "Use open_for_read() to retrieve the object contents.",
            bucket=self._bucket,
            key=self._key,
        )

    def open_for_read(self) -> BinaryIO:
        """Open a binary reader directly against the object.

        Cached metadata is bypassed; a missing object surfaces as a
        SiftStorageError on first read.
        """
        return self._backend.open_read_channel(self._bucket, self._key)

    def open_for_write(self) -> BinaryIO:
        """Open a binary writer that creates or overwrites the object."""
        return self._backend.open_write_channel(self._bucket, self._key)

    def delete(self) -> bool:
        """Delete the object.

        Returns:
            Whether an object existed before the call.
        """
        return self._backend.delete_object(self._bucket, self._key)

    def relative(self, relative_path: str) -> "StorageResource":
        """Derive a resource in the same bucket under this key.

        The key is joined with a single separator and is not normalized.

        Args:
            relative_path: Path appended to this key.

        Returns:
            New resource for ``key + "/" + relative_path``.
        """
        relative_key = f"{self._key}{PATH_DELIMITER}{relative_path}"
        return StorageResource(self._backend, self._bucket, relative_key)

    @cached_property
    def _metadata(self) -> ObjectMetadata | None:
        """Fetch metadata once, mapping not-found and moved faults to None."""
        try:
            return self._backend.get_metadata(self._bucket, self._key)
        except SiftStorageError as error:
            if error.code in ABSENT_STATUS_CODES:
                return None
            raise

    def _required_metadata(self) -> ObjectMetadata:
        metadata = self._metadata
        if metadata is None:
            raise SiftResourceNotFoundError(
                f"Resource with bucket='{self._bucket}' and key='{self._key}' not found. "
                "Check the location or call exists() first."
            )
        return metadata

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorageResource):
            return NotImplemented
        return (self._bucket, self._key) == (other._bucket, other._key)

    def __hash__(self) -> int:
        return hash((self._bucket, self._key))

    def __repr__(self) -> str:
        return f"StorageResource({self.location!r})"
