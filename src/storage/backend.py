"""Storage backend contract.

This module declares the capabilities that resources and resolvers
consume. Implementations translate client faults into SiftStorageError.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, Protocol

from core.types import ObjectMetadata


class StorageBackend(Protocol):
    """Blocking object-storage operations used by Sift.

    Implementations are shared across resources and must be safe to call
    from multiple threads.
    """

    def list_buckets(self) -> Iterator[str]:
        """Yield every visible bucket name across all pages."""
        ...

    def list_objects(self, bucket: str, prefix: str | None = None) -> Iterator[str]:
        """Yield every object name in a bucket, optionally under a prefix."""
        ...

    def get_metadata(self, bucket: str, key: str) -> ObjectMetadata | None:
        """Return object metadata, or None when the backend reports no record.

        Raises:
            SiftStorageError: For not-found, moved, and all other faults that
                the backend surfaces as errors.
        """
        ...

    def open_read_channel(self, bucket: str, key: str) -> BinaryIO:
        """Open a binary input stream for an object."""
        ...

    def open_write_channel(self, bucket: str, key: str) -> BinaryIO:
        """Open a binary output stream that creates or overwrites an object."""
        ...

    def delete_object(self, bucket: str, key: str) -> bool:
        """Delete an object and return whether it existed."""
        ...
