"""Location-to-resource loaders.

This module maps a single location string onto a resource handle.
Storage locations become StorageResource instances; everything else is
delegated untouched to a fallback loader.
"""

from __future__ import annotations

from datetime import datetime
from typing import BinaryIO, Protocol

from core.location import bucket_name, is_storage_location, object_key
from storage.backend import StorageBackend
from storage.resource import StorageResource


class Resource(Protocol):
    """Read, write, and inspect operations shared by all resource kinds."""

    @property
    def location(self) -> str: ...

    @property
    def description(self) -> str: ...

    def exists(self) -> bool: ...

    def size(self) -> int: ...

    def last_modified(self) -> datetime: ...

    def self_reference(self) -> str: ...

    def open_for_read(self) -> BinaryIO: ...

    def open_for_write(self) -> BinaryIO: ...

    def delete(self) -> bool: ...

    def relative(self, relative_path: str) -> "Resource": ...


class ResourceLoader(Protocol):
    """Maps one location string to one resource."""

    def get_resource(self, location: str) -> Resource: ...


class ResourcePatternResolver(ResourceLoader, Protocol):
    """Expands a location pattern into the matching existing resources."""

    def get_resources(self, location_pattern: str) -> tuple[Resource, ...]: ...


class StorageResourceLoader:
    """Loader that builds storage resources for ``s3://`` locations."""

    def __init__(self, backend: StorageBackend, fallback: ResourceLoader) -> None:
        """Create loader.

        Args:
            backend: Shared storage backend handed to every resource.
            fallback: Loader used for non-storage locations.
        """
        self._backend = backend
        self._fallback = fallback

    def get_resource(self, location: str) -> Resource:
        """Resolve one location without any backend round trip.

        Args:
            location: Storage location or fallback location.

        Returns:
            Resource handle; absence is only observable through exists().

        Raises:
            SiftLocationError: If a storage location is malformed.
        """
        if is_storage_location(location):
            return StorageResource(self._backend, bucket_name(location), object_key(location))
        return self._fallback.get_resource(location)
