"""Unit tests for the storage resource loader."""

from __future__ import annotations

import pytest

from core.errors import SiftLocationError
from storage.loader import StorageResourceLoader
from storage.resource import StorageResource


class _RecordingLoader:
    def __init__(self) -> None:
        self.locations: list[str] = []

    def get_resource(self, location: str) -> str:
        self.locations.append(location)
        return f"fallback:{location}"


def test_storage_location_builds_resource_without_round_trip(storage_backend) -> None:
    """Loader should construct storage resources lazily."""
    loader = StorageResourceLoader(storage_backend, _RecordingLoader())

    resource = loader.get_resource("s3://alpha/missing/^7")

    assert isinstance(resource, StorageResource)
    assert (resource.bucket, resource.key) == ("alpha", "missing")
    assert storage_backend.metadata_calls == []
    assert resource.exists() is False


def test_other_locations_are_delegated_untouched(storage_backend) -> None:
    """Non-storage locations should go to the fallback loader."""
    fallback = _RecordingLoader()
    loader = StorageResourceLoader(storage_backend, fallback)

    resource = loader.get_resource("file:/etc/hosts")

    assert resource == "fallback:file:/etc/hosts"
    assert fallback.locations == ["file:/etc/hosts"]


def test_malformed_storage_location_raises(storage_backend) -> None:
    """Loader should reject storage locations without a bucket."""
    loader = StorageResourceLoader(storage_backend, _RecordingLoader())

    with pytest.raises(SiftLocationError):
        loader.get_resource("s3://no-separator")
