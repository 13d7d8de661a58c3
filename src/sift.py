"""Public SDK surface for Sift.

This module provides a stable import path for library users.
It re-exports the resolver composition step, resources, and errors.
"""

from __future__ import annotations

from core.config import SiftConfig
from core.errors import (
    SiftConfigError,
    SiftDependencyError,
    SiftError,
    SiftLocationError,
    SiftResourceNotFoundError,
    SiftStorageError,
)
from core.location import (
    StorageLocation,
    bucket_name,
    build_location,
    is_storage_location,
    object_key,
    parse_location,
    strip_protocol,
)
from core.types import ObjectMetadata
from resolve.bootstrap import build_resource_resolver
from resolve.glob_matcher import AntPathMatcher, GlobMatcher
from resolve.pattern_resolver import PathMatchingStorageResolver
from storage.filesystem import FileSystemResource, FileSystemResourceLoader
from storage.loader import Resource, StorageResourceLoader
from storage.resource import StorageResource
from storage.s3_backend import S3StorageBackend

__all__ = [
    "AntPathMatcher",
    "FileSystemResource",
    "FileSystemResourceLoader",
    "GlobMatcher",
    "ObjectMetadata",
    "PathMatchingStorageResolver",
    "Resource",
    "S3StorageBackend",
    "SiftConfig",
    "SiftConfigError",
    "SiftDependencyError",
    "SiftError",
    "SiftLocationError",
    "SiftResourceNotFoundError",
    "SiftStorageError",
    "StorageLocation",
    "StorageResource",
    "StorageResourceLoader",
    "bucket_name",
    "build_location",
    "build_resource_resolver",
    "is_storage_location",
    "object_key",
    "parse_location",
    "strip_protocol",
]
