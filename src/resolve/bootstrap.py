"""Start-up composition of loaders and resolvers.

This module wires the storage backend, fallback loader, storage loader,
and pattern resolver in a fixed order. Call it once at process start-up
and share the returned resolver.
"""

from __future__ import annotations

from core.config import SiftConfig
from core.logging_config import get_logger
from resolve.glob_matcher import GlobMatcher
from resolve.pattern_resolver import PathMatchingStorageResolver
from storage.backend import StorageBackend
from storage.filesystem import FileSystemResourceLoader
from storage.loader import ResourcePatternResolver, StorageResourceLoader
from storage.s3_backend import S3StorageBackend

_LOGGER = get_logger(__name__)


def build_resource_resolver(
    config: SiftConfig | None = None,
    backend: StorageBackend | None = None,
    fallback: ResourcePatternResolver | None = None,
    matcher: GlobMatcher | None = None,
) -> PathMatchingStorageResolver:
    """Compose the resolver stack.

    Args:
        config: Runtime configuration; read from the environment when omitted.
        backend: Storage backend; an S3 backend is built from config when omitted.
        fallback: Resolver for non-storage locations; defaults to the local
            filesystem rooted at ``config.local_root``.
        matcher: Optional glob matcher override.

    Returns:
        Resolver that also serves single-location lookups.

    Raises:
        SiftConfigError: If environment configuration is invalid.
        SiftDependencyError: If an S3 backend is needed and boto3 is missing.
    """
    resolved_config = config or SiftConfig.from_env()
    storage_backend = backend or S3StorageBackend.from_config(resolved_config)
    fallback_resolver = fallback or FileSystemResourceLoader(resolved_config.local_root)
    loader = StorageResourceLoader(storage_backend, fallback_resolver)
    _LOGGER.debug(
        "resource_resolver_built",
        backend=type(storage_backend).__name__,
        fallback=type(fallback_resolver).__name__,
    )
    return PathMatchingStorageResolver(storage_backend, loader, fallback_resolver, matcher)
