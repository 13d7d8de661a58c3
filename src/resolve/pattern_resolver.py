"""Wildcard resolution of storage location patterns.

This module expands ``s3://`` patterns across bucket names and object keys
into the set of existing resources. Buckets and keys use different backend
APIs, so each hierarchy level is resolved separately and the per-bucket
results are unioned and deduplicated by bucket and key.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import PATH_DELIMITER, RECURSIVE_WILDCARD
from core.location import bucket_name, build_location, is_storage_location, object_key, strip_protocol
from core.logging_config import get_logger
from core.types import PatternParts
from resolve.glob_matcher import AntPathMatcher, GlobMatcher, literal_prefix
from storage.backend import StorageBackend
from storage.loader import Resource, ResourceLoader, ResourcePatternResolver

_LOGGER = get_logger(__name__)


class PathMatchingStorageResolver:
    """Resource pattern resolver for object storage with a local fallback."""

    def __init__(
        self,
        backend: StorageBackend,
        loader: ResourceLoader,
        fallback: ResourcePatternResolver,
        matcher: GlobMatcher | None = None,
    ) -> None:
        """Create resolver.

        Args:
            backend: Storage backend used for bucket and object listings.
            loader: Loader that turns storage locations into resources.
            fallback: Resolver for locations without the storage marker.
            matcher: Glob matcher; defaults to AntPathMatcher.
        """
        self._backend = backend
        self._loader = loader
        self._fallback = fallback
        self._matcher: GlobMatcher = matcher or AntPathMatcher()

    def set_path_matcher(self, matcher: GlobMatcher) -> None:
        """Replace the glob matcher used for bucket and key patterns.

        Raises:
            ValueError: If matcher is None.
        """
        if matcher is None:
            raise ValueError("Path matcher must not be None.")
        self._matcher = matcher

    def get_resource(self, location: str) -> Resource:
        """Load one location through the storage loader."""
        return self._loader.get_resource(location)

    def get_resources(self, location_pattern: str) -> tuple[Resource, ...]:
        """Alias of resolve() matching the pattern resolver protocol."""
        return self.resolve(location_pattern)

    def resolve(self, location_pattern: str) -> tuple[Resource, ...]:
        """Resolve a location pattern into the matching existing resources.

        Args:
            location_pattern: Storage pattern such as ``s3://logs-*/**/*.gz``,
                or a location for the fallback resolver.

        Returns:
            Deduplicated matches sorted by location. Empty when nothing exists.

        Raises:
            SiftLocationError: If the pattern is malformed.
            SiftStorageError: If a listing or lookup fails fatally.
        """
        if not is_storage_location(location_pattern):
            return tuple(self._fallback.get_resources(location_pattern))
        if not self._matcher.is_pattern(strip_protocol(location_pattern)):
            resource = self._loader.get_resource(location_pattern)
            return (resource,) if resource.exists() else ()
        _LOGGER.debug("wildcard_pattern_found", pattern=location_pattern)
        return self._find_path_matching_resources(location_pattern)

    def _find_path_matching_resources(self, location_pattern: str) -> tuple[Resource, ...]:
        parts = _split_pattern(location_pattern)
        key_pattern = parts.key_pattern
        if self._matcher.is_pattern(parts.bucket_pattern):
            buckets = self._find_matching_buckets(parts.bucket_pattern)
            _LOGGER.debug(
                "bucket_pattern_resolved",
                bucket_pattern=parts.bucket_pattern,
                buckets=buckets,
            )
            # ** across buckets means every depth inside each bucket too
            if parts.bucket_pattern.startswith(RECURSIVE_WILDCARD):
                key_pattern = f"{RECURSIVE_WILDCARD}{PATH_DELIMITER}{key_pattern}"
        else:
            buckets = [parts.bucket_pattern]
        matches = self._find_matching_keys(key_pattern, buckets)
        _LOGGER.debug(
            "pattern_resolved",
            pattern=location_pattern,
            key_pattern=key_pattern,
            match_count=len(matches),
        )
        return tuple(sorted(matches.values(), key=lambda resource: resource.location))

    def _find_matching_buckets(self, bucket_pattern: str) -> list[str]:
        return [
            name
            for name in self._backend.list_buckets()
            if self._matcher.match(bucket_pattern, name)
        ]

    def _find_matching_keys(
        self,
        key_pattern: str,
        buckets: Iterable[str],
    ) -> dict[str, Resource]:
        """Resolve the key pattern in every bucket into one deduplicated map.

        Args:
            key_pattern: Literal key or key glob.
            buckets: Bucket names to search.

        Returns:
            Existing resources keyed by their canonical location, which is
            unique per bucket and key.
        """
        matches: dict[str, Resource] = {}
        key_is_pattern = self._matcher.is_pattern(key_pattern)
        for bucket in buckets:
            if key_is_pattern:
                candidates = self._list_matching_keys(bucket, key_pattern)
            else:
                candidates = [key_pattern]
            for key in candidates:
                resource = self._loader.get_resource(build_location(bucket, key))
                if resource.location in matches:
                    continue
                # a listed key deleted since the listing is dropped, not raised
                if resource.exists():
                    matches[resource.location] = resource
        return matches

    def _list_matching_keys(self, bucket: str, key_pattern: str) -> list[str]:
        """List every key under the pattern's literal prefix and filter it.

        Listing is exhaustive; every page is consumed before filtering.
        """
        prefix = self._listing_prefix(key_pattern)
        listed = list(self._backend.list_objects(bucket, prefix))
        matched = [key for key in listed if self._matcher.match(key_pattern, key)]
        _LOGGER.debug(
            "bucket_listing_filtered",
            bucket=bucket,
            prefix=prefix,
            listed_count=len(listed),
            matched_count=len(matched),
        )
        return matched

    def _listing_prefix(self, key_pattern: str) -> str | None:
        """Return the listing prefix, or None to list the whole bucket.

        Only the default matcher's wildcard syntax is known, so other
        matchers always get an unscoped listing.
        """
        if not isinstance(self._matcher, AntPathMatcher):
            return None
        return literal_prefix(key_pattern) or None


def _split_pattern(location_pattern: str) -> PatternParts:
    """Separate bucket and key patterns of a storage location pattern."""
    return PatternParts(
        bucket_pattern=bucket_name(location_pattern),
        key_pattern=object_key(location_pattern),
    )
