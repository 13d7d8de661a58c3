"""S3 implementation of the storage backend contract.

This module encapsulates boto3 client creation, paged listings,
metadata lookups, and streaming channels for S3-compatible services.
"""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Iterator
from urllib.parse import quote

from botocore.exceptions import ClientError

from core.config import SiftConfig
from core.constants import ABSENT_STATUS_CODES, PROTOCOL_PREFIX
from core.errors import SiftDependencyError, SiftStorageError
from core.logging_config import get_logger
from core.types import ObjectMetadata
from storage.s3_channels import S3ObjectWriter, S3ReadChannel, S3WriteChannel
from storage.s3_errors import client_error_status, translate_client_error

_LOGGER = get_logger(__name__)


def create_s3_client(config: SiftConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile, region, and endpoint.

    Returns:
        Boto3 S3 client.

    Raises:
        SiftDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise SiftDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to resolve s3:// locations."
        ) from error
    session = boto3.session.Session(**_build_boto3_session_kwargs(config))
    client_kwargs: dict[str, str] = {}
    if config.s3_endpoint_url:
        client_kwargs["endpoint_url"] = config.s3_endpoint_url
    return session.client("s3", **client_kwargs)


def _build_boto3_session_kwargs(config: SiftConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs


class S3StorageBackend:
    """Storage backend over a boto3 S3 client."""

    def __init__(self, s3_client: Any) -> None:
        """Create backend.

        Args:
            s3_client: Boto3 S3 client shared by all resources.
        """
        self._client = s3_client

    @classmethod
    def from_config(cls, config: SiftConfig) -> "S3StorageBackend":
        """Build a backend with a client configured from runtime config."""
        return cls(create_s3_client(config))

    def list_buckets(self) -> Iterator[str]:
        """Yield all bucket names, following continuation tokens.

        Raises:
            SiftStorageError: If the listing call fails.
        """
        request: dict[str, str] = {}
        while True:
            try:
                response = self._client.list_buckets(**request)
            except ClientError as error:
                raise translate_client_error(error, bucket="*") from error
            for bucket in response.get("Buckets", []):
                yield bucket["Name"]
            token = response.get("ContinuationToken")
            if not token:
                return
            request = {"ContinuationToken": token}

    def list_objects(self, bucket: str, prefix: str | None = None) -> Iterator[str]:
        """Yield every object key in a bucket across all listing pages.

        Args:
            bucket: Bucket to list.
            prefix: Optional key prefix scoping the listing.

        Raises:
            SiftStorageError: If a listing page fails.
        """
        request: dict[str, str] = {"Bucket": bucket}
        if prefix:
            request["Prefix"] = prefix
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(**request):
                for obj in page.get("Contents", []):
                    yield obj["Key"]
        except ClientError as error:
            raise translate_client_error(error, bucket, prefix) from error

    def get_metadata(self, bucket: str, key: str) -> ObjectMetadata | None:
        """Fetch object metadata with a HEAD request.

        Args:
            bucket: Object bucket.
            key: Object key.

        Returns:
            Metadata record, or None for an empty key which cannot name an object.

        Raises:
            SiftStorageError: If the HEAD request fails, including 404 and 301.
        """
        if not key:
            return None
        try:
            response = self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as error:
            raise translate_client_error(error, bucket, key) from error
        return ObjectMetadata(
            size=int(response.get("ContentLength", 0)),
            updated=response["LastModified"],
            self_url=self._object_url(bucket, key),
        )

    def open_read_channel(self, bucket: str, key: str) -> BinaryIO:
        """Open a lazily fetched binary reader for an object.

        Raises:
            SiftStorageError: If the key is empty.
        """
        _require_object_key(bucket, key)
        return io.BufferedReader(S3ReadChannel(self._client, bucket, key))

    def open_write_channel(self, bucket: str, key: str) -> BinaryIO:
        """Open a binary writer that uploads the object on a clean close.

        Raises:
            SiftStorageError: If the key is empty.
        """
        _require_object_key(bucket, key)
        return S3ObjectWriter(S3WriteChannel(self._client, bucket, key))

    def delete_object(self, bucket: str, key: str) -> bool:
        """Delete an object, reporting whether it existed beforehand.

        S3 deletes are idempotent and silent, so existence is probed with a
        HEAD request first.

        Raises:
            SiftStorageError: If the probe or delete fails for another reason.
        """
        if not key:
            return False
        try:
            self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as error:
            if client_error_status(error) in ABSENT_STATUS_CODES:
                _LOGGER.debug("delete_skipped_missing_object", bucket=bucket, key=key)
                return False
            raise translate_client_error(error, bucket, key) from error
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except ClientError as error:
            raise translate_client_error(error, bucket, key) from error
        _LOGGER.info("object_deleted", bucket=bucket, key=key)
        return True

    def _object_url(self, bucket: str, key: str) -> str:
        """Build the path-style URL addressing an object."""
        endpoint = str(self._client.meta.endpoint_url).rstrip("/")
        return f"{endpoint}/{bucket}/{quote(key)}"


def _require_object_key(bucket: str, key: str) -> None:
    """Reject the empty key, which cannot name an object."""
    if not key:
        raise SiftStorageError(
            f"Object key for bucket '{bucket}' is empty. Use {PROTOCOL_PREFIX}bucket/key.",
            bucket=bucket,
            key=key,
        )
