"""Streaming channels over S3 objects.

This module adapts boto3 object calls to Python binary IO objects.
Reads open lazily on first access; writes upload when the channel closes cleanly.
"""

from __future__ import annotations

import io
import tempfile
from typing import Any

from botocore.exceptions import ClientError

from core.constants import WRITE_SPOOL_MAX_BYTES
from storage.s3_errors import translate_client_error


class S3ReadChannel(io.RawIOBase):
    """Raw reader that fetches the object body on first read."""

    def __init__(self, s3_client: Any, bucket: str, key: str) -> None:
        super().__init__()
        self._client = s3_client
        self._bucket = bucket
        self._key = key
        self._body: Any = None

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        body = self._open_body()
        data = body.read(len(buffer))
        size = len(data)
        buffer[:size] = data
        return size

    def close(self) -> None:
        if self._body is not None:
            self._body.close()
            self._body = None
        super().close()

    def _open_body(self) -> Any:
        """Issue the GET request once and keep the streaming body.

        Raises:
            SiftStorageError: If the object cannot be fetched.
        """
        if self._body is None:
            try:
                response = self._client.get_object(Bucket=self._bucket, Key=self._key)
            except ClientError as error:
                raise translate_client_error(error, self._bucket, self._key) from error
            self._body = response["Body"]
        return self._body


class S3WriteChannel(io.RawIOBase):
    """Raw writer that spools bytes and uploads them on close.

    A channel dropped without an explicit close is discarded, not uploaded.
    """

    def __init__(self, s3_client: Any, bucket: str, key: str) -> None:
        super().__init__()
        self._client = s3_client
        self._bucket = bucket
        self._key = key
        self._spool = tempfile.SpooledTemporaryFile(max_size=WRITE_SPOOL_MAX_BYTES)

    def writable(self) -> bool:
        return True

    def write(self, data: Any) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed write channel.")
        return self._spool.write(data)

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._spool.seek(0)
            self._client.put_object(Bucket=self._bucket, Key=self._key, Body=self._spool)
        except ClientError as error:
            raise translate_client_error(error, self._bucket, self._key) from error
        finally:
            self._spool.close()
            super().close()

    def discard(self) -> None:
        """Close the channel without uploading the spooled bytes."""
        if self.closed:
            return
        self._spool.close()
        super().close()

    def __del__(self) -> None:
        self.discard()


class S3ObjectWriter(io.BufferedWriter):
    """Buffered writer that uploads only when closed cleanly.

    Leaving a ``with`` block through an exception or garbage collection of an
    unclosed writer discards the pending bytes.
    """

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        if exc_type is not None:
            self.raw.discard()
            return None
        return super().__exit__(exc_type, exc_value, traceback)

    def __del__(self) -> None:
        if not self.closed:
            self.raw.discard()
