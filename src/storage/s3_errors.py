"""Translation of botocore faults into Sift storage errors."""

from __future__ import annotations

from botocore.exceptions import ClientError

from core.constants import PROTOCOL_PREFIX, STATUS_MOVED_PERMANENTLY, STATUS_NOT_FOUND
from core.errors import SiftStorageError

_ERROR_CODE_STATUS = {
    "NoSuchKey": STATUS_NOT_FOUND,
    "NoSuchBucket": STATUS_NOT_FOUND,
    "NotFound": STATUS_NOT_FOUND,
    "PermanentRedirect": STATUS_MOVED_PERMANENTLY,
}


def translate_client_error(error: ClientError, bucket: str, key: str | None = None) -> SiftStorageError:
    """Convert a botocore client error into a SiftStorageError.

    Args:
        error: Fault raised by the S3 client.
        bucket: Bucket addressed by the failed call.
        key: Object key addressed by the failed call, if any.

    Returns:
        Storage error carrying the HTTP status as ``code``.
    """
    code = client_error_status(error)
    target = f"{PROTOCOL_PREFIX}{bucket}/{key}" if key is not None else f"{PROTOCOL_PREFIX}{bucket}"
    return SiftStorageError(
        f"Storage request for {target} failed with status {code}: {error}",
        code=code,
        bucket=bucket,
        key=key,
    )


def client_error_status(error: ClientError) -> int | None:
    """Extract an HTTP-like status code from a client error.

    Args:
        error: Fault raised by the S3 client.

    Returns:
        Status code, or None when the response carries none.
    """
    response = getattr(error, "response", None) or {}
    status = (response.get("ResponseMetadata") or {}).get("HTTPStatusCode")
    if isinstance(status, int):
        return status
    error_code = str((response.get("Error") or {}).get("Code") or "")
    if error_code.isdigit():
        return int(error_code)
    return _ERROR_CODE_STATUS.get(error_code)
