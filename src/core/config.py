"""Runtime configuration model for Sift.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import SiftConfigError


@dataclass(frozen=True)
class SiftConfig:
    """Validated runtime configuration.

    Attributes:
        s3_region: Optional default AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
        s3_endpoint_url: Optional endpoint for S3-compatible services.
        local_root: Base directory for non-storage locations.
        log_level: Minimum level emitted by structured logging.
    """

    s3_region: str | None
    s3_profile: str | None
    s3_endpoint_url: str | None
    local_root: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "SiftConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SiftConfigError: If environment values are invalid.
        """
        endpoint_url = _parse_endpoint_url(os.getenv("SIFT_S3_ENDPOINT_URL"))
        local_root_value = os.getenv("SIFT_LOCAL_ROOT", ".")
        log_level = parse_log_level(os.getenv("SIFT_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            s3_region=os.getenv("SIFT_S3_REGION") or None,
            s3_profile=os.getenv("SIFT_S3_PROFILE") or None,
            s3_endpoint_url=endpoint_url,
            local_root=Path(local_root_value).expanduser().resolve(),
            log_level=log_level,
        )


def parse_log_level(raw_value: str) -> str:
    """Normalize and validate a log level name.

    Args:
        raw_value: Level name in any case.

    Returns:
        Upper-case level name.

    Raises:
        SiftConfigError: If the level is not supported.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise SiftConfigError(
            f"Invalid log level '{raw_value}': expected one of {SUPPORTED_LOG_LEVELS}. "
            "Set SIFT_LOG_LEVEL to a supported level."
        )
    return level


def _parse_endpoint_url(raw_value: str | None) -> str | None:
    """Validate the optional S3 endpoint URL.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Endpoint URL, or None when unset.

    Raises:
        SiftConfigError: If the URL has no http(s) scheme.
    """
    if not raw_value:
        return None
    if not raw_value.startswith(("http://", "https://")):
        raise SiftConfigError(
            f"Invalid SIFT_S3_ENDPOINT_URL value '{raw_value}': expected an http(s) URL. "
            "Include the scheme, for example https://minio.local:9000."
        )
    return raw_value.rstrip("/")
