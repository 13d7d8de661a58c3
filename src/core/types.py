"""Shared typed models.

This module defines immutable data models exchanged between the
storage backend, resources, and resolution layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ObjectMetadata:
    """Metadata record for one stored object.

    Attributes:
        size: Object size in bytes.
        updated: Last modification timestamp reported by the backend.
        self_url: Backend URL addressing the object.
    """

    size: int
    updated: datetime
    self_url: str


@dataclass(frozen=True)
class PatternParts:
    """Location pattern split into its two hierarchy levels.

    Attributes:
        bucket_pattern: Glob applied to bucket names.
        key_pattern: Glob applied to object keys.
    """

    bucket_pattern: str
    key_pattern: str
