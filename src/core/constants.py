"""Core constants used across Sift modules.

This module centralizes location grammar and backend status codes.
Keeping values here avoids magic literals in resolution logic.
"""

from __future__ import annotations

PROTOCOL_PREFIX = "s3://"
PATH_DELIMITER = "/"
VERSION_DELIMITER = "^"
RECURSIVE_WILDCARD = "**"
WILDCARD_CHARACTERS = ("*", "?")
FILE_PROTOCOL_PREFIX = "file:"
STATUS_MOVED_PERMANENTLY = 301
STATUS_NOT_FOUND = 404
ABSENT_STATUS_CODES = (STATUS_NOT_FOUND, STATUS_MOVED_PERMANENTLY)
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_COPY_CHUNK_SIZE = 1024 * 1024
WRITE_SPOOL_MAX_BYTES = 8 * 1024 * 1024
