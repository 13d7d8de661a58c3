"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def storage_backend():
    """In-memory backend seeded with two buckets of nested objects."""
    from tests.fake_storage import InMemoryStorageBackend

    return InMemoryStorageBackend(
        {
            "alpha": {
                "a.txt": b"alpha-a",
                "b.log": b"alpha-b",
                "docs/c.txt": b"alpha-c",
                "docs/deep/d.txt": b"alpha-d",
            },
            "beta": {
                "a.txt": b"beta-a",
                "docs/e.txt": b"beta-e",
            },
            "gamma-logs": {
                "key": b"gamma-key",
            },
        }
    )
