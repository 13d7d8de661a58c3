"""Unit tests for resolver composition."""

from __future__ import annotations

from pathlib import Path

from core.config import SiftConfig
from resolve import bootstrap
from resolve.bootstrap import build_resource_resolver
from storage.filesystem import FileSystemResource


def _config(local_root: Path) -> SiftConfig:
    return SiftConfig(
        s3_region=None,
        s3_profile=None,
        s3_endpoint_url=None,
        local_root=local_root,
    )


def test_injected_backend_serves_storage_locations(storage_backend, tmp_path) -> None:
    """An injected backend should back every storage lookup."""
    resolver = build_resource_resolver(_config(tmp_path), backend=storage_backend)

    resources = resolver.resolve("s3://beta/**/*.txt")

    assert [resource.location for resource in resources] == [
        "s3://beta/a.txt",
        "s3://beta/docs/e.txt",
    ]


def test_default_fallback_uses_local_root(storage_backend, tmp_path) -> None:
    """Non-storage locations should resolve under the configured local root."""
    (tmp_path / "notes.md").write_text("hello", encoding="utf-8")
    resolver = build_resource_resolver(_config(tmp_path), backend=storage_backend)

    resource = resolver.get_resource("notes.md")
    matches = resolver.resolve("*.md")

    assert isinstance(resource, FileSystemResource)
    assert resource.path == tmp_path / "notes.md"
    assert [match.path for match in matches] == [tmp_path / "notes.md"]


def test_backend_is_built_from_config_when_omitted(storage_backend, tmp_path, monkeypatch) -> None:
    """Omitting the backend should build one from the runtime config."""
    seen_configs: list[SiftConfig] = []

    def _fake_from_config(config: SiftConfig):
        seen_configs.append(config)
        return storage_backend

    monkeypatch.setattr(bootstrap.S3StorageBackend, "from_config", staticmethod(_fake_from_config))
    config = _config(tmp_path)

    resolver = build_resource_resolver(config)

    assert seen_configs == [config]
    assert resolver.get_resource("s3://gamma-logs/key").exists()


def test_injected_fallback_receives_local_locations(storage_backend, tmp_path) -> None:
    """An injected fallback should replace the filesystem default."""

    class _FakeFallback:
        def get_resource(self, location: str) -> str:
            return f"fake:{location}"

        def get_resources(self, location_pattern: str) -> tuple[str, ...]:
            return (f"fake:{location_pattern}",)

    resolver = build_resource_resolver(
        _config(tmp_path),
        backend=storage_backend,
        fallback=_FakeFallback(),
    )

    assert resolver.get_resource("a/b") == "fake:a/b"
    assert resolver.resolve("a/*") == ("fake:a/*",)


def test_sdk_module_exposes_composition_step() -> None:
    """The SDK module should re-export the resolver entry points."""
    import sift

    assert sift.build_resource_resolver is build_resource_resolver
    assert "PathMatchingStorageResolver" in sift.__all__
