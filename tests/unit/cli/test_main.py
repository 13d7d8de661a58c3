"""Unit tests for CLI command handling."""

from __future__ import annotations

import pytest

from cli import main as cli_main
from cli.main import main
from resolve.bootstrap import build_resource_resolver as real_build_resource_resolver


@pytest.fixture
def built_configs(storage_backend, monkeypatch) -> list:
    """Route CLI resolver construction onto the in-memory backend."""
    configs: list = []

    def _fake_build(config):
        configs.append(config)
        return real_build_resource_resolver(config, backend=storage_backend)

    for name in ("SIFT_LOG_LEVEL", "SIFT_LOCAL_ROOT", "SIFT_S3_ENDPOINT_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli_main, "build_resource_resolver", _fake_build)
    return configs


def test_cli_resolve_prints_sorted_matches(built_configs, capsys) -> None:
    """CLI resolve should print one location per match."""
    exit_code = main(["resolve", "s3://*/a.txt"])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output == ["s3://alpha/a.txt", "s3://beta/a.txt"]


def test_cli_stat_reports_metadata(built_configs, capsys) -> None:
    """CLI stat should print size and url for an existing object."""
    exit_code = main(["stat", "s3://alpha/docs/c.txt"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "exists=true" in output
    assert "size=7" in output
    assert "url=https://storage.test/alpha/docs/c.txt" in output


def test_cli_stat_missing_object_fails(built_configs, capsys) -> None:
    """CLI stat should exit non-zero for absent objects."""
    exit_code = main(["stat", "s3://alpha/missing"])

    assert exit_code == 1
    assert capsys.readouterr().out.strip() == "exists=false"


def test_cli_cat_streams_bytes(built_configs, capsysbinary) -> None:
    """CLI cat should write the raw object bytes to stdout."""
    exit_code = main(["cat", "s3://gamma-logs/key"])

    assert exit_code == 0
    assert capsysbinary.readouterr().out == b"gamma-key"


def test_cli_put_uploads_local_file(built_configs, storage_backend, tmp_path, capsys) -> None:
    """CLI put should copy a local file into the target object."""
    source_path = tmp_path / "upload.bin"
    source_path.write_bytes(b"payload")

    exit_code = main(["put", "s3://beta/new/upload.bin", str(source_path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "s3://beta/new/upload.bin"
    assert storage_backend.objects["beta"]["new/upload.bin"] == b"payload"


def test_cli_put_missing_source_fails(built_configs, tmp_path, capsys) -> None:
    """CLI put should reject a source file that does not exist."""
    exit_code = main(["put", "s3://beta/x", str(tmp_path / "absent.bin")])

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("error=")


def test_cli_rm_reports_prior_existence(built_configs, capsys) -> None:
    """CLI rm should report whether an object was deleted."""
    first_exit = main(["rm", "s3://alpha/b.log"])
    second_exit = main(["rm", "s3://alpha/b.log"])
    output = capsys.readouterr().out.splitlines()

    assert (first_exit, second_exit) == (0, 0)
    assert output == ["deleted=true", "deleted=false"]


def test_cli_reports_malformed_location(built_configs, capsys) -> None:
    """CLI should print library errors and exit non-zero."""
    exit_code = main(["resolve", "s3://bucket*"])

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("error=Invalid storage location")


def test_cli_overrides_apply_to_config(built_configs, tmp_path) -> None:
    """CLI flags should override environment configuration."""
    main(["--log-level", "debug", "--local-root", str(tmp_path), "resolve", "s3://alpha/a.txt"])

    config = built_configs[-1]
    assert config.log_level == "DEBUG"
    assert config.local_root == tmp_path.resolve()
