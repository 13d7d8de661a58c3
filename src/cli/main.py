"""Sift CLI entry points.
This module exposes commands for resolving and handling resource locations.
It maps argparse commands onto the resolver SDK.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import shutil
import sys
from typing import Sequence

from core.config import SiftConfig, parse_log_level
from core.constants import DEFAULT_COPY_CHUNK_SIZE, SUPPORTED_LOG_LEVELS
from core.errors import SiftError
from core.logging_config import configure_logging
from resolve.bootstrap import build_resource_resolver
from resolve.pattern_resolver import PathMatchingStorageResolver


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sift", description="Resolve and access storage locations")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=SUPPORTED_LOG_LEVELS,
        help="Override SIFT_LOG_LEVEL for this command",
    )
    parser.add_argument("--local-root", help="Override SIFT_LOCAL_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    resolve_parser = subparsers.add_parser("resolve", help="List existing resources matching a pattern")
    resolve_parser.add_argument("pattern", help="Location or glob, e.g. s3://bucket/**/*.txt")
    stat_parser = subparsers.add_parser("stat", help="Show metadata for one location")
    stat_parser.add_argument("location")
    cat_parser = subparsers.add_parser("cat", help="Write resource bytes to stdout")
    cat_parser.add_argument("location")
    put_parser = subparsers.add_parser("put", help="Upload a local file to a location")
    put_parser.add_argument("location")
    put_parser.add_argument("source", help="Local file to upload")
    rm_parser = subparsers.add_parser("rm", help="Delete one resource")
    rm_parser.add_argument("location")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Sift CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        resolver = _build_resolver(args)
        if args.command == "resolve":
            return _run_resolve_command(resolver, args)
        if args.command == "stat":
            return _run_stat_command(resolver, args)
        if args.command == "cat":
            return _run_cat_command(resolver, args)
        if args.command == "put":
            return _run_put_command(resolver, args)
        if args.command == "rm":
            return _run_rm_command(resolver, args)
    except SiftError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_resolver(args: argparse.Namespace) -> PathMatchingStorageResolver:
    """Build config and resolver with optional CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Composed resolver.
    """
    config = SiftConfig.from_env()
    if args.log_level:
        config = replace(config, log_level=parse_log_level(args.log_level))
    if args.local_root:
        config = replace(config, local_root=Path(args.local_root).expanduser().resolve())
    configure_logging(config.log_level)
    return build_resource_resolver(config)


def _run_resolve_command(resolver: PathMatchingStorageResolver, args: argparse.Namespace) -> int:
    """Handle resolve command.

    Args:
        resolver: Composed resolver.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for resource in resolver.resolve(args.pattern):
        print(resource.location)
    return 0


def _run_stat_command(resolver: PathMatchingStorageResolver, args: argparse.Namespace) -> int:
    """Handle stat command.

    Args:
        resolver: Composed resolver.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the resource does not exist.
    """
    resource = resolver.get_resource(args.location)
    if not resource.exists():
        print("exists=false")
        return 1
    print("exists=true")
    print(f"size={resource.size()}")
    print(f"last_modified={resource.last_modified().isoformat()}")
    print(f"url={resource.self_reference()}")
    return 0


def _run_cat_command(resolver: PathMatchingStorageResolver, args: argparse.Namespace) -> int:
    """Handle cat command."""
    resource = resolver.get_resource(args.location)
    with resource.open_for_read() as reader:
        shutil.copyfileobj(reader, sys.stdout.buffer, DEFAULT_COPY_CHUNK_SIZE)
    sys.stdout.buffer.flush()
    return 0


def _run_put_command(resolver: PathMatchingStorageResolver, args: argparse.Namespace) -> int:
    """Handle put command.

    Args:
        resolver: Composed resolver.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    source_path = Path(args.source).expanduser()
    if not source_path.is_file():
        print(f"error=Source file {source_path} does not exist. Provide an existing file.")
        return 1
    resource = resolver.get_resource(args.location)
    with source_path.open("rb") as reader, resource.open_for_write() as writer:
        shutil.copyfileobj(reader, writer, DEFAULT_COPY_CHUNK_SIZE)
    print(resource.location)
    return 0


def _run_rm_command(resolver: PathMatchingStorageResolver, args: argparse.Namespace) -> int:
    """Handle rm command."""
    resource = resolver.get_resource(args.location)
    deleted = resource.delete()
    print(f"deleted={str(deleted).lower()}")
    return 0
