#!/usr/bin/env python3
"""CLI entry point: watch an org file and publish it to Google Docs."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler

from .core.operations import SyncOperations
from .core.paths import resolve_home
from .core.watcher import WatchLoop
from .models.config import DocSyncConfig

console = Console()
err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsync",
        description="Watch an org file and keep a Google Doc in sync with it",
    )
    parser.add_argument("document_name", help="Google Doc title to create or replace")
    parser.add_argument("file_path", help="Org file to watch (~ is expanded)")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--once", action="store_true", help="Sync once and exit instead of watching")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = DocSyncConfig.load(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        err_console.print(f"[red]Configuration error: {e}")
        return 1

    setup_logging("DEBUG" if args.verbose else config.log_level)

    source = resolve_home(args.file_path)
    if not Path(source).exists():
        err_console.print(f"[red]File not found: {source}")
        return 1

    ops = SyncOperations(config)

    if args.once:
        result = ops.sync(source, args.document_name)
        return 0 if result.success else 1

    loop = WatchLoop(
        Path(source),
        lambda: ops.sync(source, args.document_name),
        debounce_seconds=config.debounce_seconds,
    )
    console.print(f"Watching {source} for {args.document_name} (Ctrl+C to stop)...", style="blue")
    try:
        loop.run()
    except KeyboardInterrupt:
        console.print("\nStopped.")
    finally:
        loop.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
