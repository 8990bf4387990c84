"""Command-line entry point for the scraper builder."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence

from .config import RUNTIMES, ServerConfig, config_from_env, get_runtime
from .lifecycle import ScraperLifecycle
from .tools import list_scrapers, run_scraper, save_scraper

logger = logging.getLogger("scraper_builder.cli")

DEFAULT_COMMAND = "serve"


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return (DEFAULT_COMMAND,)
    first = argv[0]
    if first in commands or first in ("-h", "--help"):
        return argv
    return (DEFAULT_COMMAND, *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--directory",
        type=Path,
        default=None,
        help="Project directory holding scrapers/ and data/ (default: current directory)",
    )
    parser.add_argument(
        "--runtime",
        choices=sorted(RUNTIMES),
        default=None,
        help="Scraper language to save, check and run (default: python)",
    )
    parser.add_argument(
        "--run-timeout",
        type=float,
        default=None,
        help="Seconds before a running scraper is killed (default: no limit)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Browser tools and a reusable scraper manager exposed over MCP.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server over stdio")
    _add_common_arguments(serve_parser)
    serve_parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )

    save_parser = subparsers.add_parser("save", help="Save and validate a scraper")
    save_parser.add_argument("name", help="Scraper name (sanitized to a safe file name)")
    save_parser.add_argument(
        "source",
        help="File containing the scraper code, or - to read from stdin",
    )
    save_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace an existing scraper with the same name",
    )
    _add_common_arguments(save_parser)

    list_parser = subparsers.add_parser("list", help="List saved scrapers")
    _add_common_arguments(list_parser)

    run_parser = subparsers.add_parser("run", help="Run a saved scraper and print its data")
    run_parser.add_argument("name", help="Scraper name, without extension")
    _add_common_arguments(run_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ServerConfig:
    config = config_from_env()
    if args.directory is not None:
        config.base_dir = args.directory.expanduser().resolve()
    if args.runtime:
        config.runtime = get_runtime(args.runtime)
    if args.run_timeout is not None:
        config.run_timeout = args.run_timeout
    if getattr(args, "headed", False):
        config.headed = True
    return config


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _emit(response: Dict[str, Any]) -> int:
    sys.stdout.write(json.dumps(response, indent=2) + "\n")
    sys.stdout.flush()
    return 0 if response.get("success") else 1


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    config = build_config(args)

    if args.command == "serve":
        from .mcp_server import main as serve

        serve(config, verbose=args.verbose)
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    lifecycle = ScraperLifecycle(config)

    if args.command == "save":
        try:
            code = _read_source(args.source)
        except OSError as exc:
            logger.error("Could not read %s: %s", args.source, exc)
            sys.exit(2)
        status = _emit(save_scraper(lifecycle, args.name, code, overwrite=args.overwrite))
    elif args.command == "list":
        status = _emit(list_scrapers(lifecycle))
    else:
        status = _emit(run_scraper(lifecycle, args.name))
    sys.exit(status)


if __name__ == "__main__":
    main()
