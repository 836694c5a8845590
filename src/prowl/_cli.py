"""Prowl CLI — prowl routes / prowl serve.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Directory-driven controller routing for Chirp.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved route table",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument(
        "--controllers", default=None, help="Controllers directory (default: controllers)",
    )

    # prowl serve
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the Chirp app",
    )
    serve_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    serve_parser.add_argument(
        "--controllers", default=None, help="Controllers directory (default: controllers)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def _routes(root: str, controllers: str | None) -> int:
    from prowl._errors import ProwlError
    from prowl.app import collect_routes
    from prowl.config_loader import load_config
    from prowl.report import print_routes

    try:
        config = load_config(Path(root), controllers_dir=controllers)
        table = asyncio.run(collect_routes(config))
    except ProwlError as exc:
        print(f"prowl: {exc}", file=sys.stderr)
        return 1

    print_routes(table.routes, config=config)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        sys.exit(_routes(args.root, args.controllers))
    elif args.command == "serve":
        from prowl.app import serve

        serve(
            root=args.root,
            controllers_dir=args.controllers,
            host=args.host,
            port=args.port,
        )


if __name__ == "__main__":
    main()
