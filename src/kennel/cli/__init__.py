"""Kennel CLI — serve the API and inspect its route table.

Entry point registered as ``kennel`` in ``pyproject.toml``::

    [project.scripts]
    kennel = "kennel.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``kennel`` command."""
    parser = argparse.ArgumentParser(
        prog="kennel",
        description="Kennel — an in-memory JSON REST API for dogs and hubs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- kennel run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the HTTP server")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug logging and exception details in 500 responses",
    )
    run_parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Start with empty stores (no example records)",
    )
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=("critical", "error", "warning", "info", "debug"),
        help="Log level (default: info)",
    )

    # -- kennel routes ----------------------------------------------------
    subparsers.add_parser("routes", help="List routes in match order")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from kennel.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from kennel.cli._routes import run_routes

        run_routes(args)
