"""Wiz CLI — run a server configuration from an import string.

Entry point registered as ``wiz`` in ``pyproject.toml``::

    [project.scripts]
    wiz = "wiz.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wiz`` command."""
    parser = argparse.ArgumentParser(
        prog="wiz",
        description="Wiz — declarative server configuration over an ASGI engine.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wiz run ----------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:config)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--workers", type=int, default=None, help="Worker count")

    # -- wiz config -------------------------------------------------------
    config_parser = subparsers.add_parser("config", help="Print a resolved configuration")
    config_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:config)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wiz.cli._run import run_server

        run_server(args)
    elif args.command == "config":
        from wiz.cli._run import show_config

        show_config(args)
