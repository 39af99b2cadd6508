"""``wiz run`` and ``wiz config`` commands.

Resolves an import string to a ServerConfig, applies command-line
overrides, and hands the result to ``wiz.run``.
"""

import argparse
import sys

from wiz.cli._resolve import resolve_config
from wiz.config import ServerConfig, print_config


def _load(args: argparse.Namespace) -> ServerConfig:
    try:
        return resolve_config(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def apply_overrides(config: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    """Command-line flags win over the imported configuration."""
    if args.host:
        config = config.set_host(args.host)
    if args.port:
        config = config.set_port(args.port)
    if args.workers:
        config = config.set_workers(args.workers)
    return config


def run_server(args: argparse.Namespace) -> None:
    from wiz.server.bootstrap import run

    config = apply_overrides(_load(args), args)
    raise SystemExit(run(config))


def show_config(args: argparse.Namespace) -> None:
    print_config(_load(args))
