"""``kennel run`` — configure logging and start the HTTP server."""

import argparse
import logging
import sys

from kennel.config import AppConfig
from kennel.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def build_config(args: argparse.Namespace) -> AppConfig:
    """Map CLI flags onto ``AppConfig``; unset flags keep the defaults."""
    defaults = AppConfig()
    return AppConfig(
        host=args.host or defaults.host,
        port=args.port if args.port is not None else defaults.port,
        debug=args.debug,
        log_level=args.log_level or defaults.log_level,
        seed=not args.no_seed,
    )


def configure_logging(config: AppConfig) -> None:
    """Install a root stderr handler at the configured level."""
    logging.basicConfig(
        level=config.effective_log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def run_server(args: argparse.Namespace) -> None:
    """Build the kennel app from CLI flags and serve it."""
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(config)

    from kennel.server.serve import run_server as serve
    from kennel.service import create_app

    app = create_app(config)
    serve(app, config.host, config.port, log_level=config.effective_log_level)
