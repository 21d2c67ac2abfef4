"""Run the proxy: ``python -m anthroq``."""

import argparse
import dataclasses

import uvicorn

from .app import create_app
from .config_loader import load_settings
from .logging import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Anthropic Messages to Groq translating proxy")
    parser.add_argument("--config", default=None, help="Config file path (default: ANTHROQ_CONFIG or configs/config.yaml)")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = load_settings(args.config)

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    logger = setup_logging(settings.log_level)

    logger.info("Configured bind address %s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
