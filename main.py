"""flarelog demo — emits sample records through a FlareHandler."""

import dataclasses
import logging
import sys
from argparse import ArgumentParser

from flarelog.attrs import Attr
from flarelog.config import load_config
from flarelog.errors import SinkError
from flarelog.handler import FlareHandler


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="flarelog-demo",
        description="Log sample records to the console and a log file.",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--level", help="Minimum level (e.g. DEBUG, INFO, WARNING)")
    parser.add_argument(
        "--add-source",
        action="store_true",
        help="Include the call site as a 'source' attribute",
    )
    parser.add_argument("--log-file", help="Log file path (default: ./logs.log)")
    return parser


def _demo_logger(name: str, handler: logging.Handler) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return logger


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    # CLI flags take precedence over YAML and env vars
    overrides = {}
    if args.level:
        overrides["level"] = args.level
    if args.add_source:
        overrides["add_source"] = True
    if args.log_file:
        overrides["log_file"] = args.log_file
    config = dataclasses.replace(config, **overrides)

    try:
        handler = FlareHandler(config.handler_options(), file_sink=config.log_file)
    except SinkError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger = _demo_logger("flarelog.demo", handler)
    logger.info("Info Level Log")
    logger.debug("This is a debug message")
    logger.warning("This is a warn message")
    logger.error("This is an error message", extra={"code": 500})

    request_handler = handler.with_attrs([Attr("service", "demo")]).with_group("request")
    request_logger = _demo_logger("flarelog.demo.request", request_handler)
    request_logger.info("Request handled", extra={"method": "GET", "status": 200})

    handler.close()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
