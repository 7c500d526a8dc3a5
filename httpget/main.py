"""
Entrypoint: parse the url argument, load config, init logging,
run the fetch and turn any failure into exit status 1.
"""

import argparse
import logging
import sys
from typing import List, Optional

import httpx
from dotenv import load_dotenv

from httpget.config import Config
from httpget.fetcher import HTTPFetcher, TransportError

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """The command line is missing the url or is otherwise malformed."""


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def setup_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='httpget',
        description='Issue one HTTP GET and stream the response body to stdout'
    )
    parser.add_argument('url', nargs='?', help='URL to request')
    parser.add_argument('--config', help='Path to a YAML config file')
    return parser


def setup_logging(log_config: dict):
    """Initialize logging. Records go to stderr since stdout carries the body."""
    logging.basicConfig(
        level=getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO),
        format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None):
    """Main entry point. Exits 1 on usage, config or transport failure."""
    parser = setup_parser()
    try:
        args = parser.parse_args(argv)
        if args.url is None:
            raise UsageError("missing argument: url")
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    load_dotenv()

    try:
        config = Config(config_path=args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.logging)

    fetcher = HTTPFetcher(
        follow_redirects=config.fetcher['follow_redirects'],
        transport=transport
    )

    try:
        fetcher.fetch(args.url)
    except TransportError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        logger.exception(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
