"""
Command-line interface for the OpenAPI Python SDK
Sends a single signed request and prints the response data
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import List, Optional, Tuple

from . import __version__
from .config import HttpClientConfig
from .exceptions import OpenApiError, OpenApiSdkError
from .http_clients import HttpClient, HttpxTransport, Json, RequestsTransport


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='openapi-http',
        description='Send a signed request to the OpenAPI gateway and print the response data'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'OpenAPI Python SDK {__version__}'
    )
    parser.add_argument('method', help='HTTP method, e.g. GET or POST')
    parser.add_argument('path', help='Request path, e.g. /v1/trade/order/today')
    parser.add_argument(
        '--query', '-q',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Query parameter (repeatable)'
    )
    parser.add_argument(
        '--header', '-H',
        action='append',
        default=[],
        metavar='NAME=VALUE',
        help='Extra request header (repeatable)'
    )
    parser.add_argument('--body', help='JSON request body')
    parser.add_argument('--config', help='JSON configuration file (defaults to environment variables)')
    parser.add_argument('--timeout', type=float, help='Per-attempt timeout in seconds')
    parser.add_argument(
        '--transport',
        choices=['httpx', 'requests'],
        default='httpx',
        help='HTTP transport to use (default: httpx)'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Log requests and responses')

    return parser


def parse_pairs(values: List[str], option: str) -> List[Tuple[str, str]]:
    """Split KEY=VALUE arguments."""
    pairs = []
    for value in values:
        key, sep, item = value.partition('=')
        if not sep or not key:
            raise ValueError(f"{option} expects KEY=VALUE, got {value!r}")
        pairs.append((key, item))
    return pairs


def load_config(args) -> HttpClientConfig:
    """Load configuration from file or environment."""
    overrides = {}
    if args.timeout is not None:
        overrides['timeout'] = args.timeout

    if args.config:
        config = HttpClientConfig.from_file(args.config)
        if overrides:
            config = dataclasses.replace(config, **overrides)
        return config

    return HttpClientConfig.from_env(**overrides)


async def run_request(args) -> int:
    """Build, send and print one request."""
    config = load_config(args)
    transport = RequestsTransport() if args.transport == 'requests' else HttpxTransport()

    async with HttpClient(config, transport=transport) as client:
        builder = client.request(args.method, args.path)

        for name, value in parse_pairs(args.header, '--header'):
            builder = builder.header(name, value)

        query = parse_pairs(args.query, '--query')
        if query:
            builder = builder.query_params(query)

        if args.body is not None:
            builder = builder.body(Json(json.loads(args.body)))

        result = await builder.response(Json).send()

    print(json.dumps(result.value, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, 2 for an API error, 1 for other failures)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        return asyncio.run(run_request(args))
    except OpenApiError as e:
        print(f"Error: code={e.code} message={e.message} trace_id={e.trace_id}", file=sys.stderr)
        return 2
    except (OpenApiSdkError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
