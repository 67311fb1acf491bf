"""Helper functions for the format_feed CLI."""

from __future__ import annotations

import argparse

from format_feed.config import LOG_LEVELS


def parse_format_feed_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for format_feed.'''

    parser = argparse.ArgumentParser(description="Convert Connections ATOM XML to JSON")
    parser.add_argument(
        "paths",
        nargs="*",
        help="ATOM XML files to format (default: read stdin).",
    )
    parser.add_argument(
        "--config",
        default="prod",
        help="Config name (test/prod) or path to YAML file (default: prod)",
    )
    parser.add_argument("--name", default=None, help="Override the output list name.")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level.",
    )
    parser.add_argument("--load-local", action="store_true")
    return parser.parse_args(argv)
