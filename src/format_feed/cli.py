"""CLI for converting Connections ATOM XML files to JSON."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from common.cli_helpers import dump_json, save_json_local, setup_logging
from format_feed.config import load_config
from format_feed.format_feed import FeedFormatter
from format_feed.helpers import parse_format_feed_args
from format_feed.models import FeedError

logger = logging.getLogger(__name__)


def read_documents(paths: list[str]) -> tuple[list[tuple[str, bytes]], int]:
    """Read (label, xml) pairs from files, or a single document from stdin.

    Unreadable files are logged and skipped; the second value counts them.
    """
    if not paths:
        return [("stdin", sys.stdin.buffer.read())], 0

    documents = []
    failed = 0
    for path in paths:
        try:
            documents.append((Path(path).stem, Path(path).read_bytes()))
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            failed += 1
    return documents, failed


async def format_documents(
    formatter: FeedFormatter, documents: list[tuple[str, bytes]], name: str
) -> list:
    """Format all documents concurrently; failures come back as exceptions."""
    return await asyncio.gather(
        *(formatter.format(xml, name) for _, xml in documents),
        return_exceptions=True,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_format_feed_args(argv)
    config = load_config(args.config)

    if args.name:
        config.list_name = args.name
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(config.level)

    documents, failed = read_documents(args.paths)
    formatter = FeedFormatter(logging.getLogger("format_feed"))
    results = asyncio.run(format_documents(formatter, documents, config.list_name))

    now = datetime.now(timezone.utc)
    for (label, _), result in zip(documents, results):
        if isinstance(result, FeedError):
            logger.error("Failed to format %s: %s", label, result)
            failed += 1
            continue
        if isinstance(result, BaseException):
            raise result

        if args.load_local:
            filepath = save_json_local(
                result, label, now, output_dir=config.output_dir, pretty=config.pretty
            )
            logger.info("Saved %d entries to %s", len(result[config.list_name]), filepath)
        else:
            print(dump_json(result, config.pretty))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
