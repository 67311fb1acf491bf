"""Convert Connections ATOM XML into named lists of normalized entries."""

import asyncio
import json
import logging
from typing import Any, Optional, Union

from format_feed.create_entry import create_entry
from format_feed.models import (
    WIKI,
    FeedParseError,
    FeedResult,
    FormattedFeed,
    UnrecognizedFeedError,
)
from format_feed.xml_tree import attrs, first, parse_xml, text, values

logger = logging.getLogger(__name__)


class FeedFormatter:
    """
    Formats ATOM XML from Connections into JSON-ready entry lists.

    Holds nothing but the diagnostics logger, so one instance can format
    any number of feeds concurrently.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    async def format(self, xml: Union[str, bytes], name: str) -> FeedResult:
        """
        Convert ATOM XML into JSON entries placed in a list called ``name``.

        Whether the XML holds one entry or many, the result is always a list.

        Args:
            xml: ATOM XML text
            name: Key of the entry list in the result

        Returns:
            ``{name: [entry, ...]}`` in document order

        Raises:
            FeedParseError: If the XML is malformed
            UnrecognizedFeedError: If the XML is not a feed, entry or category list
        """
        self.log.debug("parsing XML %s", xml)
        try:
            tree = await asyncio.to_thread(parse_xml, xml)
        except FeedParseError:
            self.log.error("Failed to convert XML to JSON")
            raise

        formatted = self.format_tree(tree, name)
        return formatted.to_result()

    def format_tree(self, tree: dict[str, Any], name: str) -> FormattedFeed:
        """Dispatch on the shape of an already parsed tree."""
        if self.log.isEnabledFor(logging.DEBUG):
            self.log.debug("formatting %s", json.dumps(tree, indent=2))

        formatted = FormattedFeed(name=name)

        if "feed" in tree:
            formatted.entries.extend(self._format_feed(tree["feed"]))
        elif "entry" in tree:
            formatted.entries.append(create_entry(tree["entry"], self.log))
        elif "app:categories" in tree:
            # typically terms such as profile tags
            for category in self._categories(tree["app:categories"]):
                formatted.entries.append(create_entry(attrs(category), self.log))
        else:
            self.log.error("Unknown result with keys %s", list(tree))
            raise UnrecognizedFeedError(list(tree))

        self.log.info("Formatted %d entries into %s", len(formatted.entries), name)
        return formatted

    def _format_feed(self, feed: Any) -> list:
        # wikis do not list the community in each entry, so take it
        # from the feed and add it to every wiki entry
        community_id = text(first(feed, "snx:communityUuid"))

        entries = []
        for node in values(feed, "entry"):
            entry = create_entry(node, self.log)
            if community_id and entry.source == WIKI:
                entry.parent = community_id
            entries.append(entry)
        return entries

    @staticmethod
    def _categories(container: Any) -> list:
        return values(container, "atom:category") or values(container, "category")


async def format_feed(
    xml: Union[str, bytes], name: str, log: Optional[logging.Logger] = None
) -> FeedResult:
    """Format one document with a throwaway FeedFormatter."""
    return await FeedFormatter(log).format(xml, name)
