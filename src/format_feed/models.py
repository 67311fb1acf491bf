"""Data models for the feed formatter."""

from dataclasses import dataclass, field
from typing import Optional

from common.serialization import serialize_dataclass

BLOG = "blog"
FORUM = "forum"
WIKI = "wiki"

# List name -> normalized entries, as handed back to the caller
FeedResult = dict[str, list[dict]]


class FeedError(ValueError):
    """Base class for feeds that cannot be formatted."""


class FeedParseError(FeedError):
    """The XML text could not be parsed."""


class UnrecognizedFeedError(FeedError):
    """The parsed tree is not a feed, a single entry or a category list."""

    def __init__(self, keys: list[str]):
        self.keys = keys
        super().__init__(f"Unknown result with top-level keys {keys}")


@dataclass
class Author:
    name: str
    id: str


@dataclass
class NormalizedEntry:
    """
    One item of a Connections feed in the uniform output shape.

    Every field except ``content`` is optional and left out of ``to_dict``
    when unset. ``id`` and ``source`` are always set together.
    """

    id: Optional[str] = None
    source: Optional[str] = None
    title: Optional[str] = None
    author: Optional[Author] = None
    categories: Optional[list[str]] = None
    published: Optional[str] = None
    parent: Optional[str] = None
    version: Optional[str] = None
    api: Optional[str] = None
    recommendations: Optional[int] = None
    url: Optional[str] = None
    content: str = ""
    summary: Optional[str] = None

    def to_dict(self) -> dict:
        return serialize_dataclass(self, drop_none=True)


@dataclass
class FormattedFeed:
    """Entries of one feed collected under the caller's list name."""

    name: str
    entries: list[NormalizedEntry] = field(default_factory=list)

    def to_result(self) -> FeedResult:
        return {self.name: [entry.to_dict() for entry in self.entries]}
