"""Normalize a single ATOM entry tree into a NormalizedEntry."""

import json
import logging
from functools import partial
from typing import Any, Optional

from format_feed.models import Author, NormalizedEntry
from format_feed.parse_id import classify_source, parse_id
from format_feed.xml_tree import attr, attrs, first, first_text, text, values

logger = logging.getLogger(__name__)

ATOM_TYPE = "application/atom+xml"
HTML_TYPE = "text/html"


def _reply_to(node: Any, log: logging.Logger) -> Optional[str]:
    ref = attr(first(node, "thr:in-reply-to"), "ref")
    return parse_id(ref, log) if ref else None


def _community(node: Any) -> Optional[str]:
    return first_text(node, "snx:communityUuid") or None


def _library_community(node: Any) -> Optional[str]:
    return first_text(first(node, "td:library"), "snx:communityUuid") or None


def parent_resolvers(log: logging.Logger) -> tuple:
    """Parent sources in precedence order; the first one returning a value wins."""
    return (partial(_reply_to, log=log), _community, _library_community)


def _set_api(entry: NormalizedEntry, link: dict, log: logging.Logger) -> None:
    entry.api = link.get("href")


def _set_recommendations(entry: NormalizedEntry, link: dict, log: logging.Logger) -> None:
    # likes
    count = link.get("snx:recommendation")
    if count and count.isascii() and count.isdigit():
        entry.recommendations = int(count)
    else:
        log.warning("Ignoring non-numeric recommendation count %r", count)


def _set_url(entry: NormalizedEntry, link: dict, log: logging.Logger) -> None:
    # the link a web user should follow
    entry.url = link.get("href")


# (type, rel, action); the first matching row handles the link
LINK_RULES = (
    (ATOM_TYPE, "self", _set_api),
    (ATOM_TYPE, "recommendations", _set_recommendations),
    (HTML_TYPE, "alternate", _set_url),
)


def _apply_link(entry: NormalizedEntry, link: Any, log: logging.Logger) -> None:
    link_attrs = attrs(link)
    for link_type, rel, action in LINK_RULES:
        if link_attrs.get("type") == link_type and link_attrs.get("rel") == rel:
            action(entry, link_attrs, log)
            return


def _author(node: Any, log: logging.Logger) -> Optional[Author]:
    author = first(node, "author")
    if author is None:
        return None

    name = first_text(author, "name")
    user_id = first_text(author, "snx:userid")
    if name is None or user_id is None:
        log.debug("Skipping author without name or snx:userid: %s", author)
        return None

    return Author(name=name, id=user_id)


def _content(node: Any) -> str:
    content = first(node, "content")
    if content is not None:
        # Either inline HTML or a URL the caller must fetch the body from
        src = attr(content, "src")
        if src:
            return src
        return text(content) or ""

    # Category list items carry a term instead of content
    term = first_text(node, "term")
    if term is not None:
        return term

    return ""


def create_entry(node: Any, log: Optional[logging.Logger] = None) -> NormalizedEntry:
    """
    Create a normalized entry from one ATOM entry tree.

    Args:
        node: Entry value from ``parse_xml`` (or the attribute mapping of a
            category list item)
        log: Diagnostics logger, defaults to this module's logger

    Returns:
        NormalizedEntry with only the fields the entry supplies set
    """
    log = log or logger
    entry = NormalizedEntry()

    raw_id = first_text(node, "id")
    if raw_id:
        entry.id = parse_id(raw_id, log)
        entry.source = classify_source(raw_id)

    entry.title = first_text(node, "title")
    entry.author = _author(node, log)

    categories = values(node, "category")
    if categories:
        terms = [attr(category, "term") for category in categories]
        entry.categories = [term for term in terms if term is not None]

    entry.published = first_text(node, "published")

    for resolve in parent_resolvers(log):
        parent = resolve(node)
        if parent:
            entry.parent = parent
            break

    # wiki page version
    entry.version = first_text(node, "td:versionUuid")

    for link in values(node, "link"):
        _apply_link(entry, link, log)

    entry.content = _content(node)

    summary = first_text(node, "summary")
    if summary:
        entry.summary = summary

    if log.isEnabledFor(logging.DEBUG):
        log.debug("formatted entry %s", json.dumps(entry.to_dict(), indent=2))

    return entry
