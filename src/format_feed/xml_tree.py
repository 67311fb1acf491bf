"""XML to value-tree conversion and tree accessors.

The tree mirrors the common "xml2js" convention used by Connections clients:

- the root element is a single key mapping to its value,
- every child element is stored as a list under its qualified name
  (``prefix:local``), even when it occurs once,
- attributes (including ``xmlns`` declarations) live under ``$``,
- text content lives under ``_`` when the element also has attributes or
  children, otherwise the element value is the text itself.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from lxml import etree

from format_feed.models import FeedParseError

ATTRS_KEY = "$"
TEXT_KEY = "_"

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    # lxml parsers must not be shared between threads. Internal DTD entities
    # are expanded, external ones stay unresolved references.
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities="internal",
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def parse_xml(xml: Union[str, bytes]) -> dict[str, Any]:
    """Parse ATOM/XML text into a value tree.

    Args:
        xml: XML document as text or bytes.

    Returns:
        Mapping with a single key, the qualified root element name.

    Raises:
        FeedParseError: If the document is not well-formed XML.
    """
    encoding = None
    if isinstance(xml, str):
        # lxml refuses str input that carries an encoding declaration, and
        # the declared encoding no longer applies once the text is decoded
        xml = xml.encode("utf-8")
        encoding = "utf-8"

    try:
        root = etree.fromstring(xml, parser=_make_parser(encoding))
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise FeedParseError(f"Failed to parse XML: {exc}") from exc

    return {qualified_name(root): _element_value(root, {})}


def qualified_name(element) -> str:
    """Return ``prefix:local`` for a namespaced element, else the local name."""
    local = etree.QName(element).localname
    if element.prefix:
        return f"{element.prefix}:{local}"
    return local


def _attribute_name(key: str, prefixes: dict[str, str]) -> str:
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    prefix = prefixes.get(qname.namespace)
    if prefix:
        return f"{prefix}:{qname.localname}"
    return qname.localname


def _attributes(element, parent_nsmap: dict) -> dict[str, str]:
    found: dict[str, str] = {}

    # Namespace declarations made on this element
    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            found["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri

    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
    for key, value in element.attrib.items():
        found[_attribute_name(key, prefixes)] = value

    return found


def _element_value(element, parent_nsmap: dict) -> Any:
    element_attrs = _attributes(element, parent_nsmap)
    children = [child for child in element if isinstance(child.tag, str)]

    # tails of entity references count too, not only those of elements
    parts = [element.text or ""] + [child.tail or "" for child in element]
    content = "".join(parts)
    if not content.strip():
        content = ""

    if not element_attrs and not children:
        return content

    value: dict[str, Any] = {}
    if element_attrs:
        value[ATTRS_KEY] = element_attrs
    if content:
        value[TEXT_KEY] = content
    for child in children:
        value.setdefault(qualified_name(child), []).append(
            _element_value(child, element.nsmap)
        )
    return value


# Accessors: every lookup of an optional, possibly repeated field goes
# through these so list-unwrapping lives in one place.


def values(node: Any, key: str) -> list[Any]:
    """All values stored under ``key``; scalars are wrapped, missing keys give []."""
    if not isinstance(node, dict) or key not in node:
        return []
    found = node[key]
    if isinstance(found, list):
        return found
    return [found]


def first(node: Any, key: str) -> Any:
    """First value stored under ``key``, or None."""
    found = values(node, key)
    return found[0] if found else None


def text(value: Any) -> Optional[str]:
    """Text content of a tree value (plain string or ``_`` of an element)."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return value.get(TEXT_KEY)
    return None


def first_text(node: Any, key: str) -> Optional[str]:
    return text(first(node, key))


def attrs(value: Any) -> dict[str, str]:
    if isinstance(value, dict):
        return value.get(ATTRS_KEY) or {}
    return {}


def attr(value: Any, name: str) -> Optional[str]:
    return attrs(value).get(name)
