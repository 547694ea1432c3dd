# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Feed resolver: turns RSS/Atom documents into ordered enclosure locations.

Only the element tree is consulted:

- RSS:  <rss><channel><item>...</item></channel></rss>
- Atom: <feed><entry>...</entry></feed>

Each item/entry contributes at most one reference, picked by the first
candidate in priority order: <link rel="enclosure" href=...>, then
<content url=...> (Media RSS style). Element names are matched on their local
name so namespaced feeds (Atom, media:content) resolve the same way.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from urllib.parse import urlparse

from .exceptions import FeedParseError
from .images import media_type


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def is_feed_content_type(content_type: str | None) -> bool:
    """text/xml, application/xml or any application/*+xml."""
    mt = media_type(content_type)
    if mt in ("text/xml", "application/xml"):
        return True
    return mt.startswith("application/") and mt.endswith("+xml")


def _local_name(tag) -> str:
    # comments and processing instructions have non-string tags
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            yield child


def resolve_reference(href: str, base_url: str) -> str:
    """Best-effort resolution of an enclosure reference against the feed URL.

    Absolute references pass through. Anything else borrows the base's scheme
    and authority only: no '..' handling and no query-relative forms.
    """
    href = href.strip()
    if _SCHEME_RE.match(href):
        return href

    base = urlparse(base_url)
    if not base.scheme or not base.netloc:
        return href
    if href.startswith("//"):
        return f"{base.scheme}:{href}"
    if not href.startswith("/"):
        href = "/" + href
    return f"{base.scheme}://{base.netloc}{href}"


def item_enclosure(item: ET.Element) -> str | None:
    """First matching enclosure reference of one RSS item / Atom entry."""
    for link in _children(item, "link"):
        if link.get("rel") == "enclosure" and link.get("href"):
            return link.get("href")
    for content in _children(item, "content"):
        if content.get("url"):
            return content.get("url")
    return None


def parse_feed(data: bytes, source_url: str | None = None) -> ET.Element:
    """Parse a feed document and return its root element.

    Raises:
        FeedParseError: not well-formed XML, or no root element
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise FeedParseError(f"malformed feed: {e}", source_url) from e
    if root is None:
        raise FeedParseError("feed has no root element", source_url)
    return root


def iter_enclosures(root: ET.Element, base_url: str) -> Iterator[str]:
    """Yield resolved enclosure locations: RSS channel/item pass, then Atom entry pass."""
    for channel in _children(root, "channel"):
        for item in _children(channel, "item"):
            href = item_enclosure(item)
            if href:
                yield resolve_reference(href, base_url)

    for entry in _children(root, "entry"):
        href = item_enclosure(entry)
        if href:
            yield resolve_reference(href, base_url)


def resolve_enclosures(data: bytes, base_url: str) -> list[str]:
    """Parse a feed document and collect its enclosure locations in document order."""
    root = parse_feed(data, base_url)
    enclosures = list(iter_enclosures(root, base_url))
    logging.getLogger("feeds").info(f"feed {base_url}: {len(enclosures)} enclosures")
    return enclosures
