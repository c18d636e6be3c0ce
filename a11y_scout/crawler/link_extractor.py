# a11y_scout/crawler/link_extractor.py
"""
Same-origin link extraction for the crawl frontier.

The filter is a fixed policy: an href is followed only when it starts with the
page origin, carries no fragment or query, is not a .pdf/.jpg/.png asset and
does not mention a mailto:/tel: scheme.
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urlsplit

from a11y_scout.render.base import RenderedPage

_SKIPPED_SUFFIXES = (".pdf", ".jpg", ".png")
_SKIPPED_MARKERS = ("#", "?", "mailto:", "tel:")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_of(url: str) -> str:
    """
    Return scheme://host[:port] of *url*, lowercased, default port dropped.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def is_followable(href: str, origin: str) -> bool:
    """Check one already-trimmed href against the link policy."""
    if not href.startswith(origin):
        return False
    if any(marker in href for marker in _SKIPPED_MARKERS):
        return False
    return not href.endswith(_SKIPPED_SUFFIXES)


def filter_links(hrefs: Iterable[str], origin: str) -> List[str]:
    """
    Apply the link policy to *hrefs* and drop duplicates, keeping first-seen order.
    """
    links: List[str] = []
    for raw in hrefs:
        href = raw.strip()
        if is_followable(href, origin):
            links.append(href)
    return list(dict.fromkeys(links))


async def extract_links(page: RenderedPage, origin: str) -> List[str]:
    """Extract followable links from a rendered page."""
    return filter_links(await page.hrefs(), origin)


__all__ = ["origin_of", "is_followable", "filter_links", "extract_links"]
