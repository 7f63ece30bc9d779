# site_probe/crawler/link_extractor.py
"""
Link discovery for SiteProbe: same-origin links from navigation and footer.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from site_probe.crawler.renderer import PageHandle

#: anchors inside menus (nav landmark or any list) and inside the footer
NAV_SELECTOR = "nav a[href], ul a[href], ol a[href]"
FOOTER_SELECTOR = "footer a[href]"

_DEFAULT_PORTS = {"http": 80, "https": 443}

Origin = Tuple[str, str, int]


def url_origin(url: str) -> Optional[Origin]:
    """Return ``(scheme, host, port)`` of an absolute http(s) URL, or None if it has none."""
    try:
        parts = urlsplit(url.strip())
        scheme = parts.scheme.lower()
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if scheme not in _DEFAULT_PORTS or not host:
        return None
    return scheme, host, port if port is not None else _DEFAULT_PORTS[scheme]


def filter_same_origin(hrefs: Iterable[str], base_url: str) -> List[str]:
    """Deduplicated hrefs sharing the origin of *base_url*, in first-seen order.

    Unparsable hrefs are dropped.
    """
    base_origin = url_origin(base_url)
    if base_origin is None:
        return []
    same = (href for href in hrefs if url_origin(href) == base_origin)
    return list(dict.fromkeys(same))


async def discover_links(page: PageHandle, base_url: str) -> List[str]:
    """Same-origin URLs linked from the nav and footer of the page currently loaded."""
    nav_links = await page.anchor_hrefs(NAV_SELECTOR)
    footer_links = await page.anchor_hrefs(FOOTER_SELECTOR)
    return filter_same_origin([*nav_links, *footer_links], base_url)


__all__ = ["discover_links", "filter_same_origin", "url_origin", "NAV_SELECTOR", "FOOTER_SELECTOR"]
