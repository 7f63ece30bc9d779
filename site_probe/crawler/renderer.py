# site_probe/crawler/renderer.py
"""
Contract between the crawl core and whatever actually renders pages.

A :class:`Renderer` opens one :class:`RenderSession` per site (a browser, or an
HTTP connection pool); a session hands out isolated :class:`PageHandle` objects,
one per language variant. The core never touches the transport directly.
"""
from __future__ import annotations

from typing import AsyncContextManager, List, Optional, Protocol

from site_probe.config import ProbeConfig
from site_probe.crawler.models import PageResponse


class PageHandle(Protocol):
    """One tab-like browsing context."""

    async def goto(self, url: str, timeout: float) -> Optional[PageResponse]:
        """Load *url*, wait for network idle; ``None`` when no response was obtained."""
        ...

    async def anchor_hrefs(self, selector: str) -> List[str]:
        """Absolute ``href`` of every element matching *selector* on the loaded page."""
        ...

    async def text_length(self, selector: Optional[str] = None) -> Optional[int]:
        """Trimmed rendered text length of the first *selector* match (or ``body``).

        ``None`` when *selector* matches nothing.
        """
        ...


class RenderSession(Protocol):
    def page(self) -> AsyncContextManager[PageHandle]:
        ...


class Renderer(Protocol):
    def session(self) -> AsyncContextManager[RenderSession]:
        ...


def build_renderer(config: ProbeConfig) -> Renderer:
    """Pick the renderer named by ``config.renderer``."""
    if config.renderer == "browser":
        # playwright ships as the optional "browser" extra
        from site_probe.crawler.browser import BrowserRenderer

        return BrowserRenderer(config)
    from site_probe.crawler.fetcher import HttpRenderer

    return HttpRenderer(config)


__all__ = ["PageHandle", "RenderSession", "Renderer", "build_renderer"]
