# site_probe/crawler/fetcher.py
"""
HTTP renderer: fetches pages with aiohttp and exposes the parsed DOM
(BeautifulSoup) through the :class:`~site_probe.crawler.renderer.PageHandle`
interface. No JavaScript is executed; "network idle" is the end of the response
body.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional
from urllib.parse import urljoin

from aiohttp import ClientSession, ClientTimeout
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from site_probe.config import ProbeConfig
from site_probe.crawler.models import PageResponse

#: elements whose text never shows up in innerText
_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

#: document metadata, never part of the rendered body
_HEAD_TAGS = frozenset({"head", "title"})

#: boundaries that break a line in rendered text; inline tags join their text as-is
_BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "br", "dd", "details", "dialog",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
    "ol", "p", "pre", "section", "summary", "table", "td", "th", "tr", "ul",
})

_BLOCK_END = object()


def rendered_text(node: Tag) -> str:
    """Visible text of *node* as innerText lays it out, whitespace-collapsed and trimmed.

    Text of inline elements (``<b>``, ``<a>``, ``<span>``…) is glued to its
    neighbours; a separator appears only at block boundaries.
    """
    parts: List[str] = []
    stack: List[Any] = list(reversed(node.contents))
    while stack:
        item = stack.pop()
        if item is _BLOCK_END:
            parts.append(" ")
        elif isinstance(item, Tag):
            if item.name in _HEAD_TAGS:
                continue
            if item.name in _BLOCK_TAGS:
                parts.append(" ")
                stack.append(_BLOCK_END)
            stack.extend(reversed(item.contents))
        elif isinstance(item, NavigableString) and not isinstance(item, PreformattedString):
            parts.append(str(item))
    return " ".join("".join(parts).split())


class HttpPage:
    """Browsing context backed by a shared aiohttp session."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.url: Optional[str] = None
        self._soup: Optional[BeautifulSoup] = None
        self._base: Optional[str] = None

    async def goto(self, url: str, timeout: float) -> Optional[PageResponse]:
        # a failed navigation leaves an empty document behind
        self._soup = None
        self._base = None
        self.url = url
        async with self.session.get(
            url, timeout=ClientTimeout(total=timeout), allow_redirects=True
        ) as resp:
            status = resp.status
            final_url = str(resp.url)
            mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
            body = await resp.text(errors="replace")

        self.url = final_url
        self._soup = self._parse(body, mime)
        self._base = self._document_base(final_url)
        return PageResponse(final_url, status)

    async def anchor_hrefs(self, selector: str) -> List[str]:
        if self._soup is None:
            return []
        hrefs: List[str] = []
        for tag in self._soup.select(selector):
            href = tag.get("href")
            if not isinstance(href, str):
                continue
            href = href.strip()
            try:
                hrefs.append(urljoin(self._base or "", href))
            except ValueError:
                # browsers hand back unparsable hrefs as-is
                hrefs.append(href)
        return hrefs

    async def text_length(self, selector: Optional[str] = None) -> Optional[int]:
        if self._soup is None:
            return None if selector else 0
        if selector:
            node = self._soup.select_one(selector)
            return None if node is None else len(rendered_text(node))
        # without <body> only the non-head content renders
        body = self._soup.body or self._soup
        return len(rendered_text(body))

    @staticmethod
    def _parse(body: str, mime: str) -> BeautifulSoup:
        if "html" in mime or "xml" in mime or not mime:
            soup = BeautifulSoup(body, "html.parser")
            for tag in soup.find_all(_INVISIBLE_TAGS):
                tag.decompose()
            return soup
        soup = BeautifulSoup("<html><body></body></html>", "html.parser")
        if mime.startswith("text/"):
            # plain text is rendered verbatim inside <body>
            soup.body.string = body
        return soup

    def _document_base(self, final_url: str) -> str:
        base_tag = self._soup.find("base", href=True) if self._soup is not None else None
        if isinstance(base_tag, Tag):
            href = base_tag.get("href")
            if isinstance(href, str) and href.strip():
                try:
                    return urljoin(final_url, href.strip())
                except ValueError:
                    pass
        return final_url


class HttpSession:
    """Per-site session: one connection pool, one :class:`HttpPage` per language."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    @asynccontextmanager
    async def page(self) -> AsyncIterator[HttpPage]:
        yield HttpPage(self.session)


class HttpRenderer:
    """Fetch + DOM-parse renderer built on aiohttp and BeautifulSoup."""

    def __init__(self, config: ProbeConfig) -> None:
        self.config = config

    @asynccontextmanager
    async def session(self) -> AsyncIterator[HttpSession]:
        async with ClientSession(
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        ) as http:
            yield HttpSession(http)


__all__ = ["HttpRenderer", "HttpSession", "HttpPage", "rendered_text"]
