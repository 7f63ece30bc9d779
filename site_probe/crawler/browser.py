# site_probe/crawler/browser.py
"""
Headless-browser renderer (Playwright / Chromium).

One browser per site session, one browser context + page per language, with
the mobile viewport from :class:`~site_probe.config.ViewportConfig`.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from playwright.async_api import Browser, Page, async_playwright

from site_probe.config import ProbeConfig
from site_probe.crawler.models import PageResponse
from site_probe.logger import get_logger

logger = get_logger("browser")

_HREFS_JS = "anchors => anchors.map(a => a.href.trim())"
_TEXT_LENGTH_JS = """
selector => {
    const el = selector ? document.querySelector(selector) : document.body;
    return el ? el.innerText.trim().length : null;
}
"""


class BrowserPage:
    def __init__(self, page: Page) -> None:
        self.page = page

    async def goto(self, url: str, timeout: float) -> Optional[PageResponse]:
        response = await self.page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
        if response is None:
            return None
        return PageResponse(response.url, response.status)

    async def anchor_hrefs(self, selector: str) -> List[str]:
        return await self.page.eval_on_selector_all(selector, _HREFS_JS)

    async def text_length(self, selector: Optional[str] = None) -> Optional[int]:
        length = await self.page.evaluate(_TEXT_LENGTH_JS, selector)
        if length is None and selector is None:
            # document without <body>
            return 0
        return length


class BrowserSession:
    def __init__(self, browser: Browser, config: ProbeConfig) -> None:
        self.browser = browser
        self.config = config

    @asynccontextmanager
    async def page(self) -> AsyncIterator[BrowserPage]:
        vp = self.config.viewport
        context = await self.browser.new_context(
            user_agent=self.config.user_agent,
            viewport={"width": vp.width, "height": vp.height},
            is_mobile=vp.is_mobile,
            has_touch=vp.has_touch,
            device_scale_factor=vp.device_scale_factor,
        )
        try:
            page = await context.new_page()
            yield BrowserPage(page)
        finally:
            try:
                await context.close()
            except Exception as e:
                logger.warning("Error while closing browser context: %s", e)


class BrowserRenderer:
    """Renders pages in Chromium; requires the ``browser`` extra."""

    def __init__(self, config: ProbeConfig) -> None:
        self.config = config

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        async with async_playwright() as pw:
            browser = await pw.chromium.launch(headless=self.config.headless)
            logger.debug("Chromium launched (headless=%s)", self.config.headless)
            try:
                yield BrowserSession(browser, self.config)
            finally:
                try:
                    await browser.close()
                except Exception as e:
                    logger.warning("Error while closing browser: %s", e)


__all__ = ["BrowserRenderer", "BrowserSession", "BrowserPage"]
