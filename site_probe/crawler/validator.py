# site_probe/crawler/validator.py
"""
Page validation: navigate, classify as success / error / emptyContent, record.
"""
from __future__ import annotations

from typing import Optional, Sequence

from site_probe.aggregator import RunResult, SiteReport, VisitedSet
from site_probe.config import DEFAULT_CONTENT_SELECTORS, ProbeConfig
from site_probe.crawler.models import Classification, VisitRecord
from site_probe.crawler.renderer import PageHandle
from site_probe.logger import get_logger

logger = get_logger("validator")


class PageValidator:
    """Validates URLs of one site-run.

    ``visited`` is the per-site visited set, ``site`` collects the site's error
    and empty-content pages, ``results`` is the run-wide aggregate shared by all
    sites.
    """

    def __init__(
        self,
        results: RunResult,
        site: SiteReport,
        visited: VisitedSet,
        *,
        timeout: float = 15.0,
        content_selectors: Sequence[str] = DEFAULT_CONTENT_SELECTORS,
        selector_min_chars: int = 20,
        body_min_chars: int = 50,
    ) -> None:
        self.results = results
        self.site = site
        self.visited = visited
        self.timeout = timeout
        self.content_selectors = tuple(content_selectors)
        self.selector_min_chars = selector_min_chars
        self.body_min_chars = body_min_chars

    @classmethod
    def from_config(
        cls, config: ProbeConfig, results: RunResult, site: SiteReport, visited: VisitedSet
    ) -> PageValidator:
        return cls(
            results,
            site,
            visited,
            timeout=config.navigation_timeout,
            content_selectors=config.content_selectors,
            selector_min_chars=config.selector_min_chars,
            body_min_chars=config.body_min_chars,
        )

    async def validate(self, page: PageHandle, url: str, language: str) -> Optional[Classification]:
        """Classify *url* once per site-run; returns None if it was already visited."""
        if not self.visited.claim(url):
            logger.debug("URL already tested, skipping: %s", url)
            return None

        classification = await self._classify(page, url)
        record = VisitRecord(url, language, classification)
        self.site.record(record)
        self.results.record(record)
        return classification

    async def _classify(self, page: PageHandle, url: str) -> Classification:
        try:
            response = await page.goto(url, self.timeout)
            if response is None or not response.ok:
                status = response.status if response is not None else "no response"
                if status == 404:
                    logger.error("HTTP 404 (not found) at %s", url)
                else:
                    logger.error("HTTP %s at %s", status, url)
                return Classification.ERROR

            if not await self.has_content(page):
                logger.warning("Insufficient content at %s", url)
                return Classification.EMPTY_CONTENT
        except Exception as e:
            logger.error("Error testing %s: %s", url, str(e) or type(e).__name__)
            return Classification.ERROR
        return Classification.SUCCESS

    async def has_content(self, page: PageHandle) -> bool:
        """Priority selectors first (> selector_min_chars), then the whole body (> body_min_chars)."""
        for selector in self.content_selectors:
            length = await page.text_length(selector)
            if length is not None and length > self.selector_min_chars:
                return True
        body_length = await page.text_length(None)
        return (body_length or 0) > self.body_min_chars


__all__ = ["PageValidator"]
