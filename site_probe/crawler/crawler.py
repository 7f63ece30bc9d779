# site_probe/crawler/crawler.py
"""
Site crawl: every language variant of one site, in its own browsing context.
"""
from __future__ import annotations

import time
from typing import List, Optional

from site_probe.aggregator import RunResult, SiteReport, VisitedSet
from site_probe.config import ProbeConfig
from site_probe.crawler.link_extractor import discover_links
from site_probe.crawler.models import Site, language_url
from site_probe.crawler.renderer import PageHandle, Renderer, RenderSession
from site_probe.crawler.validator import PageValidator
from site_probe.executor import run_bounded
from site_probe.logger import get_logger

__all__ = ("SiteCrawler",)

logger = get_logger("crawler")


class SiteCrawler:
    """Проверяет все языковые версии одного сайта.

    Языки идут параллельно (не больше ``config.language_concurrency``), ссылки
    внутри одного языка проверяются последовательно в порядке обнаружения.
    """

    def __init__(self, config: ProbeConfig, renderer: Renderer, results: RunResult) -> None:
        self.config = config
        self.renderer = renderer
        self.results = results

    async def crawl(self, site: Site) -> SiteReport:
        logger.info("Старт проверки: %s (%s)", site.url, ", ".join(site.languages))
        start = time.monotonic()
        report = SiteReport(url=site.url, languages_tested=list(site.languages))
        validator = PageValidator.from_config(self.config, self.results, report, VisitedSet())

        async with self.renderer.session() as session:

            async def _language(language: str) -> Optional[str]:
                try:
                    await self._crawl_language(session, validator, site, language)
                except Exception as e:
                    # validator absorbs page failures; anything here is a defect
                    logger.exception("Language %s of %s aborted: %s", language, site.url, e)
                    return language
                return None

            aborted = await run_bounded(site.languages, self.config.language_concurrency, _language)

        failed = [lang for lang in aborted if lang]
        if failed:
            report.status = "partial"
            logger.warning("%s: languages not fully tested: %s", site.url, ", ".join(failed))

        duration = time.monotonic() - start
        logger.info(
            "Завершено: %s за %.2f с (ошибок: %d, пустых: %d)",
            site.url,
            duration,
            len(report.error_pages),
            len(report.empty_content_pages),
        )
        return report

    async def _crawl_language(
        self, session: RenderSession, validator: PageValidator, site: Site, language: str
    ) -> None:
        entry_url = language_url(site.url, language)
        async with session.page() as page:
            await validator.validate(page, entry_url, language)
            links = await self._discover(page, entry_url)
            logger.debug("%s: %d nav/footer links", entry_url, len(links))
            for url in links:
                if url not in validator.visited:
                    await validator.validate(page, url, language)

    @staticmethod
    async def _discover(page: PageHandle, entry_url: str) -> List[str]:
        try:
            return await discover_links(page, entry_url)
        except Exception as e:
            logger.warning("Link discovery failed on %s: %s", entry_url, e)
            return []
