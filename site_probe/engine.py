"""site_probe.engine: оркестрация прогона — все сайты, общий агрегат, отчёты."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from site_probe.aggregator import RunReport, SiteReport
from site_probe.config import ProbeConfig
from site_probe.crawler.crawler import SiteCrawler
from site_probe.crawler.models import Site
from site_probe.crawler.renderer import Renderer, build_renderer
from site_probe.executor import run_bounded
from site_probe.logger import logger
from site_probe.report.json_report import write_reports
from site_probe.sources import load_sites

__all__ = ["run_probe", "probe", "ProbeOutcome"]


async def run_probe(
    sites: Sequence[Site],
    config: ProbeConfig,
    renderer: Optional[Renderer] = None,
) -> RunReport:
    """Проверяет все сайты (не больше ``config.site_concurrency`` одновременно).

    Отчёты сайтов добавляются в порядке завершения, а не запуска.
    """
    renderer = renderer or build_renderer(config)
    report = RunReport()
    crawler = SiteCrawler(config, renderer, report.results)

    async def _site(site: Site) -> None:
        logger.info("Сайт в очереди на проверку: %s", site.url)
        try:
            site_report = await crawler.crawl(site)
        except Exception as exc:
            # the session itself could not be opened or closed
            logger.exception("Проверка %s прервана: %s", site.url, exc)
            site_report = SiteReport(site.url, list(site.languages), status="failed")
        report.sites.append(site_report)

    start = time.monotonic()
    await run_bounded(sites, config.site_concurrency, _site)
    logger.info(
        "Проверено сайтов: %d, URL: %d за %.2f с",
        len(report.sites),
        len(report.results.urls_tested),
        time.monotonic() - start,
    )
    return report


@dataclass(slots=True)
class ProbeOutcome:
    """Результат :func:`probe`: отчёт и пути сохранённых файлов."""

    report: RunReport
    files: Dict[str, Path]


async def probe(
    config: ProbeConfig,
    renderer: Optional[Renderer] = None,
    report_dir: Optional[Path] = None,
) -> Optional[ProbeOutcome]:
    """Полный прогон: список сайтов → проверка → JSON-отчёты.

    Возвращает None (и ничего не пишет), если проверять нечего.
    """
    sites = await load_sites(config)
    if not sites:
        logger.error("Nothing to test: the site list is empty")
        return None

    report = await run_probe(sites, config, renderer)
    files = write_reports(report, report_dir or config.report_dir)
    logger.info("Отчёты сохранены в %s", (report_dir or config.report_dir))
    return ProbeOutcome(report, files)
