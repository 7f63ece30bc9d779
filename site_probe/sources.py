# === FILE: site_probe/sources.py ===
"""
Источник списка сайтов: HTTP API, возвращающий домены.

Принимается JSON-массив строк или объектов с полем ``domain``/``url``.
"""
from __future__ import annotations

import asyncio
from typing import Any, List, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_probe.config import ProbeConfig
from site_probe.crawler.models import Site
from site_probe.logger import logger

__all__ = ["SourceUnavailable", "fetch_domains", "load_sites", "build_sites"]

_RECORD_KEYS = ("domain", "url", "host")


class SourceUnavailable(RuntimeError):
    """Список сайтов не получен или непригоден."""


def _domain_of(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry.strip() or None
    if isinstance(entry, dict):
        for key in _RECORD_KEYS:
            value = entry.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


async def fetch_domains(api_url: str, *, timeout: float = 30.0, user_agent: str | None = None) -> List[str]:
    """GET *api_url* and return the domain strings it lists.

    Raises :class:`SourceUnavailable` on any transport, status or format problem.
    """
    headers = {"User-Agent": user_agent} if user_agent else None
    try:
        async with ClientSession(timeout=ClientTimeout(total=timeout), headers=headers) as session:
            async with session.get(api_url) as resp:
                if resp.status >= 400:
                    raise SourceUnavailable(f"{api_url} -> HTTP {resp.status}")
                data = await resp.json(content_type=None)
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise SourceUnavailable(f"{api_url}: {str(exc) or type(exc).__name__}") from exc

    if not isinstance(data, list):
        raise SourceUnavailable(f"{api_url}: expected a JSON array, got {type(data).__name__}")

    domains = [d for d in (_domain_of(entry) for entry in data) if d]
    return list(dict.fromkeys(domains))


def build_sites(domains: Sequence[str], languages: Sequence[str]) -> List[Site]:
    """Один Site на домен; домены без схемы получают https://."""
    return [Site.from_domain(domain, languages) for domain in domains]


async def load_sites(config: ProbeConfig) -> List[Site]:
    """Сайты из конфигурации, либо из API; при недоступности API — пустой список."""
    if config.sites:
        return build_sites(config.sites, config.languages)
    try:
        domains = await fetch_domains(
            str(config.sites_api_url), timeout=config.api_timeout, user_agent=config.user_agent
        )
    except SourceUnavailable as exc:
        logger.error("Ошибка получения списка сайтов: %s", exc)
        return []
    logger.info("Получено %d сайтов из %s", len(domains), config.sites_api_url)
    return build_sites(domains, config.languages)
