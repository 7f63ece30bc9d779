# File: site_probe/aggregator.py
"""site_probe.aggregator: модель агрегированных результатов проверки.

Все мутации выполняются синхронно (без ``await`` внутри), поэтому в пределах
одного event loop каждая операция атомарна: проверка «URL уже посещён» и его
пометка — один шаг :meth:`VisitedSet.claim`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List

from site_probe.crawler.models import Classification, VisitRecord


class VisitedSet:
    """Множество посещённых URL с атомарной операцией «проверить и занять»."""

    __slots__ = ("_urls",)

    def __init__(self, urls: Iterable[str] = ()) -> None:
        # dict сохраняет порядок вставки для стабильной сериализации
        self._urls: Dict[str, None] = dict.fromkeys(urls)

    def claim(self, url: str) -> bool:
        """Помечает URL посещённым; False, если он уже был помечен."""
        if url in self._urls:
            return False
        self._urls[url] = None
        return True

    def add(self, url: str) -> None:
        self._urls.setdefault(url, None)

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def to_list(self) -> List[str]:
        return list(self._urls)


@dataclass(slots=True)
class LanguageSummary:
    """URL одного языка, разложенные по классификации."""

    success: List[str] = field(default_factory=list)
    error: List[str] = field(default_factory=list)
    empty_content: List[str] = field(default_factory=list)

    def bucket(self, classification: Classification) -> List[str]:
        if classification is Classification.SUCCESS:
            return self.success
        if classification is Classification.ERROR:
            return self.error
        return self.empty_content

    def add(self, url: str, classification: Classification) -> None:
        bucket = self.bucket(classification)
        if url not in bucket:
            bucket.append(url)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            Classification.SUCCESS.value: list(self.success),
            Classification.ERROR.value: list(self.error),
            Classification.EMPTY_CONTENT.value: list(self.empty_content),
        }


@dataclass(slots=True)
class SiteReport:
    """Итог проверки одного сайта."""

    url: str
    languages_tested: List[str]
    error_pages: List[str] = field(default_factory=list)
    empty_content_pages: List[str] = field(default_factory=list)
    status: str = "tested"

    def record(self, record: VisitRecord) -> None:
        if record.classification is Classification.ERROR:
            self.error_pages.append(record.url)
        elif record.classification is Classification.EMPTY_CONTENT:
            self.empty_content_pages.append(record.url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "languagesTested": list(self.languages_tested),
            "errorPages": list(self.error_pages),
            "emptyContentPages": list(self.empty_content_pages),
            "status": self.status,
        }


@dataclass(slots=True)
class RunResult:
    """Общий агрегат прогона: разделяется всеми сайтами и языками."""

    urls_tested: VisitedSet = field(default_factory=VisitedSet)
    success: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    empty_content: List[str] = field(default_factory=list)
    language_summary: Dict[str, LanguageSummary] = field(default_factory=dict)

    def record(self, record: VisitRecord) -> None:
        """Фиксирует классификацию URL во всех глобальных коллекциях."""
        self.urls_tested.add(record.url)
        if record.classification is Classification.SUCCESS:
            self.success.append(record.url)
        elif record.classification is Classification.ERROR:
            self.errors.append(record.url)
        else:
            self.empty_content.append(record.url)
        summary = self.language_summary.get(record.language)
        if summary is None:
            summary = self.language_summary[record.language] = LanguageSummary()
        summary.add(record.url, record.classification)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "urlsTested": self.urls_tested.to_list(),
            "success": list(self.success),
            "emptyContent": list(self.empty_content),
            "errors": list(self.errors),
            "languageSummary": {
                lang: summary.to_dict() for lang, summary in self.language_summary.items()
            },
        }


@dataclass(slots=True)
class RunReport:
    """Полный отчёт: сайты в порядке завершения проверки и общий RunResult."""

    results: RunResult = field(default_factory=RunResult)
    sites: List[SiteReport] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "testedSites": [site.to_dict() for site in self.sites],
            "results": self.results.to_dict(),
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["VisitedSet", "LanguageSummary", "SiteReport", "RunResult", "RunReport"]
