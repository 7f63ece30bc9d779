# site_probe/crawler/models.py
"""
Data models for the SiteProbe crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


class Classification(str, Enum):
    """Terminal outcome of validating one URL."""

    SUCCESS = "success"
    ERROR = "error"
    EMPTY_CONTENT = "emptyContent"


@dataclass(frozen=True, slots=True)
class Site:
    """A site to probe: scheme-qualified base URL and its language variants."""

    url: str
    languages: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_domain(cls, domain: str, languages: Sequence[str]) -> Site:
        """Build a Site from a bare domain or a full URL (``https://`` is assumed)."""
        domain = domain.strip()
        url = domain if domain.startswith(("http://", "https://")) else f"https://{domain}"
        return cls(url=url, languages=tuple(languages))


@dataclass(frozen=True, slots=True)
class VisitRecord:
    """Outcome of validating one URL for one language."""

    url: str
    language: str
    classification: Classification


@dataclass(slots=True)
class PageResponse:
    """What a renderer reports back after a navigation."""

    url: str
    status: Optional[int]

    @property
    def ok(self) -> bool:
        return self.status is not None and self.status < 400


def language_url(base_url: str, language: str) -> str:
    """Entry URL of a language variant: ``https://ex.com/`` + ``en`` -> ``https://ex.com/en/``."""
    base = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{base}/{language}/"


__all__ = ["Classification", "Site", "VisitRecord", "PageResponse", "language_url"]
