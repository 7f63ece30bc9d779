# === FILE: site_probe/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteProbe.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

DEFAULT_LANGUAGES: tuple[str, ...] = ("en", "pt", "es", "de", "fr")
DEFAULT_CONTENT_SELECTORS: tuple[str, ...] = (
    ".popularCate",
    ".main-content",
    "article",
    "section.content",
)
DEFAULT_SITES_API = "https://metacms.highstakes.tech/api/repotable-domains-by-org/highstakes/"


class ViewportConfig(BaseModel):
    """Параметры эмуляции устройства для браузерного рендерера."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    width: int = Field(375, ge=1)
    height: int = Field(667, ge=1)
    is_mobile: bool = True
    has_touch: bool = True
    device_scale_factor: float = Field(2.0, gt=0)


class ProbeConfig(BaseModel):
    """Конфигурация одного прогона проверки сайтов."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    sites_api_url: HttpUrl = Field(
        DEFAULT_SITES_API, description="Эндпоинт, возвращающий список доменов."
    )
    sites: list[str] = Field(
        default_factory=list,
        description="Явный список доменов; если задан, API не опрашивается.",
    )
    languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        min_length=1,
        description="Языковые версии, проверяемые на каждом сайте.",
    )
    site_concurrency: int = Field(1, ge=1, description="Сколько сайтов проверяется одновременно.")
    language_concurrency: int = Field(
        5, ge=1, description="Сколько языков одного сайта проверяется одновременно."
    )
    navigation_timeout: float = Field(15.0, gt=0, description="Таймаут загрузки страницы (секунд).")
    api_timeout: float = Field(30.0, gt=0, description="Таймаут запроса списка сайтов (секунд).")
    user_agent: str = Field("SiteProbeBot/1.0", min_length=1, description="Заголовок User-Agent.")
    renderer: Literal["http", "browser"] = Field(
        "http", description="http: aiohttp + BeautifulSoup, browser: Playwright/Chromium."
    )
    headless: bool = Field(True, description="Запуск браузера без окна (только renderer=browser).")
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    report_dir: Path = Field(Path("report"), description="Каталог для JSON-отчётов.")

    content_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="Селекторы контента в порядке приоритета.",
    )
    selector_min_chars: int = Field(20, ge=0, description="Порог длины текста для селектора.")
    body_min_chars: int = Field(50, ge=0, description="Порог длины текста всего body.")

    @field_validator("languages", mode="after")
    def _clean_languages(cls, v: list[str]) -> list[str]:
        cleaned = [lang.strip().strip("/") for lang in v]
        if any(not lang for lang in cleaned):
            raise ValueError("language codes must be non-empty")
        # порядок сохраняется, дубликаты отбрасываются
        return list(dict.fromkeys(cleaned))

    @field_validator("sites", mode="after")
    def _clean_sites(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s and s.strip()]


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ProbeConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ProbeConfig.
    Без пути используется configs/default.yaml; если его нет — FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ProbeConfig(**data)


__all__ = ["ProbeConfig", "ViewportConfig", "load_config", "ValidationError", "DEFAULT_LANGUAGES"]
