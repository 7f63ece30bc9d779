"""Логирование SiteProbe: один именованный логгер ``SiteProbe`` на весь прогон.

Модули берут дочерний логгер через :func:`get_logger`; CLI один раз вызывает
:func:`configure` после разбора ``--log-level``/``--log-file``. Записи лога
только диагностика, результаты проверки от них не зависят.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteProbe"

#: 5 MiB per file, three rotated copies
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def _formatted(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер SiteProbe: консоль всегда, файл с ротацией по желанию."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_formatted(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        lg.addHandler(_formatted(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
            ),
            log_format,
        ))

    # child loggers (SiteProbe.crawler, ...) reach these handlers, root never does
    lg.propagate = False
    return lg


def init_logging(level: Union[int, str] = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    return configure(level=level, log_file=log_file)


def get_logger(name: str | None = None) -> logging.Logger:
    """``SiteProbe`` или его дочерний логгер ``SiteProbe.<name>``."""
    return logging.getLogger(LOGGER_NAME if not name else f"{LOGGER_NAME}.{name}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
