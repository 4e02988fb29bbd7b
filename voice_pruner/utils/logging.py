"""
Настройка structlog: JSON или консольный renderer, уровень из конфига (config.yaml logging.level или INFO).
Привязка к стандартному logging (discord.py пишет в него же).
Вызов setup_logging() при старте приложения.
"""

import logging
import sys

import structlog


def setup_logging(
    level: str | None = None,
    config_yaml: dict | None = None,
) -> None:
    """
    Настраивает structlog для приложения.

    - level: явный уровень (DEBUG, INFO, WARNING, ERROR). Если не передан,
      берётся из config_yaml["logging"]["level"], иначе "INFO".
    - config_yaml: структура, возвращённая load_config_yaml() (bot, logging).
      logging.format: "json" (по умолчанию) или "console".
    """
    logging_config = (config_yaml or {}).get("logging") or {}
    if level is None:
        level = logging_config.get("level") or "INFO"
    level = level.upper()
    fmt = (logging_config.get("format") or "json").lower()

    numeric_level = getattr(logging, level, logging.INFO)

    # Привязка к стандартному logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None):  # noqa: ANN201
    """Возвращает structlog-логгер для модуля (опционально с именем)."""
    return structlog.get_logger(name)
