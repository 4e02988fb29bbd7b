"""
Тесты настройки логирования: выбор renderer и уровня из config.yaml.
"""
import pytest
import structlog

from voice_pruner.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_renderer_by_default():
    setup_logging(config_yaml={"logging": {"level": "INFO"}})

    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)


def test_console_renderer_from_config():
    setup_logging(config_yaml={"logging": {"level": "info", "format": "console"}})

    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


def test_explicit_level_filters_lower_levels(capsys):
    setup_logging(level="warning")
    logger = structlog.get_logger("test")

    logger.info("hidden_event")
    logger.warning("shown_event")

    out = capsys.readouterr().out
    assert "shown_event" in out
    assert "hidden_event" not in out
