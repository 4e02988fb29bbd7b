"""
Настройки приложения: переменные окружения (.env) и опциональная загрузка config.yaml.
Без импортов из bot, engine — только pydantic-settings и PyYAML.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# --- Структура по умолчанию для config.yaml (секции bot, logging) ---

_DEFAULT_YAML = {
    "bot": {"status": "online"},
    "logging": {"level": "INFO", "format": "json"},
}


def load_config_yaml(path: str | Path | None = None) -> dict[str, Any]:
    """
    Загружает config.yaml и возвращает структуру с секциями bot, logging.
    Если файл отсутствует или секция не задана — подставляются значения по умолчанию.

    Остальной код может читать: status, level, format.
    """
    if path is None:
        path = Path("config.yaml")
    path = Path(path)
    if not path.is_file():
        return merge(_DEFAULT_YAML, {})

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return merge(_DEFAULT_YAML, data)


def merge(base: dict, override: dict) -> dict:
    out = {k: dict(v) if isinstance(v, dict) else v for k, v in base.items()}
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = merge(out[k], v)
        else:
            out[k] = v
    return out


class Settings(BaseSettings):
    """Настройки из .env (pydantic-settings)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DISCORD_TOKEN: str | None = Field(default=None, description="Токен Discord-бота")
    DISCORD_GUILD_ID: int | None = Field(
        default=None,
        description="Регистрировать slash-команды только в этой гильдии (иначе глобально)",
    )
    CREDENTIALS_DIRECTORY: str | None = Field(
        default=None,
        description="Каталог systemd credentials; токен читается из файла token",
    )

    def resolve_token(self) -> str:
        """
        Токен из systemd credential storage, иначе из DISCORD_TOKEN.
        Без токена запуск невозможен — RuntimeError.
        """
        if self.CREDENTIALS_DIRECTORY:
            path = Path(self.CREDENTIALS_DIRECTORY) / "token"
            return path.read_text(encoding="utf-8").strip()
        if self.DISCORD_TOKEN:
            return self.DISCORD_TOKEN
        raise RuntimeError("DISCORD_TOKEN is not set and CREDENTIALS_DIRECTORY is missing")


_settings: Settings | None = None


def get_settings() -> Settings:
    """Возвращает единственный экземпляр настроек (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
