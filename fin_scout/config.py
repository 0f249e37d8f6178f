# === FILE: fin_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации FinScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

from fin_scout.logger import logger


class DashboardConfig(BaseModel):
    """Настройки подключения к Firecrawl, хранилища ключа и кэша котировок."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    api_url: HttpUrl = Field(
        "https://api.firecrawl.dev", description="Базовый URL Firecrawl API."
    )
    storage_path: Path = Field(
        Path("~/.fin_scout/storage.json"),
        description="JSON-файл, в котором хранится API-ключ.",
    )
    reference_url: HttpUrl = Field(
        "https://example.com", description="Страница для проверки API-ключа."
    )
    default_crawl_url: HttpUrl = Field(
        "https://www.moneycontrol.com/", description="Сайт для обхода по умолчанию."
    )
    poll_interval: float = Field(2.0, gt=0, description="Интервал опроса статуса обхода (секунд).")
    request_timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут HTTP-сессии (секунд); None — значение aiohttp."
    )
    cache_ttl: float = Field(300.0, gt=0, description="Время жизни котировки в кэше (секунд).")

    @field_validator("storage_path", mode="after")
    def _expand_user(cls, v: Path) -> Path:
        return v.expanduser()


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


def load_config(path: Union[str, Path, None]) -> DashboardConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект DashboardConfig.

    Без явного пути используется configs/default.yaml, а если его нет —
    значения по умолчанию. Явно указанный, но отсутствующий файл
    приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            logger.debug("Config %s not found, using defaults", _DEFAULT_CFG)
            return DashboardConfig()
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

    try:
        return DashboardConfig(**data)
    except ValidationError:
        logger.error("Invalid configuration in %s", path_obj)
        raise


__all__ = ["DashboardConfig", "load_config"]
