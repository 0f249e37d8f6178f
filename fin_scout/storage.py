# File: fin_scout/storage.py
"""fin_scout.storage: Долговременное key-value хранилище строк в JSON-файле."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from fin_scout.logger import logger

__all__ = ["KeyValueStore"]


class KeyValueStore:
    """Плоский словарь ``str -> str``, сохраняемый в JSON-файл.

    Файл читается при каждом обращении и перезаписывается атомарно
    (временный файл + ``os.replace``), поэтому несколько процессов CLI
    видят последнее сохранённое значение. Отсутствующий файл равен пустому
    хранилищу.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)
        logger.debug("Stored key %s in %s", key, self.path)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is None:
            return
        self._dump(data)
        logger.debug("Deleted key %s from %s", key, self.path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"Неправильный JSON в {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise TypeError(
                f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}"
            )
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)
