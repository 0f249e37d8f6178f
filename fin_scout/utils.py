# File: fin_scout/utils.py
"""fin_scout.utils: Утилитарные функции для проверки URL, форматирования чисел и маскировки ключей."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

from fin_scout.logger import logger

__all__: Sequence[str] = (
    "is_valid_url",
    "format_number",
    "format_inr",
    "mask_secret",
)


def is_valid_url(url: str) -> bool:
    """Проверяет, что URL использует http(s) и содержит хост."""
    try:
        parsed = urlparse(url)
        valid = parsed.scheme in ("http", "https") and bool(parsed.netloc)
        logger.debug("URL valid: %s -> %s", url, valid)
        return valid
    except ValueError as exc:
        logger.error("URL validation error %s: %s", url, exc)
        return False


def _group_indian(digits: str) -> str:
    """Группирует целую часть по-индийски: последние три цифры, затем по две."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(value: float, decimals: int = 2) -> str:
    """Форматирует число в локали en-IN: ``1234567.891 -> '12,34,567.89'``."""
    text = f"{abs(value):.{decimals}f}"
    whole, _, frac = text.partition(".")
    sign = "-" if value < 0 and float(text) != 0 else ""
    grouped = _group_indian(whole)
    return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"


def format_inr(value: float) -> str:
    """Сумма в рупиях с двумя знаками после запятой: ``'₹1,234.50'``."""
    text = format_number(value, 2)
    if text.startswith("-"):
        return f"-₹{text[1:]}"
    return f"₹{text}"


def mask_secret(token: str) -> str:
    """Скрывает середину ключа, оставляя первые 3 и последние 4 символа."""
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:3]}{'*' * (len(token) - 7)}{token[-4:]}"
