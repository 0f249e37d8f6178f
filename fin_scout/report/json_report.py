# fin_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта FinScout.

Сериализация результата обхода (CrawlSuccess) в файл.
"""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from fin_scout.crawl.models import CrawlSuccess


def crawl_to_dict(result: CrawlSuccess) -> Dict[str, Any]:
    """Словарь с полями результата и списком страниц (markdown, html, metadata)."""
    return asdict(result)


def render_json(result: CrawlSuccess, output_path: Path | str) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param result: объект CrawlSuccess
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from fin_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(crawl_to_dict(result), f, ensure_ascii=False, indent=2)

    return output
