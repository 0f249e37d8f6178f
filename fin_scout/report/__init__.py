"""fin_scout.report: сохранение результатов обхода, используемое CLI и тестами."""

from __future__ import annotations

from fin_scout.report.json_report import crawl_to_dict, render_json

__all__ = ["crawl_to_dict", "render_json"]
