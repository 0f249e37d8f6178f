"""fin_scout.parser: helpers that turn crawled pages into printable summaries."""

from fin_scout.parser.html_parser import PageSummary, summarize_page

__all__ = ["PageSummary", "summarize_page"]
