# File: tests/test_cli.py
"""Тесты для CLI (`fin_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `key`, `crawl`, `quote`, `indices`, `popular`, `--version`,
а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from fin_scout.crawl.gateway import CrawlGateway
from fin_scout.engine import Engine
from fin_scout.logger import init_logging
from fin_scout.storage import KeyValueStore

from conftest import GOOD_KEY, PAGE_ONE, PAGE_TWO

cli_module = importlib.import_module("fin_scout.cli")
cli = cli_module.cli


class FakeClient:
    """Стаб Firecrawl-клиента: принимает только GOOD_KEY."""

    crawl_response = {
        "status": "completed",
        "completed": 2,
        "total": 2,
        "creditsUsed": 2,
        "expiresAt": "2024-01-02T09:15:00.000Z",
        "data": [PAGE_ONE, PAGE_TWO],
    }

    def __init__(self, token):
        self.token = token

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def scrape_url(self, url, formats=("markdown",)):
        return {"success": self.token == GOOD_KEY}

    async def crawl_url(self, job):
        if self.token != GOOD_KEY:
            from fin_scout.crawl.client import FirecrawlError

            raise FirecrawlError("Unauthorized: Invalid token")
        return dict(self.crawl_response)


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"storage_path": str(tmp_path / "storage.json")}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def patch_engine(monkeypatch):
    """Патчим Engine, чтобы шлюз ходил в FakeClient вместо сети."""

    def build(cfg):
        gateway = CrawlGateway(KeyValueStore(cfg.storage_path), client_factory=FakeClient)
        return Engine(cfg, gateway=gateway)

    monkeypatch.setattr(cli_module, "Engine", build)


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI перенастраивает логгер на потоки CliRunner; возвращаем обычный stderr."""
    yield
    init_logging(level="WARNING")


@pytest.fixture()
def run(cfg_file):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, ["--config", str(cfg_file), *args])

    return invoke


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "FinScout" in result.output


def test_bad_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("poll_interval: -1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "popular"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


# --------------------------------------------------------------------------- #
#                                   key                                       #
# --------------------------------------------------------------------------- #


def test_key_set_verified(run, tmp_path):
    result = run("key", "set", GOOD_KEY)
    assert result.exit_code == 0
    assert "verified" in result.stdout
    stored = json.loads((tmp_path / "storage.json").read_text(encoding="utf-8"))
    assert stored == {"firecrawl_api_key": GOOD_KEY}


def test_key_set_invalid_is_not_saved(run, tmp_path):
    result = run("key", "set", "fc-bad")
    assert result.exit_code == 1
    assert "Invalid API key" in result.output
    assert not (tmp_path / "storage.json").exists()


def test_key_set_no_verify(run):
    assert run("key", "set", "fc-bad", "--no-verify").exit_code == 0
    result = run("key", "show")
    assert result.exit_code == 0
    assert result.stdout.strip() == "******"


def test_key_set_blank(run):
    result = run("key", "set", "   ")
    assert result.exit_code == 1
    assert "valid API key" in result.output


def test_key_show_masks(run):
    run("key", "set", GOOD_KEY)
    result = run("key", "show")
    assert result.exit_code == 0
    assert GOOD_KEY not in result.stdout
    assert result.stdout.strip().endswith(GOOD_KEY[-4:])


def test_key_show_missing(run):
    result = run("key", "show")
    assert result.exit_code == 1
    assert "API key not found" in result.output


def test_key_test_stored_and_explicit(run):
    run("key", "set", "fc-bad", "--no-verify")
    assert run("key", "test").exit_code == 1
    assert run("key", "test", GOOD_KEY).exit_code == 0


def test_key_remove(run):
    run("key", "set", GOOD_KEY)
    assert run("key", "remove").exit_code == 0
    assert run("key", "show").exit_code == 1


# --------------------------------------------------------------------------- #
#                                  crawl                                      #
# --------------------------------------------------------------------------- #


def test_crawl_requires_key(run):
    result = run("crawl")
    assert result.exit_code == 1
    assert "API key" in result.output


def test_crawl_rejects_bad_url(run):
    run("key", "set", GOOD_KEY)
    result = run("crawl", "moneycontrol")
    assert result.exit_code == 1
    assert "URL" in result.output


def test_crawl_lists_pages(run):
    run("key", "set", GOOD_KEY)
    result = run("crawl")
    assert result.exit_code == 0
    out = result.stdout
    assert "Pages scraped: 2" in out
    assert "Credits used:  2" in out
    assert "[1] Markets today" in out
    assert "[2] Mutual Funds" in out
    assert "https://www.moneycontrol.com/mutual-funds/" in out


def test_crawl_json_report_and_pretty(run, tmp_path):
    run("key", "set", GOOD_KEY)
    report = tmp_path / "reports" / "crawl.json"
    result = run("crawl", "https://www.moneycontrol.com/", "--json", str(report), "--pretty")
    assert result.exit_code == 0

    printed = json.loads(result.stdout)
    saved = json.loads(report.read_text(encoding="utf-8"))
    assert printed == saved
    assert saved["pages_completed"] == 2
    assert saved["expires_at"] == "2024-01-02T09:15:00.000Z"
    assert saved["pages"][0]["metadata"]["title"] == "Markets today"


def test_crawl_failure_reason(run):
    run("key", "set", "fc-bad", "--no-verify")
    result = run("crawl")
    assert result.exit_code == 1
    assert "Unauthorized: Invalid token" in result.output


# --------------------------------------------------------------------------- #
#                                 quotes                                      #
# --------------------------------------------------------------------------- #


def test_quote_stock(run):
    result = run("quote", "reliance")
    assert result.exit_code == 0
    assert "Reliance Industries Ltd" in result.stdout
    assert "Symbol:  RELIANCE" in result.stdout
    assert "₹" in result.stdout


def test_quote_unknown_symbol(run):
    result = run("quote", "acme")
    assert result.exit_code == 0
    assert "ACME Ltd" in result.stdout


def test_indices(run):
    result = run("indices")
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert [line.split()[0] for line in lines] == ["NIFTY50", "SENSEX", "BANKNIFTY", "NIFTYIT"]


def test_popular_limit(run):
    result = run("popular", "--limit", "5")
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("RELIANCE")
    assert len(run("popular").stdout.strip().splitlines()) == 10
