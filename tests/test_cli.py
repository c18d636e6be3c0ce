"""CLI tests (`a11y_scout/cli.py`) with click.testing.CliRunner.
Cover the `scan` and `config` commands, `--version` and error handling.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

# The package re-exports `cli`, shadowing the submodule attribute; fetch the module itself.
cli_module = importlib.import_module("a11y_scout.cli")
from a11y_scout.cli import cli
from a11y_scout.crawler.models import ScanResult
from a11y_scout.logger import configure


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Replace start_scan with a stub that returns fixed results without crawling."""
    seen = []

    async def fake_scan(cfg):
        seen.append(cfg)
        return [ScanResult(cfg.start_url, {"violations": [{"id": "image-alt"}]})]

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return seen


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI binds log handlers to the runner's streams; rebind them afterwards."""
    yield
    configure()


@pytest.fixture()
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def config_file(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(
        json.dumps({
            "start_url": "https://example.com/",
            "max_depth": 1,
            "render": {"engine": "http"},
            "analysis": {"engine": "markup"},
        }),
        encoding="utf-8",
    )
    return cfg_file


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "A11yScout" in result.output


def test_show_config(config_file, isolated):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["start_url"] == "https://example.com/"
    assert data["max_depth"] == 1
    assert data["render"]["engine"] == "http"


def test_scan_stdout(isolated, patch_start_scan):
    # keep log lines out of the captured output
    result = CliRunner().invoke(
        cli,
        ["--log-level", "WARNING", "scan", "https://example.com/", "--max-scans", "3",
         "--renderer", "http", "--analyzer", "markup"],
    )
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["success"] is True
    assert output["results"][0]["url"] == "https://example.com/"
    cfg = patch_start_scan[0]
    assert cfg.max_scans == 3
    assert cfg.render.engine == "http"


def test_scan_overrides_config_file(config_file, isolated, patch_start_scan):
    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "scan", "https://other.example/", "--analyzer", "markup"]
    )
    assert result.exit_code == 0
    cfg = patch_start_scan[0]
    assert cfg.start_url == "https://other.example/"
    assert cfg.max_depth == 1
    assert cfg.analysis.engine == "markup"


def test_scan_json_file(isolated):
    out = isolated / "out.json"
    result = CliRunner().invoke(cli, ["scan", "https://example.com/", "--json", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["results"][0]["url"] == "https://example.com/"


def test_scan_html_file(isolated):
    out = isolated / "report.html"
    result = CliRunner().invoke(cli, ["scan", "https://example.com/", "--html", str(out)])
    assert result.exit_code == 0
    assert "image-alt" in out.read_text(encoding="utf-8")


def test_scan_without_start_url_fails(isolated):
    result = CliRunner().invoke(cli, ["scan"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_scan_failure(monkeypatch, isolated):
    async def broken(cfg):
        raise RuntimeError("browser crashed")

    monkeypatch.setattr(cli_module, "start_scan", broken)
    result = CliRunner().invoke(cli, ["scan", "https://example.com/"])
    assert result.exit_code == 1
    assert "browser crashed" in result.output


def test_scan_timeout(monkeypatch, isolated):
    async def slow(cfg):
        await asyncio.sleep(2)
        return []

    monkeypatch.setattr(cli_module, "start_scan", slow)
    result = CliRunner().invoke(cli, ["scan", "https://example.com/", "--scan-timeout", "0.2"])
    assert result.exit_code != 0
    assert "did not finish" in result.output


def test_scan_rejects_http_renderer_with_axe(isolated, patch_start_scan):
    result = CliRunner().invoke(cli, ["scan", "https://example.com/", "--renderer", "http"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert patch_start_scan == []
