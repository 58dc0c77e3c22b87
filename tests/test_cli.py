# File: tests/test_cli.py
"""Tests for the command line (`site_fetcher.cli`) using click.testing.CliRunner.
Cover the `fetch` and `analyze` commands, `--version` and error handling.
"""
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import site_fetcher.cli as cli_module
from site_fetcher import __version__
from site_fetcher.aggregator import assemble_site_content
from site_fetcher.cli import cli
from site_fetcher.engine import FetchResult
from site_fetcher.logger import init_logging
from site_fetcher.models import AssetRecord, PageMetadata
from site_fetcher.report import SITE_CONTENT_FILE, render_json


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    # CliRunner swaps sys.stdout; point the logger back at the real one
    init_logging()


@pytest.fixture()
def captured(monkeypatch):
    """Patch fetch_website so no network run happens; record the config it receives."""
    calls = []

    async def fake_fetch(cfg):
        calls.append(cfg)
        content = assemble_site_content(cfg.url, [], [], digest="")
        return FetchResult(site_content=content, output_dir=cfg.output_dir, errors=list(fake_fetch.errors))

    fake_fetch.errors = []
    monkeypatch.setattr(cli_module, "fetch_website", fake_fetch)
    return calls, fake_fetch


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"site_fetcher, version {__version__}" in result.output


def test_fetch_defaults(captured, tmp_path):
    calls, _ = captured
    result = CliRunner().invoke(cli, ["fetch", "example.com", "--output", str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    cfg = calls[0]
    assert cfg.url == "https://example.com"
    assert cfg.output_dir == (tmp_path / "out").resolve()
    assert cfg.max_depth == 10
    assert cfg.recursive is True
    assert "=== Fetch Complete ===" in result.output
    assert "site-content.json" in result.output
    assert "site-digest.txt" in result.output


def test_fetch_flags_map_to_config(captured, tmp_path):
    calls, _ = captured
    args = [
        "fetch", "https://example.com", "-o", str(tmp_path),
        "--depth", "2", "--no-recursive", "--no-js", "--no-images", "--no-markdown",
        "-c", "3", "-t", "1500", "-u", "Agent/9",
    ]
    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 0, result.output
    cfg = calls[0]
    assert cfg.max_depth == 2
    assert cfg.recursive is False
    assert cfg.include_js is False
    assert cfg.include_images is False
    assert cfg.include_css is True
    assert cfg.generate_markdown is False
    assert cfg.max_concurrency == 3
    assert cfg.timeout_ms == 1500
    assert cfg.user_agent == "Agent/9"
    assert "site-content.md" not in result.output


def test_config_file_with_explicit_override(captured, tmp_path):
    calls, _ = captured
    cfg_file = tmp_path / "fetch.yaml"
    cfg_file.write_text(
        f"max_depth: 1\ninclude_css: false\nmax_concurrency: 7\noutput_dir: {tmp_path / 'from-file'}\n",
        encoding="utf-8",
    )
    result = CliRunner().invoke(
        cli, ["fetch", "example.com", "--config", str(cfg_file), "--depth", "4"]
    )

    assert result.exit_code == 0, result.output
    cfg = calls[0]
    assert cfg.max_depth == 4
    assert cfg.include_css is False
    assert cfg.max_concurrency == 7
    assert cfg.output_dir == (tmp_path / "from-file").resolve()


def test_invalid_config_file_reports_error(captured, tmp_path):
    calls, _ = captured
    cfg_file = tmp_path / "fetch.json"
    cfg_file.write_text(json.dumps({"max_depth": 1, "bogus": True}), encoding="utf-8")
    result = CliRunner().invoke(cli, ["fetch", "example.com", "--config", str(cfg_file)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert calls == []


def test_fetch_lists_first_warnings(captured, tmp_path):
    _, fake_fetch = captured
    fake_fetch.errors = [f"Error extracting page{i}.html: broken" for i in range(7)]
    result = CliRunner().invoke(cli, ["fetch", "example.com", "-o", str(tmp_path)])

    assert result.exit_code == 0
    assert "Fetch Complete (with errors)" in result.output
    assert "Warnings (7):" in result.output
    assert "page4.html" in result.output
    assert "page5.html" not in result.output
    assert "... and 2 more" in result.output


def test_analyze_summary(tmp_path, page_factory):
    page = page_factory("/", title="Home", paragraphs=["A paragraph long enough to count."])
    page = page.model_copy(update={"metadata": PageMetadata(structured_data=[{"@type": "LocalBusiness"}])})
    assets = [
        AssetRecord(url="https://example.com/a.css", local_path="example.com/a.css", type="style", size=3),
        AssetRecord(url="https://example.com/b.css", local_path="example.com/b.css", type="style", size=3),
        AssetRecord(url="https://example.com/", local_path="example.com/index.html", type="other", size=9),
    ]
    render_json(assemble_site_content("https://example.com", [page], assets), tmp_path / SITE_CONTENT_FILE)

    result = CliRunner().invoke(cli, ["analyze", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Base URL: https://example.com" in result.output
    assert "Home (/)" in result.output
    assert "Headings: 0, Paragraphs: 1, Images: 0" in result.output
    assert "style: 2" in result.output
    assert "other: 1" in result.output
    assert "Structured Data: Yes" in result.output
    assert "LocalBusiness Schema: Yes" in result.output


def test_analyze_missing_content(tmp_path):
    result = CliRunner().invoke(cli, ["analyze", str(Path(tmp_path) / "empty")])
    assert result.exit_code == 1
    assert "No site-content.json found" in result.output
