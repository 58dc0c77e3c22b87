# File: tests/test_models.py
import json

import pytest
from pydantic import ValidationError

from site_fetcher.aggregator import assemble_site_content
from site_fetcher.models import AssetRecord, Heading, PageRecord
from site_fetcher.parser.extractor import extract_page_content
from site_fetcher.report.json_report import (
    load_assets_index,
    load_page,
    load_site_content,
    page_json_path,
    render_assets_index,
    render_json,
    render_page_json,
)

RICH_HTML = """<html><head>
<title>Rich page</title>
<meta charset="utf-8">
<meta name="description" content="Ünïcödé description">
<script type="application/ld+json">{"@type": "Organization", "rating": 4.5, "tags": ["a", null, true]}</script>
</head><body>
<h1>Rich page</h1><h2>Part</h2>
<p>A paragraph that is definitely longer than twenty characters.</p>
<ul><li>one</li><li>two</li></ul><ol><li>first</li></ol>
<a href="https://other.org">Elsewhere</a><a href="/in">Inside</a>
<img src="/i.png" alt="pic">
</body></html>"""


def test_page_record_json_round_trip(tmp_path):
    record = extract_page_content(RICH_HTML, "https://example.com/rich")
    saved = render_page_json(record, tmp_path / "content", "example.com/rich.html")

    assert saved == tmp_path / "content" / "example.com" / "rich.json"
    assert load_page(saved) == record
    assert PageRecord.model_validate_json(record.model_dump_json()) == record


def test_persisted_page_json_uses_indented_snake_case(tmp_path):
    record = extract_page_content(RICH_HTML, "https://example.com/rich")
    text = render_page_json(record, tmp_path, "rich.html").read_text(encoding="utf-8")
    data = json.loads(text)
    assert text.startswith("{\n  ")
    assert data["extracted_text"]
    assert data["links"][0]["is_external"] is True
    assert data["lists"][1]["kind"] == "ordered"
    assert "Ünïcödé" in text


def test_site_content_and_assets_round_trip(tmp_path):
    record = extract_page_content(RICH_HTML, "https://example.com/rich")
    assets = [AssetRecord(url="https://example.com/a.css", local_path="example.com/a.css", type="style", size=10)]
    content = assemble_site_content("https://example.com", [record], assets, digest="digest")

    assert load_site_content(render_json(content, tmp_path / "site-content.json")) == content
    assert load_assets_index(render_assets_index(assets, tmp_path / "assets-index.json")) == assets
    assert json.loads((tmp_path / "assets-index.json").read_text(encoding="utf-8"))[0]["type"] == "style"


@pytest.mark.parametrize(
    "html_path,json_path",
    [("example.com/index.html", "example.com/index.json"), ("a/b.htm", "a/b.json")],
)
def test_page_json_path(html_path, json_path):
    assert page_json_path(html_path).as_posix() == json_path


def test_records_are_frozen():
    heading = Heading(level=1, text="x")
    with pytest.raises(ValidationError):
        heading.text = "changed"


def test_heading_level_bounds():
    with pytest.raises(ValidationError):
        Heading(level=7, text="too deep")
