# File: site_fetcher/report/markdown_report.py
"""site_fetcher.report.markdown_report: long Markdown report rendered with Jinja2."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence, Union
from urllib.parse import urlparse

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_fetcher.models import PageRecord

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.md.j2"
MAX_PARAGRAPHS = 10


def _environment(template_dir: Union[Path, str]) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def generate_markdown_report(
    pages: Sequence[PageRecord],
    base_url: str,
    generated_at: Optional[str] = None,
    template_dir: Union[Path, str] = TEMPLATE_DIR,
) -> str:
    """Рендерит Markdown-отчёт по всем страницам.

    Args:
        pages: извлечённые страницы в порядке вывода.
        base_url: корневой URL сайта (в заголовок идёт только hostname).
        generated_at: метка времени ISO 8601; по умолчанию текущее время UTC.
        template_dir: директория с шаблоном ``report.md.j2``.

    Returns:
        Текст отчёта. Абзацы не обрезаются, выводятся первые 10 на страницу.
    """
    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    context: dict[str, Any] = {
        "domain": urlparse(base_url).hostname or base_url,
        "generated_at": generated_at or datetime.now(timezone.utc).isoformat(),
        "pages": list(pages),
        "max_paragraphs": MAX_PARAGRAPHS,
    }
    return template.render(**context)


__all__ = ["MAX_PARAGRAPHS", "TEMPLATE_DIR", "generate_markdown_report"]
