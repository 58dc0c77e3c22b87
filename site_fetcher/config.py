# === FILE: site_fetcher/config.py ===
"""
Loading and validation of the site_fetcher run configuration.
A Pydantic schema describes every recognised option and its default.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SiteFetcher/1.0; +https://github.com/site-fetcher)"
DEFAULT_OUTPUT_DIR = Path("./fetched")


class FetchConfig(BaseModel):
    """Options for a single fetch run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., description="Seed URL the crawl starts from.")
    output_dir: Path = Field(DEFAULT_OUTPUT_DIR, description="Directory receiving every output file.")
    recursive: bool = Field(True, description="Follow links found on fetched pages.")
    max_depth: int = Field(10, ge=0, description="Maximum link depth from the seed page.")
    include_assets: bool = Field(True, description="Download icons, media, objects and embeds.")
    include_css: bool = Field(True, description="Download stylesheets.")
    include_js: bool = Field(True, description="Download scripts.")
    include_images: bool = Field(True, description="Download images.")
    extract_content: bool = Field(True, description="Extract structured content from HTML pages.")
    generate_digest: bool = Field(True, description="Write the condensed site digest.")
    generate_markdown: bool = Field(True, description="Write the Markdown report.")
    max_concurrency: int = Field(5, ge=1, description="Maximum simultaneous requests.")
    timeout_ms: int = Field(30000, gt=0, description="Per-request timeout in milliseconds.")
    user_agent: Optional[str] = Field(None, description="User-Agent header; a default is used when unset.")
    retry_times: int = Field(2, ge=0, description="Retries on 5xx/429 inside the fetch engine.")

    @field_validator("url", mode="before")
    def _ensure_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v.startswith(("http://", "https://")):
                v = "https://" + v
        return v

    @field_validator("url")
    def _check_host(cls, v: str) -> str:
        if not urlparse(v).hostname:
            raise ValueError(f"URL has no host: {v!r}")
        return v

    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds."""
        return self.timeout_ms / 1000

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or DEFAULT_USER_AGENT

    @property
    def assets_dir(self) -> Path:
        return self.output_dir / "assets"

    @property
    def content_dir(self) -> Path:
        return self.output_dir / "content"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON config file into a plain mapping (no validation)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> FetchConfig:
    """
    Build a validated FetchConfig from an optional YAML/JSON file.

    Keyword ``overrides`` take precedence over values read from the file.
    Raises FileNotFoundError for a missing file, ValueError/TypeError for
    malformed content and pydantic.ValidationError for invalid values.
    """
    data: Dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update(overrides)
    try:
        return FetchConfig(**data)
    except ValidationError:
        raise


__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_USER_AGENT",
    "FetchConfig",
    "load_config",
    "read_config_file",
]
