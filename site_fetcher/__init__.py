# site_fetcher/__init__.py
"""
site_fetcher package initializer.
Defines package version and exposes the pipeline entry points.
"""
__version__ = "0.1.0"

from site_fetcher.config import FetchConfig, load_config
from site_fetcher.engine import Engine, FetchResult, fetch_website

__all__ = ["Engine", "FetchConfig", "FetchResult", "fetch_website", "load_config", "__version__"]
