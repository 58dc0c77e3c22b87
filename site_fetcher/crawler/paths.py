# site_fetcher/crawler/paths.py
"""
Mapping between canonical site URLs and site-structured local paths.

The fetch engine stores ``https://example.com/docs/`` as
``example.com/docs/index.html``; :func:`reconstruct_url` goes the other way.
Neither direction touches the filesystem or the network.
"""
from __future__ import annotations

import posixpath
from pathlib import PurePath
from typing import List, Union
from urllib.parse import unquote, urlparse

from site_fetcher.utils import HTML_SUFFIXES, normalize_hostname, origin_of

INDEX_FILE = "index.html"


def host_variants(hostname: str) -> List[str]:
    """Candidate host-folder names, in the order they are tried."""
    bare = normalize_hostname(hostname)
    return [hostname, bare, "www." + bare]


def _strip_host_folder(relative_path: str, hostname: str) -> str:
    for host in host_variants(hostname):
        if relative_path.startswith(host + "/"):
            return relative_path[len(host) + 1:]
        if relative_path.startswith(host):
            return relative_path[len(host):]
    return relative_path


def reconstruct_url(seed_url: str, local_path: Union[str, PurePath]) -> str:
    """Map a downloaded file's path (relative to the assets dir) to its canonical URL."""
    relative = PurePath(local_path).as_posix() if isinstance(local_path, PurePath) else local_path
    relative = relative.replace("\\", "/")
    origin = origin_of(seed_url)

    remainder = _strip_host_folder(relative, urlparse(seed_url).hostname or "")
    if remainder in ("", INDEX_FILE):
        return origin + "/"

    if remainder.endswith("/" + INDEX_FILE):
        clean = remainder[: -len(INDEX_FILE)]
    elif remainder.endswith(".html"):
        clean = remainder[: -len(".html")]
    else:
        clean = remainder
    return origin + "/" + clean


def local_path_for(url: str, is_html: bool) -> str:
    """
    Site-structured relative path for ``url``: ``<hostname>/<path>``.

    HTML without an .html/.htm extension becomes ``<path>/index.html``; any other
    directory-like path gets an ``index`` file name. Query and fragment are dropped.
    """
    parsed = urlparse(url)
    host = parsed.hostname or "unknown-host"
    path = unquote(parsed.path or "/")
    is_dir = path.endswith("/")

    parts = [p for p in posixpath.normpath(path).split("/") if p not in ("", ".", "..")]
    if is_html and (is_dir or not parts or posixpath.splitext(parts[-1])[1].lower() not in HTML_SUFFIXES):
        parts.append(INDEX_FILE)
    elif is_dir or not parts:
        parts.append("index")
    return "/".join([host, *parts])


__all__ = ["INDEX_FILE", "host_variants", "local_path_for", "reconstruct_url"]
