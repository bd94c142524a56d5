"""Request URLs for the AUR RPC v5 interface and cgit snapshots."""

from __future__ import annotations

from urllib.parse import quote

from aurpkg.config import AUR_BASE_URL, SNAPSHOT_PATH
from aurpkg.errors import MalformedResponseError


def search_url(query: str, base: str = AUR_BASE_URL) -> str:
    return f"{base}/rpc/v5/search/{quote(query, safe='')}"


def info_url(name: str, base: str = AUR_BASE_URL) -> str:
    return f"{base}/rpc/v5/info?arg[]={quote(name, safe='')}"


def snapshot_url(package_base: str, base: str = AUR_BASE_URL,
                 snapshot_path: str = SNAPSHOT_PATH) -> str:
    """
    Snapshot tarball for a package base.

    ``URLPath`` in RPC results can lag behind the repository, so the archive
    is always fetched by ``PackageBase``.
    """
    return f"{base}/{snapshot_path}/{package_base}.tar.gz"


def archive_basename(url_path: str) -> str:
    """Final path segment of a download-path fragment (``/cgit/.../foo.tar.gz`` → ``foo.tar.gz``)."""
    _, sep, tail = url_path.rpartition("/")
    if not sep or not tail:
        raise MalformedResponseError(f"Parsed URL is invalid: {url_path!r}")
    return tail
