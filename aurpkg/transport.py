"""Blocking HTTP access on top of a ``requests.Session``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from aurpkg.config import Settings
from aurpkg.errors import MalformedResponseError, ResourceError, TransportError

logger = logging.getLogger(__name__)

CHUNK = 64 * 1024


class Transport:
    def __init__(self, settings: Settings,
                 session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session if session is not None else requests.Session()
        self.session.max_redirects = settings.max_redirects
        self.session.headers.update({"User-Agent": settings.user_agent})

    # ──────────────────────────────────────────────────────────────────────
    # Small HTTP helpers
    # ──────────────────────────────────────────────────────────────────────
    def _get(self, url: str, **kwargs) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            r = self.session.get(url, timeout=self.settings.timeout, **kwargs)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc
        return r

    def get_json(self, url: str) -> dict:
        r = self._get(url, headers={"Accept": "application/json"})
        try:
            doc = r.json()
        except ValueError as exc:
            raise MalformedResponseError(f"invalid JSON from {url}: {exc}") from exc
        if not isinstance(doc, dict):
            raise MalformedResponseError(f"unexpected JSON document from {url}")
        if doc.get("type") == "error":
            raise MalformedResponseError(
                f"AUR RPC error: {doc.get('error') or 'unknown error'}")
        return doc

    def download(self, url: str, dest: Path) -> Path:
        """
        Stream *url* into *dest*, following up to ``max_redirects`` redirects.

        The file is created before the request is issued, so an unwritable
        destination fails without touching the network.
        """
        try:
            fh = open(dest, "wb")
        except OSError as exc:
            raise ResourceError(f"cannot open {dest}: {exc}") from exc
        with fh:
            r = self._get(url, stream=True)
            try:
                with r:
                    for chunk in r.iter_content(chunk_size=CHUNK):
                        fh.write(chunk)
            except requests.RequestException as exc:
                raise TransportError(f"download of {url} failed: {exc}") from exc
            except OSError as exc:
                raise ResourceError(f"cannot write {dest}: {exc}") from exc
        logger.info("saved %s → %s", url, dest)
        return dest
