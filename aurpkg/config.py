"""Runtime settings: endpoints, well-known tool paths and limits.

Defaults target the public AUR on an Arch host. ``Settings.from_env`` lets a
few values be overridden from the environment:

  AURPKG_BASE_URL   base of every request (default https://aur.archlinux.org)
  AURPKG_TIMEOUT    per-request timeout in seconds (default 25)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from aurpkg import __version__
from aurpkg.errors import ConfigError

# ──────────────────────────────────────────────────────────────────────────────
# Constants & endpoints
# ──────────────────────────────────────────────────────────────────────────────
AUR_BASE_URL = "https://aur.archlinux.org"
SNAPSHOT_PATH = "cgit/aur.git/snapshot"

TAR_PATHS = ("/usr/bin/tar", "/bin/tar")
MAKEPKG_PATH = "/usr/bin/makepkg"
# build, install deps (-s) and the result (-i), no pacman prompts
MAKEPKG_FLAGS = ("-si", "--noconfirm")

OS_RELEASE = "/etc/os-release"
PLATFORM_MARKERS = ("Arch Linux", "arch", "https://archlinux.org")

MAX_REDIRECTS = 50
TIMEOUT = 25
INPUT_CAPACITY = 256
UA = f"aurpkg/{__version__}"


@dataclass(frozen=True)
class Settings:
    base_url: str = AUR_BASE_URL
    snapshot_path: str = SNAPSHOT_PATH
    tar_paths: tuple[str, ...] = TAR_PATHS
    makepkg_path: str = MAKEPKG_PATH
    makepkg_flags: tuple[str, ...] = MAKEPKG_FLAGS
    os_release: Path = Path(OS_RELEASE)
    platform_markers: tuple[str, ...] = PLATFORM_MARKERS
    max_redirects: int = MAX_REDIRECTS
    timeout: float = TIMEOUT
    input_capacity: int = INPUT_CAPACITY
    user_agent: str = UA

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()
        base = env.get("AURPKG_BASE_URL", "").strip()
        if base:
            settings = replace(settings, base_url=base.rstrip("/"))
        timeout = env.get("AURPKG_TIMEOUT", "").strip()
        if timeout:
            try:
                settings = replace(settings, timeout=float(timeout))
            except ValueError as exc:
                raise ConfigError(f"Invalid AURPKG_TIMEOUT: {timeout!r}") from exc
        return settings
