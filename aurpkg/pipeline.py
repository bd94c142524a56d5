"""
Acquisition pipeline: fetch, validate, extract and build one selected package.

Steps run in strict order and each one is a hard failure point:

  1. archive name    basename of the record's URLPath
  2. archive URL     cgit snapshot of the record's PackageBase
  3. download        into the working directory, ≤ 50 redirects
  4. validate        first two bytes must be the gzip magic 1f 8b
  5. locate tar      /usr/bin/tar, then /bin/tar (no $PATH search)
  6. extract         ``tar xf <archive>``, blocking wait
  7. platform gate   /etc/os-release must look like Arch Linux
  8. refuse          a failed gate stops here, makepkg never runs
  9. locate makepkg  /usr/bin/makepkg
 10. build           ``makepkg -si --noconfirm`` inside <PackageBase>/

Child processes are waited on without a timeout: a slow build is a normal
build.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from aurpkg.config import Settings
from aurpkg.errors import (
    ArchiveSignatureError,
    ExternalToolError,
    MalformedResponseError,
    PlatformError,
    ResourceError,
    ToolNotFoundError,
)
from aurpkg.models import PackageSummary
from aurpkg.transport import Transport
from aurpkg.urls import archive_basename, snapshot_url

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


# ──────────────────────────────────────────────────────────────────────────────
# Checks
# ──────────────────────────────────────────────────────────────────────────────
def has_gzip_signature(path: Path) -> bool:
    try:
        with open(path, "rb") as fh:
            magic = fh.read(len(GZIP_MAGIC))
    except OSError as exc:
        raise ResourceError(f"cannot read {path}: {exc}") from exc
    return magic == GZIP_MAGIC


def likely_arch_linux(os_release: Path, markers: Sequence[str]) -> bool:
    """
    Heuristic: does the os-release file mention Arch Linux?

    Arch ships an os-release file, so a missing one means "not Arch".
    """
    try:
        text = os_release.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.debug("%s not readable, assuming a non-Arch host", os_release)
        return False
    return any(marker in text for marker in markers)


def locate_tool(name: str, candidates: Sequence[str]) -> str:
    for candidate in candidates:
        if os.path.exists(candidate):
            logger.debug("using %s at %s", name, candidate)
            return candidate
    raise ToolNotFoundError(f"'{name}' is not installed.")


def run_and_wait(cmd: Sequence[str], cwd: Optional[Path] = None) -> int:
    """Spawn *cmd* and block until it exits; a non-zero status is fatal."""
    logger.info("running %s%s", " ".join(shlex.quote(c) for c in cmd),
                f" in {cwd}" if cwd else "")
    try:
        proc = subprocess.Popen(list(cmd), cwd=cwd)
    except OSError as exc:
        raise ExternalToolError(f"cannot run {cmd[0]}: {exc}") from exc
    rc = proc.wait()
    if rc != 0:
        raise ExternalToolError(f"{os.path.basename(cmd[0])} exited with status {rc}", rc)
    return rc


# ──────────────────────────────────────────────────────────────────────────────
# Pipeline
# ──────────────────────────────────────────────────────────────────────────────
class AcquisitionPipeline:
    def __init__(self, settings: Settings, transport: Transport, console: Console,
                 workdir: Optional[Path] = None) -> None:
        self.settings = settings
        self.transport = transport
        self.console = console
        self.workdir = Path.cwd() if workdir is None else workdir

    def __call__(self, ordinal: int, summary: PackageSummary) -> None:
        self.acquire(ordinal, summary)

    def acquire(self, ordinal: int, summary: PackageSummary) -> None:
        if summary.url_path is None or not summary.package_base:
            raise MalformedResponseError(f"{summary.name} has no downloadable snapshot")

        archive = archive_basename(summary.url_path)
        url = snapshot_url(summary.package_base, self.settings.base_url,
                           self.settings.snapshot_path)
        dest = self.workdir / archive

        self.console.print(f"[blue]::[/] [magenta]({ordinal})[/] "
                           f"[bold white]Downloading {escape(archive)}...[/]")
        self.transport.download(url, dest)

        self.console.print(f"[blue]::[/] [bold white]~> Extracting {escape(archive)}...[/]")
        self.extract(dest)

        # the snapshot unpacks into a directory named after the package base
        self.build(self.workdir / summary.package_base)

    def extract(self, archive: Path) -> None:
        if not has_gzip_signature(archive):
            raise ArchiveSignatureError("Downloaded archive is not a gzipped tarball.")
        tar = locate_tool("tar", self.settings.tar_paths)
        run_and_wait([tar, "xf", archive.name], cwd=self.workdir)

    def build(self, build_dir: Path) -> None:
        if not likely_arch_linux(self.settings.os_release, self.settings.platform_markers):
            raise PlatformError("You are not running Arch GNU/Linux. "
                                "So I cannot run 'makepkg' here.")
        makepkg = locate_tool("makepkg", (self.settings.makepkg_path,))
        if not build_dir.is_dir():
            raise ResourceError(f"extracted directory {build_dir} does not exist")
        run_and_wait([makepkg, *self.settings.makepkg_flags], cwd=build_dir)
