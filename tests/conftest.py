"""Shared pytest fixtures for aurpkg tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from aurpkg.config import Settings
from aurpkg.models import PackageSummary

GZIP_BYTES = b"\x1f\x8b\x08\x00" + b"\x00" * 16


def raw_record(name: str, votes: int = 0, **extra) -> dict:
    rec = {
        "Name": name,
        "Description": f"{name} description",
        "Version": "1.0-1",
        "NumVotes": votes,
        "Popularity": 0.5,
        "OutOfDate": None,
        "Maintainer": "someone",
        "URLPath": f"/cgit/aur.git/snapshot/{name}.tar.gz",
        "PackageBase": name,
    }
    rec.update(extra)
    return rec


def summary(name: str, votes: int = 0, **extra) -> PackageSummary:
    return PackageSummary.from_record(raw_record(name, votes, **extra))


@pytest.fixture
def search_doc():
    return {
        "version": 5,
        "type": "search",
        "resultcount": 4,
        "results": [
            raw_record("alpha", 3),
            raw_record("bravo", 120),
            raw_record("charlie", 0, Maintainer=None),
            raw_record("delta", 45, OutOfDate=1700000000),
        ],
    }


@pytest.fixture
def info_doc():
    return {
        "version": 5,
        "type": "multiinfo",
        "resultcount": 1,
        "results": [{
            "Name": "yay",
            "Description": "Yet another yogurt",
            "URL": "https://github.com/Jguer/yay",
            "Version": "12.3.5-1",
            "OutOfDate": None,
            "NumVotes": 2000,
            "FirstSubmitted": 1475688004,
            "LastModified": 1715000000,
            "Popularity": 12.3456,
            "Depends": ["pacman>5", "git"],
            "License": ["GPL-3.0-or-later"],
            "Keywords": [],
        }],
    }


@pytest.fixture
def console():
    """Plain console writing into a buffer; read it back via ``console.file``."""
    return Console(file=io.StringIO(), color_system=None, highlight=False,
                   soft_wrap=True, width=200)


@pytest.fixture
def arch_release(tmp_path: Path) -> Path:
    p = tmp_path / "os-release"
    p.write_text('NAME="Arch Linux"\nID=arch\nHOME_URL="https://archlinux.org/"\n')
    return p


@pytest.fixture
def settings(tmp_path: Path, arch_release: Path) -> Settings:
    tar = tmp_path / "bin" / "tar"
    makepkg = tmp_path / "bin" / "makepkg"
    tar.parent.mkdir()
    tar.touch()
    makepkg.touch()
    return Settings(
        base_url="https://aur.example.org",
        tar_paths=(str(tmp_path / "missing" / "tar"), str(tar)),
        makepkg_path=str(makepkg),
        os_release=arch_release,
    )
