"""Console output for search results, package info and prompts."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Sequence

from dateutil.tz import tzlocal
from rich.console import Console
from rich.markup import escape

from aurpkg.errors import MalformedResponseError
from aurpkg.models import PackageInfo, PackageSummary

SEPARATOR = "*" * 32


def make_console(colors: bool, stderr: bool = False) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        color_system="auto" if colors else None,
        force_terminal=True if colors else None,
        highlight=False,
        soft_wrap=True,
    )


def pretty_date(timestamp: int) -> str:
    """Epoch seconds → ``YYYY-MM-DD`` in the local timezone."""
    try:
        when = datetime.fromtimestamp(timestamp, tz=tzlocal())
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedResponseError(f"invalid timestamp {timestamp!r}") from exc
    return when.strftime("%Y-%m-%d")


# ──────────────────────────────────────────────────────────────────────────────
# Search
# ──────────────────────────────────────────────────────────────────────────────
def format_summary(rank: int, pkg: PackageSummary) -> str:
    line = (f"[magenta]{rank}[/] [bold blue]aur[/]/[bold white]{escape(pkg.name)}[/] "
            f"[bold green]({escape(pkg.version)})[/]"
            f"[bold white] (+{pkg.votes} {pkg.popularity:.2f}%)[/]")
    if pkg.orphaned:
        line += "[bold red] (Orphaned)[/]"
    if pkg.flagged_out_of_date:
        line += f"[bold red] (Out-of-date: {pretty_date(pkg.out_of_date)})[/]"
    return f"{line}\n ~> {escape(pkg.description)}"


def print_search_results(console: Console, summaries: Sequence[PackageSummary]) -> None:
    for rank, pkg in enumerate(summaries, 1):
        console.print(format_summary(rank, pkg))


def print_selection_prompt(console: Console) -> None:
    console.print("[blue]::[/] [bold white]Packages to install (eg: 1 2 3):[/]")
    console.print("[blue]::[/] ", end="")
    console.file.flush()


# ──────────────────────────────────────────────────────────────────────────────
# Info
# ──────────────────────────────────────────────────────────────────────────────
def info_rows(info: PackageInfo) -> list[tuple[str, str]]:
    outdated = pretty_date(info.out_of_date) if info.flagged_out_of_date else "No"
    return [
        ("Package Name", info.name),
        ("Description", info.description),
        ("URL", info.url),
        ("Version", info.version),
        ("Outdated", outdated),
        ("Votes", str(info.votes)),
        ("First Submitted", pretty_date(info.first_submitted)),
        ("Last Modified", pretty_date(info.last_modified)),
        ("Popularity", f"{info.popularity:.2f}%"),
        ("Depends", info.depends),
        ("Licenses", info.licenses),
        ("Keywords", info.keywords),
        ("Opt-Depends", info.opt_depends),
    ]


def print_package_info(console: Console, info: PackageInfo) -> None:
    for label, value in info_rows(info):
        console.print(f"[blue]::[/] [bold white]{label}:[/] {escape(value)}")


def print_separator(console: Console) -> None:
    console.print(f"[green]{SEPARATOR}[/]")
