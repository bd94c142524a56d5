"""
aurpkg — a small and lightweight AUR helper.

Search the AUR, pick packages by number and build them with makepkg, or show
detailed package information.

Usage examples
--------------
# Search, then type the numbers to install at the prompt (eg: 1 2 3)
aurpkg -s spotify

# Same, coloured (-sc is short for -c -s, -ic for -c -i)
aurpkg -sc spotify

# Information about one or more packages
aurpkg -i yay paru

# Download anything into the current directory
aurpkg -g https://example.org/file.tar.gz

Exit codes
----------
0 success, help, or nothing selected; 1 any fatal error; 130 interrupted.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO
from urllib.parse import unquote, urlparse

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aurpkg import __version__
from aurpkg.config import Settings
from aurpkg.errors import AurpkgError, NothingToDoError
from aurpkg.info import fetch_package_info
from aurpkg.pipeline import AcquisitionPipeline
from aurpkg.ranker import rank_search_results
from aurpkg.render import (
    make_console,
    print_package_info,
    print_search_results,
    print_selection_prompt,
    print_separator,
)
from aurpkg.selection import read_selection, select_packages
from aurpkg.transport import Transport
from aurpkg.urls import search_url

logger = logging.getLogger("aurpkg")

EPILOG = """\
Selection:
  After a search, type the numbers of the packages to build, separated by
  spaces (eg: 1 2 3). A tab ends the selection early.

Shorthand:
  -sc QUERY         same as -c -s QUERY
  -ic NAME...       same as -c -i NAME...

Environment:
  AURPKG_BASE_URL   AUR base URL (default https://aur.archlinux.org)
  AURPKG_TIMEOUT    per-request timeout in seconds (default 25)
"""


def build_parser() -> argparse.ArgumentParser:
    ag = argparse.ArgumentParser(
        prog="aurpkg",
        description="aurpkg - A small and lightweight AUR helper",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ag.add_argument("-s", "--search", metavar="QUERY",
                    help="search for a package in the AUR repository")
    ag.add_argument("-i", "--info", metavar="NAME", nargs="+",
                    help="retrieve information about one or more packages")
    ag.add_argument("-g", "--get", metavar="URL",
                    help="download anything from a specified URL")
    ag.add_argument("-c", "--colors", action="store_true", help="enable colored output")
    ag.add_argument("-v", "--verbose", action="count", default=0,
                    help="log more (-v info, -vv debug)")
    ag.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ag


def configure_logging(verbosity: int, colors: bool) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handler = RichHandler(console=make_console(colors, stderr=True),
                          show_path=False, show_time=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


# ──────────────────────────────────────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────────────────────────────────────
def run_search(query: str, settings: Settings, transport: Transport, console: Console,
               stdin: TextIO) -> list[int]:
    summaries = rank_search_results(transport.get_json(search_url(query, settings.base_url)))
    print_search_results(console, summaries)
    print_selection_prompt(console)

    line = read_selection(stdin, settings.input_capacity)
    pipeline = AcquisitionPipeline(settings, transport, console)
    return select_packages(line, summaries, pipeline)


def run_info(names: Sequence[str], settings: Settings, transport: Transport,
             console: Console) -> None:
    for i, name in enumerate(names):
        print_package_info(console, fetch_package_info(name, transport, settings))
        if i != len(names) - 1:
            print_separator(console)


def download_name(url: str) -> str:
    name = Path(unquote(urlparse(url).path)).name
    return name or "index.html"


def run_get(url: str, transport: Transport, console: Console,
            workdir: Optional[Path] = None) -> Path:
    name = download_name(url)
    console.print(f"[blue]::[/] [bold white]Downloading {escape(name)}...[/]")
    return transport.download(url, (Path.cwd() if workdir is None else workdir) / name)


# ──────────────────────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────────────────────
# -sc QUERY / -ic NAME... are "search/info with colours"
SHORTHANDS = {"-sc": ["-c", "-s"], "-ic": ["-c", "-i"]}


def expand_shorthand(argv: list[str]) -> list[str]:
    if argv and argv[0] in SHORTHANDS:
        return SHORTHANDS[argv[0]] + argv[1:]
    return argv


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = expand_shorthand(list(sys.argv[1:] if argv is None else argv))
    ag = build_parser()
    if not argv:
        ag.print_usage(sys.stderr)
        return 1
    args = ag.parse_args(argv)
    if not (args.search or args.info or args.get):
        ag.print_usage(sys.stderr)
        return 1

    configure_logging(args.verbose, args.colors)
    console = make_console(args.colors)
    err_console = make_console(args.colors, stderr=True)

    try:
        settings = Settings.from_env()
        transport = Transport(settings)
        if args.search:
            run_search(args.search, settings, transport, console, sys.stdin)
        if args.info:
            run_info(args.info, settings, transport, console)
        if args.get:
            run_get(args.get, transport, console)
    except NothingToDoError as exc:
        err_console.print(f" {escape(str(exc))}")
        return exc.exit_code
    except AurpkgError as exc:
        logger.debug("fatal", exc_info=True)
        err_console.print(f"[bold red]error:[/] {escape(str(exc))}")
        return exc.exit_code
    except KeyboardInterrupt:
        err_console.print("Interrupted.")
        return 130
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
