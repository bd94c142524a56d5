"""
Interactive package selection.

The selection line is consumed in a single pass and every confirmed number is
handed to the acquisition callback straight away, before the next number is
read. Rules, left to right:

  - spaces separate numbers and are skipped;
  - a tab at the scan position ends the selection;
  - a number is the longest run of digits; anything else counts as 0;
  - 0 is noise when there is more than one result and is stepped over;
  - until something has been confirmed, an out-of-range number (or one whose
    package has no download path) aborts with "nothing to do";
  - after that, invalid numbers are ignored;
  - trailing characters glued to a number are skipped up to the next space.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Sequence, TextIO

from aurpkg.config import INPUT_CAPACITY
from aurpkg.errors import NothingToDoError
from aurpkg.models import PackageSummary

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_REST_OF_TOKEN = re.compile(r"[^ \t]*")

Acquire = Callable[[int, PackageSummary], None]


def read_selection(stream: TextIO, capacity: int = INPUT_CAPACITY) -> str:
    """Read one line of at most *capacity* characters; the excess is dropped."""
    line = stream.readline(capacity)
    return line.rstrip("\r\n")


def _resolvable(index: int, summaries: Sequence[PackageSummary]) -> bool:
    return 1 <= index <= len(summaries) and summaries[index - 1].url_path is not None


def select_packages(line: str, summaries: Sequence[PackageSummary],
                    acquire: Acquire) -> list[int]:
    """
    Parse *line* against *summaries* and call ``acquire(ordinal, summary)``
    for each confirmed 1-based index, in input order.

    Returns the confirmed indices. Raises ``NothingToDoError`` when the first
    meaningful number is invalid or when nothing was selected at all.
    """
    count = len(summaries)
    selected: list[int] = []
    pos = 0

    while pos < len(line):
        ch = line[pos]
        if ch == " ":
            pos += 1
            continue
        if ch == "\t":
            logger.debug("tab at column %d, selection stops", pos)
            break

        m = _DIGITS.match(line, pos)
        value = int(m.group()) if m else 0
        if value == 0 and count > 1:
            pos += 1
            continue

        if _resolvable(value, summaries):
            selected.append(value)
            acquire(len(selected), summaries[value - 1])
        elif not selected:
            raise NothingToDoError()
        else:
            logger.info("ignoring selection %d (valid range 1-%d)", value, count)

        pos = _REST_OF_TOKEN.match(line, m.end() if m else pos).end()

    if not selected:
        raise NothingToDoError()
    return selected
