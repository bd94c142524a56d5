"""Package records built from AUR RPC responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from aurpkg.errors import MalformedResponseError

NO_DESCRIPTION = "no description was specified"
UNKNOWN_VERSION = "unknown"
NONE = "none"


def required_name(raw: dict) -> str:
    name = raw.get("Name")
    if not isinstance(name, str) or not name:
        raise MalformedResponseError("package record without a 'Name' field")
    return name


def text_field(raw: dict, key: str, default: Optional[str] = None) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else default


def int_field(raw: dict, key: str) -> int:
    value = raw.get(key)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def float_field(raw: dict, key: str) -> float:
    value = raw.get(key)
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class PackageSummary:
    """One search result."""
    name: str
    description: str = NO_DESCRIPTION
    version: str = UNKNOWN_VERSION
    votes: int = 0
    popularity: float = 0.0
    out_of_date: int = 0
    maintainer: Optional[str] = None
    url_path: Optional[str] = None
    package_base: Optional[str] = None

    @property
    def orphaned(self) -> bool:
        return self.maintainer is None

    @property
    def flagged_out_of_date(self) -> bool:
        return self.out_of_date > 0

    @classmethod
    def from_record(cls, raw: dict) -> "PackageSummary":
        return cls(
            name=required_name(raw),
            description=text_field(raw, "Description", NO_DESCRIPTION),
            version=text_field(raw, "Version", UNKNOWN_VERSION),
            votes=max(int_field(raw, "NumVotes"), 0),
            popularity=float_field(raw, "Popularity"),
            out_of_date=int_field(raw, "OutOfDate"),
            maintainer=text_field(raw, "Maintainer"),
            url_path=text_field(raw, "URLPath"),
            package_base=text_field(raw, "PackageBase"),
        )


@dataclass(frozen=True)
class PackageInfo:
    """Detailed view of a single package; list fields are pre-joined strings."""
    name: str
    description: str = NO_DESCRIPTION
    url: str = NONE
    version: str = UNKNOWN_VERSION
    out_of_date: int = 0
    votes: int = 0
    first_submitted: int = 0
    last_modified: int = 0
    popularity: float = 0.0
    depends: str = NONE
    licenses: str = NONE
    keywords: str = NONE
    opt_depends: str = NONE

    @property
    def flagged_out_of_date(self) -> bool:
        return self.out_of_date > 0
