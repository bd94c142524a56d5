"""Detailed information for a single package (``rpc/v5/info``)."""

from __future__ import annotations

import io
import logging

from aurpkg.config import Settings
from aurpkg.errors import MalformedResponseError, PackageNotFoundError
from aurpkg.models import (
    NO_DESCRIPTION,
    NONE,
    UNKNOWN_VERSION,
    PackageInfo,
    float_field,
    int_field,
    required_name,
    text_field,
)
from aurpkg.transport import Transport
from aurpkg.urls import info_url

logger = logging.getLogger(__name__)

LIST_FIELDS = {
    "depends": "Depends",
    "licenses": "License",
    "keywords": "Keywords",
    "opt_depends": "OptDepends",
}


def join_field(values) -> str:
    """Every element followed by a single space, or ``"none"`` for an empty list."""
    if not values:
        return NONE
    buf = io.StringIO()
    for value in values:
        buf.write(str(value))
        buf.write(" ")
    return buf.getvalue()


def parse_package_info(doc: dict, name: str) -> PackageInfo:
    results = doc.get("results")
    if not isinstance(results, list):
        raise MalformedResponseError("info response without a 'results' array")
    if not results:
        raise PackageNotFoundError(f"no package was found called '{name}'.")

    raw = results[0]
    if not isinstance(raw, dict):
        raise MalformedResponseError("info result is not a JSON object")

    lists = {}
    for attr, key in LIST_FIELDS.items():
        values = raw.get(key) or []
        if not isinstance(values, list):
            raise MalformedResponseError(f"'{key}' is not an array")
        lists[attr] = join_field(values)

    return PackageInfo(
        name=required_name(raw),
        description=text_field(raw, "Description", NO_DESCRIPTION),
        url=text_field(raw, "URL", NONE),
        version=text_field(raw, "Version", UNKNOWN_VERSION),
        out_of_date=int_field(raw, "OutOfDate"),
        votes=int_field(raw, "NumVotes"),
        first_submitted=int_field(raw, "FirstSubmitted"),
        last_modified=int_field(raw, "LastModified"),
        popularity=float_field(raw, "Popularity"),
        **lists,
    )


def fetch_package_info(name: str, transport: Transport, settings: Settings) -> PackageInfo:
    url = info_url(name, settings.base_url)
    logger.debug("querying info for %s", name)
    return parse_package_info(transport.get_json(url), name)
