"""Turn an RPC search response into summaries ranked by votes."""

from __future__ import annotations

import logging

from aurpkg.errors import MalformedResponseError, NoResultsError
from aurpkg.models import PackageSummary, int_field

logger = logging.getLogger(__name__)


def rank_search_results(doc: dict) -> list[PackageSummary]:
    """
    Materialize exactly ``resultcount`` summaries, most voted first.

    Raw records are ordered through an index list so the decoded response is
    never reshuffled; the relative order of equal-vote entries is not part of
    the contract.
    """
    try:
        count = int(doc.get("resultcount") or 0)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError("invalid 'resultcount' in search response") from exc
    if count <= 0:
        raise NoResultsError("no package results were found.")

    results = doc.get("results")
    if not isinstance(results, list) or len(results) < count:
        raise MalformedResponseError(
            f"search response reports {count} results but carries "
            f"{len(results) if isinstance(results, list) else 0}")

    raw = results[:count]
    for item in raw:
        if not isinstance(item, dict):
            raise MalformedResponseError("search result is not a JSON object")

    order = sorted(range(count), key=lambda i: int_field(raw[i], "NumVotes"), reverse=True)
    ranked = [PackageSummary.from_record(raw[i]) for i in order]
    logger.debug("ranked %d search results", len(ranked))
    return ranked
