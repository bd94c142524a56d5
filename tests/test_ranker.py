"""Tests for turning search responses into ranked summaries."""

from __future__ import annotations

import pytest

from aurpkg.errors import MalformedResponseError, NoResultsError
from aurpkg.models import NO_DESCRIPTION, UNKNOWN_VERSION
from aurpkg.ranker import rank_search_results


class TestRanking:
    def test_produces_exactly_resultcount_summaries(self, search_doc):
        assert len(rank_search_results(search_doc)) == 4

    def test_votes_are_non_increasing(self, search_doc):
        votes = [s.votes for s in rank_search_results(search_doc)]
        assert votes == sorted(votes, reverse=True)
        assert votes == [120, 45, 3, 0]

    def test_order_follows_votes(self, search_doc):
        names = [s.name for s in rank_search_results(search_doc)]
        assert names == ["bravo", "delta", "alpha", "charlie"]

    def test_only_reported_count_is_used(self, search_doc):
        search_doc["resultcount"] = 2
        names = {s.name for s in rank_search_results(search_doc)}
        assert names == {"alpha", "bravo"}

    def test_input_document_is_not_reordered(self, search_doc):
        before = [r["Name"] for r in search_doc["results"]]
        rank_search_results(search_doc)
        assert [r["Name"] for r in search_doc["results"]] == before


class TestNoResults:
    def test_zero_count(self):
        with pytest.raises(NoResultsError, match="no package results"):
            rank_search_results({"resultcount": 0, "results": []})

    def test_missing_count(self):
        with pytest.raises(NoResultsError):
            rank_search_results({"results": []})


class TestMalformed:
    def test_missing_name_is_fatal(self, search_doc):
        del search_doc["results"][1]["Name"]
        with pytest.raises(MalformedResponseError):
            rank_search_results(search_doc)

    def test_fewer_records_than_reported(self, search_doc):
        search_doc["resultcount"] = 10
        with pytest.raises(MalformedResponseError):
            rank_search_results(search_doc)

    def test_optional_fields_get_placeholders(self):
        doc = {"resultcount": 1, "results": [{"Name": "bare"}]}
        (pkg,) = rank_search_results(doc)
        assert pkg.description == NO_DESCRIPTION
        assert pkg.version == UNKNOWN_VERSION
        assert pkg.votes == 0
        assert pkg.orphaned
        assert pkg.url_path is None
        assert not pkg.flagged_out_of_date
