"""Tests for single-package info aggregation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from aurpkg.config import Settings
from aurpkg.errors import MalformedResponseError, PackageNotFoundError
from aurpkg.info import fetch_package_info, join_field, parse_package_info


class TestJoinField:
    def test_empty_is_none(self):
        assert join_field([]) == "none"

    def test_missing_is_none(self):
        assert join_field(None) == "none"

    def test_space_joined_with_trailing_space(self):
        assert join_field(["foo", "bar"]) == "foo bar "

    def test_content_and_order(self):
        assert join_field(["foo", "bar"]).split() == ["foo", "bar"]

    def test_single(self):
        assert join_field(["MIT"]) == "MIT "


class TestParsePackageInfo:
    def test_scalar_fields(self, info_doc):
        info = parse_package_info(info_doc, "yay")
        assert info.name == "yay"
        assert info.url == "https://github.com/Jguer/yay"
        assert info.version == "12.3.5-1"
        assert info.votes == 2000
        assert info.first_submitted == 1475688004
        assert info.popularity == pytest.approx(12.3456)
        assert not info.flagged_out_of_date

    def test_list_fields(self, info_doc):
        info = parse_package_info(info_doc, "yay")
        assert info.depends == "pacman>5 git "
        assert info.licenses == "GPL-3.0-or-later "
        assert info.keywords == "none"
        # OptDepends absent altogether
        assert info.opt_depends == "none"

    def test_missing_url_defaults_to_none(self, info_doc):
        del info_doc["results"][0]["URL"]
        assert parse_package_info(info_doc, "yay").url == "none"

    def test_null_url_defaults_to_none(self, info_doc):
        info_doc["results"][0]["URL"] = None
        assert parse_package_info(info_doc, "yay").url == "none"

    def test_empty_results_is_not_found(self):
        with pytest.raises(PackageNotFoundError, match="no package was found called 'ghost'"):
            parse_package_info({"resultcount": 0, "results": []}, "ghost")

    def test_missing_name_is_malformed(self, info_doc):
        del info_doc["results"][0]["Name"]
        with pytest.raises(MalformedResponseError):
            parse_package_info(info_doc, "yay")

    def test_non_array_list_field(self, info_doc):
        info_doc["results"][0]["Depends"] = "git"
        with pytest.raises(MalformedResponseError):
            parse_package_info(info_doc, "yay")


class TestFetchPackageInfo:
    def test_requests_info_endpoint(self, info_doc):
        transport = MagicMock()
        transport.get_json.return_value = info_doc
        settings = Settings(base_url="https://aur.example.org")
        info = fetch_package_info("yay", transport, settings)
        transport.get_json.assert_called_once_with("https://aur.example.org/rpc/v5/info?arg[]=yay")
        assert info.name == "yay"
