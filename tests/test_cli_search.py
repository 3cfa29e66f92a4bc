"""Tests for argument parsing and the search command."""

import io
from unittest.mock import MagicMock

import pytest

from args import Command, parse_args
from cli_config import Settings
from cli_search import format_table, run_search
from registry.forge import SearchResult


class TestArgParsing:
    """Tests for forgerpm CLI argument parsing."""

    def test_search(self):
        """Test search subcommand parsing."""
        ns = parse_args(["search", "apache"])
        assert Command(ns.action) is Command.SEARCH
        assert ns.TERM == "apache"

    def test_create_with_version(self):
        """Test create subcommand with a pinned version."""
        ns = parse_args(["create", "puppetlabs/apache", "1.0.0"])
        assert Command(ns.action) is Command.CREATE
        assert ns.MODULE == "puppetlabs/apache"
        assert ns.VERSION == "1.0.0"
        assert ns.BUILD_MODE is None

    def test_create_without_version(self):
        """Test the version argument is optional."""
        ns = parse_args(["create", "puppetlabs/apache"])
        assert ns.VERSION is None

    def test_build_mode(self):
        """Test the -b flag accepts rpm+srpm."""
        ns = parse_args(["create", "-b", "rpm+srpm", "puppetlabs/apache"])
        assert ns.BUILD_MODE == "rpm+srpm"

    def test_invalid_build_mode(self):
        """Test an unknown build mode is a usage error."""
        with pytest.raises(SystemExit):
            parse_args(["create", "-b", "deb", "puppetlabs/apache"])

    def test_global_flags(self):
        """Test global flags before the subcommand."""
        ns = parse_args([
            "--forge-url", "http://mirror",
            "--workspace", "/srv/rpm",
            "--loglevel", "debug",
            "--timeout", "5",
            "search", "ntp",
        ])
        assert ns.FORGE_URL == "http://mirror"
        assert ns.WORKSPACE == "/srv/rpm"
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.TIMEOUT == 5.0

    def test_command_required(self):
        """Test a subcommand is required."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestFormatTable:
    """Test search table layout."""

    def test_left_aligned_columns(self):
        """Test names are padded to the widest entry."""
        lines = format_table([
            SearchResult("puppetlabs/apache", "Apache module"),
            SearchResult("a/b", ""),
        ])
        assert lines == [
            "NAME               DESCRIPTION",
            "puppetlabs/apache  Apache module",
            "a/b",
        ]

    def test_header_width_minimum(self):
        """Test the NAME header sets the minimum column width."""
        lines = format_table([SearchResult("x", "y")])
        assert lines == ["NAME  DESCRIPTION", "x     y"]


class TestRunSearch:
    """Test run_search()."""

    def test_prints_results(self):
        """Test results are printed as a table."""
        client = MagicMock()
        client.search.return_value = [SearchResult("puppetlabs/ntp", "NTP")]
        out = io.StringIO()

        count = run_search(Settings(), "ntp", client=client, out=out)

        assert count == 1
        client.search.assert_called_once_with("ntp")
        assert out.getvalue().splitlines() == ["NAME            DESCRIPTION", "puppetlabs/ntp  NTP"]

    def test_no_results(self):
        """Test nothing is printed when no module matches."""
        client = MagicMock()
        client.search.return_value = []
        out = io.StringIO()
        assert run_search(Settings(), "zzz", client=client, out=out) == 0
        assert out.getvalue() == ""
