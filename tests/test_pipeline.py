"""Tests for the release_notes pipeline."""

import re
from unittest.mock import MagicMock

import pytest

from release_notes import FilterSpec, IssueFetcher, TransportError, fetch_release_issues, get_release_notes
from release_notes.fetcher import JiraIssueFetcher


def test_plain_notes(fake_fetcher):
    spec = FilterSpec.create("ABC", version="1.0")
    notes = get_release_notes(spec, fake_fetcher)
    assert notes == "- Fix bug (ABC-1)\n- Add feature (ABC-2)"
    assert fake_fetcher.queries == [("PROJECT = 'ABC' AND fixVersion = '1.0'", 50)]
    assert fake_fetcher.version_lookups == []


def test_html_notes(fake_fetcher):
    notes = get_release_notes(FilterSpec.create("ABC"), fake_fetcher, "html", "https://jira.example.com")
    assert '<a href="https://jira.example.com/browse/ABC-2">Add feature</a>' in notes


def test_raw_notes(fake_fetcher):
    notes = get_release_notes(FilterSpec.create("ABC"), fake_fetcher, "raw")
    assert notes == fake_fetcher.issues


def test_max_results_passed_to_fetch(fake_fetcher):
    jql, issues = fetch_release_issues(FilterSpec.create("ABC", max_results=1), fake_fetcher)
    assert jql == "PROJECT = 'ABC'"
    assert len(issues) == 1
    assert fake_fetcher.queries == [("PROJECT = 'ABC'", 1)]


def test_pattern_resolves_versions(fake_fetcher):
    jql, _ = fetch_release_issues(FilterSpec.create("ABC", version=re.compile(r"^1\.")), fake_fetcher)
    assert jql == "PROJECT = 'ABC' AND fixVersion in ('1.0', '1.1')"
    assert fake_fetcher.version_lookups == ["ABC"]


def test_transport_error_propagates(fake_fetcher):
    def fail(jql, max_results):
        raise TransportError("JiraError 404, Not Found", code=404, reason="Not Found")

    fake_fetcher.fetch = fail
    with pytest.raises(TransportError):
        get_release_notes(FilterSpec.create("ABC"), fake_fetcher)


def test_fetchers_satisfy_issue_fetcher(fake_fetcher):
    assert isinstance(fake_fetcher, IssueFetcher)
    assert isinstance(JiraIssueFetcher(MagicMock()), IssueFetcher)
    assert fetch_release_issues.__annotations__["fetcher"] is IssueFetcher
    assert get_release_notes.__annotations__["fetcher"] is IssueFetcher
