"""Tests for release_notes.formatter."""

from types import SimpleNamespace

import pytest

from release_notes.formatter import (
    OutputFormat,
    format_issues,
    html_format,
    issue_key,
    issue_summary,
    issue_url,
    plain_format,
)
from tests.conftest import make_issue


class TestOutputFormat:
    @pytest.mark.parametrize("value,expected", [
        ("plain", OutputFormat.PLAIN),
        ("PLAIN", OutputFormat.PLAIN),
        ("html", OutputFormat.HTML),
        ("none", OutputFormat.RAW),
        ("", OutputFormat.RAW),
        (None, OutputFormat.RAW),
    ])
    def test_parse(self, value, expected):
        assert OutputFormat.parse(value) == expected


class TestIssueFields:
    def test_resource(self):
        issue = make_issue("ABC-1", "Fix bug")
        assert issue_key(issue) == "ABC-1"
        assert issue_summary(issue) == "Fix bug"

    def test_rest_dict(self):
        issue = {"key": "ABC-1", "fields": {"summary": "Fix bug"}}
        assert issue_summary(issue) == "Fix bug"

    def test_flat_dict_with_title(self):
        assert issue_summary({"key": "ABC-1", "title": "Fix bug"}) == "Fix bug"

    def test_missing_fields(self):
        assert issue_key({}) == ""
        assert issue_summary(SimpleNamespace(key="ABC-1", fields=None)) == ""

    def test_issue_url_strips_trailing_slash(self):
        assert issue_url("https://jira.example.com/", "ABC-1") == "https://jira.example.com/browse/ABC-1"


class TestPlain:
    def test_empty(self):
        assert plain_format([]) == ""
        assert format_issues([], "plain") == ""

    def test_single(self):
        assert format_issues([{"key": "ABC-1", "title": "Fix bug"}], "plain") == "- Fix bug (ABC-1)"

    def test_keeps_order(self):
        issues = [make_issue("ABC-2", "Second"), make_issue("ABC-1", "First")]
        assert plain_format(issues) == "- Second (ABC-2)\n- First (ABC-1)"

    def test_missing_summary(self):
        assert plain_format([{"key": "ABC-1"}]) == "-  (ABC-1)"


class TestHtml:
    def test_links_to_browse_url(self):
        result = format_issues([make_issue("ABC-1", "Fix bug")], "html", "https://jira.example.com")
        assert result == '<ul><li><a href="https://jira.example.com/browse/ABC-1">Fix bug</a></li></ul>'

    def test_escapes_summary(self):
        result = html_format([make_issue("ABC-1", "<script>alert('x')</script> & </li>")], "https://j")
        assert "<script>" not in result
        assert "&lt;script&gt;" in result
        assert "&amp;" in result
        assert result.count("<li>") == 1
        assert result.count("</li>") == 1
        assert result.startswith("<ul>") and result.endswith("</ul>")

    def test_empty(self):
        assert html_format([], "https://j") == "<ul></ul>"


def test_raw_returns_issues_unchanged():
    issues = [make_issue("ABC-1", "Fix bug")]
    assert format_issues(issues, "json") is issues
