"""Shared fixtures for release notes tests."""

from types import SimpleNamespace

import pytest


def make_issue(key, summary):
    """Issue shaped like a jira Issue resource."""
    return SimpleNamespace(key=key, fields=SimpleNamespace(summary=summary),
                           raw={"key": key, "fields": {"summary": summary}})


def make_version(name):
    return SimpleNamespace(name=name)


class FakeFetcher:
    """In-memory stand-in for JiraIssueFetcher."""

    def __init__(self, issues=None, versions=None):
        self.issues = list(issues or [])
        self.versions = list(versions or [])
        self.queries = []
        self.version_lookups = []

    def fetch(self, jql, max_results):
        self.queries.append((jql, max_results))
        return self.issues[:max_results]

    def project_versions(self, project_key):
        self.version_lookups.append(project_key)
        return self.versions


@pytest.fixture
def fake_fetcher():
    return FakeFetcher(
        issues=[make_issue("ABC-1", "Fix bug"), make_issue("ABC-2", "Add feature")],
        versions=[make_version("1.0"), make_version("1.1"), make_version("2.0")],
    )
