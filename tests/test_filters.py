"""Tests for release_notes.filters."""

import dataclasses
import re

import pytest

from release_notes.errors import ValidationError
from release_notes.filters import FilterSpec, VersionKind, VersionSelector, split_list, version_selector_from


class TestVersionSelector:
    def test_none(self):
        assert version_selector_from(None).is_none

    def test_empty_string_is_none(self):
        assert version_selector_from("").kind == VersionKind.NONE

    def test_exact(self):
        selector = version_selector_from("1.0")
        assert selector.is_exact
        assert selector.name == "1.0"
        assert str(selector) == "1.0"

    def test_pattern(self):
        selector = version_selector_from(re.compile(r"^1\."))
        assert selector.is_pattern
        assert str(selector) == "/^1\\./"

    def test_pattern_from_string(self):
        assert VersionSelector.pattern("^2").regex.search("2.0")

    @pytest.mark.parametrize("value", [1, 1.5, ["1.0"], object()])
    def test_rejects_other_types(self, value):
        with pytest.raises(ValidationError) as excinfo:
            version_selector_from(value)
        assert "must be a String or Regexp" in excinfo.value.message


class TestFilterSpec:
    def test_defaults(self):
        spec = FilterSpec.create("ABC")
        assert spec.version.is_none
        assert spec.status == ()
        assert spec.components == ()
        assert spec.max_results == 50
        assert not spec.in_last_unreleased
        assert not spec.in_open_sprint

    @pytest.mark.parametrize("project", [None, "", "   "])
    def test_project_required(self, project):
        with pytest.raises(ValidationError, match="No Jira project name"):
            FilterSpec.create(project)

    def test_max_results_from_string(self):
        assert FilterSpec.create("ABC", max_results="20").max_results == 20

    @pytest.mark.parametrize("value", ["abc", 0, -3, None])
    def test_invalid_max_results(self, value):
        with pytest.raises(ValidationError):
            FilterSpec.create("ABC", max_results=value)

    def test_is_immutable(self):
        spec = FilterSpec.create("ABC")
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.project = "XYZ"


def test_split_list():
    assert split_list(" UI, API ,,") == ("UI", "API")
    assert split_list(["UI", " ", "API"]) == ("UI", "API")
    assert split_list(None) == ()
