"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for extension key checks.
"""

import pytest

from oasmodel.paths import Paths
from oasmodel.validation import ExtensionIssue, ValidationLevel, find_nonconforming_extensions


@pytest.fixture
def paths() -> Paths:
    return Paths.from_value(
        {
            "/pets": {"get": {}, "x-ok": 1, "owner": "team", "connect": {}},
            "/ref": {"$ref": "#/components/pathItems/Ref"},
            "x-top": True,
            "notes": "free text",
        }
    )


@pytest.mark.unit
class TestFindNonconformingExtensions:
    """Tests for reporting extension keys without the prefix."""

    def test_reports_in_document_order(self, paths):
        """Test that issues list the paths object first, then each path item."""
        issues = find_nonconforming_extensions(paths)

        assert [(issue.location, issue.key) for issue in issues] == [
            ("paths", "notes"),
            ("paths./pets", "owner"),
            ("paths./pets", "connect"),
        ]
        assert all(issue.level == ValidationLevel.WARNING for issue in issues)

    def test_custom_prefix_and_level(self, paths):
        """Test that the prefix and severity can be chosen by the caller."""
        issues = find_nonconforming_extensions(paths, prefix="no", level=ValidationLevel.ERROR)

        assert [issue.key for issue in issues] == ["x-top", "x-ok", "owner", "connect"]
        assert issues[0].level == ValidationLevel.ERROR

    def test_conforming_document(self):
        """Test that a document using only x- keys has no issues."""
        paths = Paths.from_value({"/a": {"x-a": 1}, "x-b": 2})

        assert find_nonconforming_extensions(paths) == []

    def test_issue_to_dict(self):
        """Test converting an issue to a dictionary."""
        issue = ExtensionIssue(location="paths", key="notes", message="m")

        assert issue.to_dict() == {
            "location": "paths",
            "key": "notes",
            "level": "warning",
            "message": "m",
        }
