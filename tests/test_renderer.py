"""Tests for release notes classification and rendering."""

from datetime import date

import pytest

from models.data_models import ReleaseItem
from release_notes.renderer import (
    NO_CHANGES_LINE,
    classify_issues,
    format_release_date,
    is_prerelease,
    render_release_notes,
)
from tests.conftest import make_issue, make_pr

TODAY = date(2025, 1, 20)


def _issue(number, title, labels=(), closed_by=None):
    return ReleaseItem.from_api(make_issue(number, title, labels=labels, closed_by=closed_by))


def _pr(number, title, user="alice"):
    return ReleaseItem.from_api(make_pr(number, title, user=user))


class TestClassifyIssues:
    
    def test_label_buckets(self):
        issues = [
            _issue(1, "Crash on start", ["bug"]),
            _issue(2, "Dark mode", ["Feature"]),
            _issue(3, "Faster search", ["type: enhancement"]),
            _issue(4, "Update docs", ["docs"]),
            _issue(5, "No labels"),
        ]
        
        changes = classify_issues(issues, [])
        
        assert [i.number for i in changes.bug_fixes] == [1]
        assert [i.number for i in changes.features] == [2, 3]
        assert [i.number for i in changes.other] == [4, 5]
    
    def test_bug_label_takes_precedence_over_feature(self):
        changes = classify_issues([_issue(1, "Both", ["feature", "bug"])], [])
        
        assert [i.number for i in changes.bug_fixes] == [1]
        assert changes.features == []
        assert changes.other == []
    
    def test_case_insensitive_substring_match(self):
        changes = classify_issues([_issue(1, "Regression", ["Type: BUGFIX"])], [])
        assert len(changes.bug_fixes) == 1
    
    def test_every_issue_in_exactly_one_bucket(self):
        label_sets = [(), ("bug",), ("feature",), ("enhancement",), ("bug", "feature"), ("question",)]
        issues = [_issue(n, f"Issue {n}", labels) for n, labels in enumerate(label_sets, 1)]
        
        changes = classify_issues(issues, [])
        buckets = changes.features + changes.bug_fixes + changes.other
        
        assert sorted(i.number for i in buckets) == [i.number for i in issues]
    
    def test_contributors_deduplicated_in_order(self):
        prs = [_pr(10, "A", "alice"), _pr(11, "B", "bob"), _pr(12, "C", "alice")]
        issues = [_issue(1, "X", closed_by="carol"), _issue(2, "Y", closed_by="bob"), _issue(3, "Z")]
        
        changes = classify_issues(issues, prs)
        
        assert changes.contributors == ["alice", "bob", "carol"]


class TestRenderReleaseNotes:
    
    def test_end_to_end_scenario(self):
        body = render_release_notes(
            [_issue(1, "Fix crash", ["bug"])],
            [_pr(2, "Add widget", "alice")],
            "v1.2.0",
            today=TODAY,
        )
        
        assert "### 🐛 Bug Fixes\n\n- Fix crash (#1)\n" in body
        assert "### 🔀 Merged Pull Requests\n\n- Add widget (#2) by @alice\n" in body
        assert "### 👥 Contributors\n\nThank you to all contributors: @alice\n" in body
        assert "New Features" not in body
        assert "Other Changes" not in body
    
    def test_full_layout(self):
        body = render_release_notes(
            [
                _issue(1, "Crash", ["bug"], closed_by="bob"),
                _issue(2, "Dark mode", ["feature"]),
                _issue(3, "Docs", ["docs"]),
            ],
            [_pr(4, "Add widget", "alice")],
            "v1.2.0",
            previous_tag="v1.1.0",
            today=TODAY,
        )
        
        assert body == (
            "# Release v1.2.0\n\n"
            "Released on 1/20/2025\n\n"
            "## Changes since v1.1.0\n\n"
            "### ✨ New Features\n\n- Dark mode (#2)\n\n"
            "### 🐛 Bug Fixes\n\n- Crash (#1)\n\n"
            "### 🔀 Merged Pull Requests\n\n- Add widget (#4) by @alice\n\n"
            "### 📋 Other Changes\n\n- Docs (#3)\n\n"
            "### 👥 Contributors\n\nThank you to all contributors: @alice, @bob\n\n"
        )
    
    def test_empty_release(self):
        body = render_release_notes([], [], "v1.2.0", today=TODAY)
        
        assert body == (
            "# Release v1.2.0\n\n"
            "Released on 1/20/2025\n\n"
            f"{NO_CHANGES_LINE}\n\n"
        )
        assert "###" not in body
    
    def test_no_changes_line_absent_when_items_exist(self):
        body = render_release_notes([_issue(1, "Docs")], [], "v1.2.0", today=TODAY)
        assert NO_CHANGES_LINE not in body
    
    def test_rendering_is_deterministic(self):
        issues = [_issue(1, "Crash", ["bug"]), _issue(2, "Docs")]
        prs = [_pr(3, "Add widget")]
        
        first = render_release_notes(issues, prs, "v1.2.0", previous_tag="v1.1.0", today=TODAY)
        second = render_release_notes(issues, prs, "v1.2.0", previous_tag="v1.1.0", today=TODAY)
        
        assert first == second
    
    def test_pr_without_author_attributed_to_ghost(self):
        pr = ReleaseItem(number=7, title="Orphan", merged_at="2025-01-15T10:30:00Z")
        body = render_release_notes([], [pr], "v1.2.0", today=TODAY)
        assert "- Orphan (#7) by @ghost\n" in body
        assert "Contributors" not in body


def test_format_release_date_not_zero_padded():
    assert format_release_date(date(2026, 3, 5)) == "3/5/2026"


@pytest.mark.parametrize("tag, expected", [
    ("v2.0.0-rc1", True),
    ("v2.0.0-beta.2", True),
    ("v1.0.0-alpha", True),
    ("v2.0.0", False),
    ("v2.0.0-RC1", False),
])
def test_is_prerelease(tag, expected):
    assert is_prerelease(tag) is expected
