"""Classify release items and render them as markdown release notes."""

from datetime import date
from typing import Optional

from models.data_models import ClassifiedChanges, ReleaseItem

PRERELEASE_MARKERS = ("beta", "alpha", "rc")

NO_CHANGES_LINE = "No issues or pull requests were closed in this release."


def _has_label(item: ReleaseItem, *needles: str) -> bool:
    return any(
        needle in label.lower()
        for label in item.labels
        for needle in needles
    )


def classify_issues(
    issues: list[ReleaseItem],
    merged_pull_requests: list[ReleaseItem],
) -> ClassifiedChanges:
    """Group issues by label and gather contributors.
    
    Label rules are case-insensitive substring matches, checked in order:
    "bug" makes a bug fix, then "feature"/"enhancement" a feature, and
    anything else goes to other. Each issue lands in exactly one bucket.
    """
    changes = ClassifiedChanges(merged_pull_requests=list(merged_pull_requests))
    
    for issue in issues:
        if _has_label(issue, "bug"):
            changes.bug_fixes.append(issue)
        elif _has_label(issue, "feature", "enhancement"):
            changes.features.append(issue)
        else:
            changes.other.append(issue)
    
    # Ordered de-duplication: PR authors first, then issue closers
    logins = [pr.author for pr in merged_pull_requests]
    logins += [issue.closed_by for issue in issues]
    changes.contributors = list(dict.fromkeys(login for login in logins if login))
    
    return changes


def format_release_date(day: date) -> str:
    """Format as M/D/YYYY, without zero padding."""
    return f"{day.month}/{day.day}/{day.year}"


def _issue_section(heading: str, items: list[ReleaseItem]) -> str:
    lines = [f"### {heading}", ""]
    lines += [f"- {item.title} (#{item.number})" for item in items]
    return "\n".join(lines) + "\n\n"


def render_release_notes(
    issues: list[ReleaseItem],
    merged_pull_requests: list[ReleaseItem],
    tag_name: str,
    previous_tag: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """Render release notes markdown.
    
    Sections appear in a fixed order (features, bug fixes, merged pull
    requests, other changes, contributors) and are omitted when empty.
    
    Args:
        issues: Closed issues (pull requests already removed)
        merged_pull_requests: Merged pull requests
        tag_name: Release tag, used in the title
        previous_tag: Previous release tag, adds a "Changes since" heading
        today: Release date shown in the header (defaults to today)
    
    Returns:
        Markdown release body
    """
    today = today or date.today()
    changes = classify_issues(issues, merged_pull_requests)
    
    notes = f"# Release {tag_name}\n\n"
    notes += f"Released on {format_release_date(today)}\n\n"
    
    if previous_tag:
        notes += f"## Changes since {previous_tag}\n\n"
    
    if changes.features:
        notes += _issue_section("✨ New Features", changes.features)
    
    if changes.bug_fixes:
        notes += _issue_section("🐛 Bug Fixes", changes.bug_fixes)
    
    if changes.merged_pull_requests:
        notes += "### 🔀 Merged Pull Requests\n\n"
        for pr in changes.merged_pull_requests:
            notes += f"- {pr.title} (#{pr.number}) by @{pr.author or 'ghost'}\n"
        notes += "\n"
    
    if changes.other:
        notes += _issue_section("📋 Other Changes", changes.other)
    
    if not issues and not merged_pull_requests:
        notes += f"{NO_CHANGES_LINE}\n\n"
    
    if changes.contributors:
        mentions = ", ".join(f"@{login}" for login in changes.contributors)
        notes += "### 👥 Contributors\n\n"
        notes += f"Thank you to all contributors: {mentions}\n\n"
    
    return notes


def is_prerelease(tag_name: str) -> bool:
    """True if the tag contains "beta", "alpha" or "rc" (case-sensitive substring)."""
    return any(marker in tag_name for marker in PRERELEASE_MARKERS)
