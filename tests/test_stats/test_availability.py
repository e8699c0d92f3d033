"""Tests for available issue selection."""

from buddy_exchange.stats.availability import (
    excerpt,
    filter_available_issues,
    filter_unassigned_issues,
    is_available,
)

NEEDS = "needs codechecker"
BUDDY = "buddy exchange"


class TestIsAvailable:
    """Test the per-issue availability decision."""

    def test_needs_codechecker_with_two_assignees_is_included(
        self, issue_factory
    ) -> None:
        """Issues asking for a codechecker stay listed even when assigned."""
        issue = issue_factory(1, assignees=["alice", "bob"], labels=[NEEDS])
        assert is_available(issue, NEEDS)

    def test_assigned_without_needs_codechecker_is_excluded(
        self, issue_factory
    ) -> None:
        """Assigned issues without the label are taken."""
        issue = issue_factory(2, assignees=["alice"], labels=["other"])
        assert not is_available(issue, NEEDS)

    def test_unlabeled_unassigned_is_included(self, issue_factory) -> None:
        """Unassigned issues are available regardless of labels."""
        issue = issue_factory(3)
        assert is_available(issue, NEEDS)

    def test_legacy_assignee_counts_as_assigned(self, issue_factory) -> None:
        """The singular assignee field alone marks an issue as taken."""
        issue = issue_factory(4, assignee="alice")
        assert not is_available(issue, NEEDS)

    def test_label_match_ignores_case(self, issue_factory) -> None:
        """Label names compare case-insensitively."""
        issue = issue_factory(5, assignees=["alice"], labels=["Needs CodeChecker"])
        assert is_available(issue, NEEDS)

    def test_required_label_rejects_missing_label(self, issue_factory) -> None:
        """When a required label is given, issues without it are rejected."""
        issue = issue_factory(6, labels=[NEEDS])
        assert not is_available(issue, NEEDS, required_label=BUDDY)

    def test_required_label_accepts_present_label(self, issue_factory) -> None:
        """Issues carrying the required label go through the usual rules."""
        issue = issue_factory(7, labels=[BUDDY.upper()])
        assert is_available(issue, NEEDS, required_label=BUDDY)


class TestFilterAvailableIssues:
    """Test filtering of issue sequences."""

    def test_preserves_order(self, issue_factory) -> None:
        """Output keeps the newest-first order of the input."""
        issues = [
            issue_factory(30),
            issue_factory(20, assignees=["alice"]),
            issue_factory(10, labels=[NEEDS], assignees=["bob"]),
            issue_factory(5),
        ]

        result = filter_available_issues(issues, NEEDS)

        assert [issue.number for issue in result] == [30, 10, 5]

    def test_empty_input(self) -> None:
        """No issues gives no available issues."""
        assert filter_available_issues([], NEEDS) == []

    def test_filter_unassigned_ignores_labels(self, issue_factory) -> None:
        """The unassigned filter drops every assigned issue."""
        issues = [
            issue_factory(1, labels=[NEEDS], assignees=["alice"]),
            issue_factory(2),
        ]

        result = filter_unassigned_issues(issues)

        assert [issue.number for issue in result] == [2]


class TestExcerpt:
    """Test body excerpts."""

    def test_short_text_unchanged(self) -> None:
        assert excerpt("short body", 50) == "short body"

    def test_long_text_truncated(self) -> None:
        assert excerpt("word " * 20, 12) == "word word wo..."

    def test_missing_body(self) -> None:
        assert excerpt(None, 50) == ""
