"""Tests for branch and deletion models"""
from datetime import timedelta

from git_tidy.models.branch import Branch, BranchScope, FilterOptions, RepoInfo
from git_tidy.models.deletion import DeletionResult, DeletionSummary
from git_tidy.formatters.branch import format_branch_hint, format_deletion_items, format_result_line


class TestBranch:
    def test_location(self):
        assert Branch(name="a", is_local=True).location == "local"
        assert Branch(name="a", is_remote=True).location == "remote"
        assert Branch(name="a", is_local=True, is_remote=True).location == "local+remote"

    def test_commit_date_defaults_to_now(self):
        assert Branch(name="a").age_days() == 0

    def test_age_days(self, now):
        branch = Branch(name="a", last_commit_date=now - timedelta(days=12))
        assert branch.age_days(now) == 12


class TestScopeAndFilters:
    def test_scope_namespaces(self):
        assert BranchScope.LOCAL.includes_local and not BranchScope.LOCAL.includes_remote
        assert BranchScope.REMOTE.includes_remote and not BranchScope.REMOTE.includes_local
        assert BranchScope.BOTH.includes_local and BranchScope.BOTH.includes_remote

    def test_filter_defaults(self):
        filters = FilterOptions()
        assert filters.has_active_filters is False
        assert filters.stale_days == 30
        assert filters.age_days == 60

    def test_active_filters(self):
        assert FilterOptions(pattern=True, pattern_value="x/*").has_active_filters is True

    def test_repo_full_name(self):
        assert RepoInfo("acme", "widgets", "main", "main").full_name == "acme/widgets"
        assert RepoInfo("", "", "main", "main").full_name == "(local repository)"


class TestDeletionModels:
    def test_record_failure_joins_messages(self):
        result = DeletionResult(branch=Branch(name="a"))
        result.record_failure("Local", "one")
        result.record_failure("Remote", "two")
        assert result.success is False
        assert result.error == "Local: one; Remote: two"

    def test_summary_counts(self):
        ok = DeletionResult(branch=Branch(name="a"))
        bad = DeletionResult(branch=Branch(name="b"), success=False, error="Local: x")
        summary = DeletionSummary.from_results([ok, bad])
        assert (summary.total, summary.successful, summary.failed, summary.skipped) == (2, 1, 1, 0)
        assert summary.failures == [bad]


class TestBranchFormatting:
    def test_hint(self, now):
        branch = Branch(name="a", is_local=True, is_remote=True, is_merged=True,
                        last_commit_date=now - timedelta(days=21))
        assert format_branch_hint(branch, now) == "(merged, 3 weeks ago, local+remote)"

    def test_hint_not_merged(self, now):
        branch = Branch(name="a", is_remote=True, last_commit_date=now)
        assert format_branch_hint(branch, now) == "(not merged, today, remote)"

    def test_deletion_items_truncated(self):
        branches = [Branch(name=f"feature/{i}", is_local=True) for i in range(12)]
        lines = format_deletion_items(branches).splitlines()
        assert len(lines) == 11
        assert lines[0] == "  - feature/0 (local)"
        assert lines[-1] == "  ... and 2 more"

    def test_deletion_items_both_sides(self):
        text = format_deletion_items([Branch(name="x", is_local=True, is_remote=True)])
        assert text == "  - x (local, remote)"

    def test_result_line(self):
        result = DeletionResult(branch=Branch(name="x"), deleted_local=True, deleted_remote=True)
        assert format_result_line(result) == "✓ x (local) (remote)"

    def test_result_line_failure(self):
        result = DeletionResult(branch=Branch(name="x"), success=False, deleted_remote=True,
                                error="Local: nope")
        assert format_result_line(result) == "✗ x (remote) - Local: nope"
