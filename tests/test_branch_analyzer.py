"""Tests for branch discovery, filtering and sorting"""
from unittest.mock import Mock

import pytest

from git_tidy.models.branch import Branch, BranchScope, FilterOptions
from git_tidy.services.branch_analyzer import (
    fetch_branches,
    filter_branches,
    get_branch_stats,
    merge_branch_lists,
    sort_by_age,
    sort_by_name,
)


def names(branches):
    return [b.name for b in branches]


class TestMergeBranchLists:
    def test_both_merges_same_name(self, make_branch):
        local = [make_branch("feature/a"), make_branch("feature/b")]
        remote = [
            make_branch("feature/a", is_local=False, is_remote=True),
            make_branch("feature/c", is_local=False, is_remote=True),
        ]

        merged = merge_branch_lists(BranchScope.BOTH, local, remote)

        assert names(merged) == ["feature/a", "feature/b", "feature/c"]
        a = merged[0]
        assert a.is_local and a.is_remote
        assert a.location == "local+remote"
        assert merged[1].is_remote is False
        assert merged[2].is_local is False

    def test_local_scope_ignores_remote(self, make_branch):
        local = [make_branch("feature/a")]
        remote = [make_branch("feature/a", is_local=False, is_remote=True)]

        merged = merge_branch_lists(BranchScope.LOCAL, local, remote)

        assert names(merged) == ["feature/a"]
        assert merged[0].is_remote is False

    def test_remote_scope(self, make_branch):
        remote = [make_branch("feature/r", is_local=False, is_remote=True)]
        merged = merge_branch_lists(BranchScope.REMOTE, [], remote)
        assert names(merged) == ["feature/r"]
        assert merged[0].is_local is False


class TestFetchBranches:
    def test_local_scope_only_reads_local(self, make_branch):
        source = Mock()
        source.get_local_branches.return_value = [make_branch("feature/a")]

        result = fetch_branches(source, BranchScope.LOCAL, "main", "main")

        source.get_local_branches.assert_called_once_with("main", "main")
        source.get_remote_branches.assert_not_called()
        assert names(result) == ["feature/a"]

    def test_remote_scope_only_reads_remote(self, make_branch):
        source = Mock()
        source.get_remote_branches.return_value = [
            make_branch("feature/r", is_local=False, is_remote=True)
        ]

        result = fetch_branches(source, BranchScope.REMOTE, "main", "main")

        source.get_local_branches.assert_not_called()
        source.get_remote_branches.assert_called_once_with("main")
        assert names(result) == ["feature/r"]

    def test_failed_remote_listing_keeps_local(self, make_branch):
        """A source that could not read the remote returns [], local results survive."""
        source = Mock()
        source.get_local_branches.return_value = [make_branch("feature/a")]
        source.get_remote_branches.return_value = []

        result = fetch_branches(source, BranchScope.BOTH, "main", "main")

        assert names(result) == ["feature/a"]


class TestFilterBranches:
    @pytest.fixture
    def branches(self, make_branch):
        return [
            make_branch("main", days_old=1, is_protected=True, is_merged=True),
            make_branch("feature/current", days_old=100, is_current_branch=True),
            make_branch("feature/merged", days_old=2, is_merged=True),
            make_branch("feature/old", days_old=45),
            make_branch("bugfix/ancient", days_old=90),
            make_branch("bugfix/fresh", days_old=0),
        ]

    def test_no_filters_returns_all_eligible_in_order(self, branches, now):
        result = filter_branches(branches, FilterOptions(), now)
        assert names(result) == ["feature/merged", "feature/old", "bugfix/ancient", "bugfix/fresh"]

    def test_protected_and_current_never_returned(self, branches, now):
        filters = FilterOptions(merged=True, stale=True, stale_days=1, pattern=True, pattern_value="*")
        result = filter_branches(branches, filters, now)
        assert "main" not in names(result)
        assert "feature/current" not in names(result)

    def test_merged(self, branches, now):
        result = filter_branches(branches, FilterOptions(merged=True), now)
        assert names(result) == ["feature/merged"]

    def test_stale(self, branches, now):
        result = filter_branches(branches, FilterOptions(stale=True, stale_days=30), now)
        assert names(result) == ["feature/old", "bugfix/ancient"]

    def test_stale_boundary(self, make_branch, now):
        branches = [make_branch("feature/thirty", days_old=30), make_branch("feature/31", days_old=31)]
        result = filter_branches(branches, FilterOptions(stale=True, stale_days=30), now)
        assert names(result) == ["feature/31"]

    def test_age(self, branches, now):
        result = filter_branches(branches, FilterOptions(age=True, age_days=60), now)
        assert names(result) == ["bugfix/ancient"]

    def test_pattern(self, branches, now):
        result = filter_branches(branches, FilterOptions(pattern=True, pattern_value="bugfix/*"), now)
        assert names(result) == ["bugfix/ancient", "bugfix/fresh"]

    def test_filters_are_or_combined(self, branches, now):
        filters = FilterOptions(merged=True, pattern=True, pattern_value="bugfix/f*")
        result = filter_branches(branches, filters, now)
        assert names(result) == ["feature/merged", "bugfix/fresh"]

    def test_pattern_toggle_without_value_matches_nothing(self, branches, now):
        result = filter_branches(branches, FilterOptions(pattern=True, pattern_value=""), now)
        assert result == []


class TestSortingAndStats:
    def test_sort_by_age_oldest_first(self, make_branch):
        branches = [make_branch("a", days_old=1), make_branch("b", days_old=10), make_branch("c", days_old=5)]
        assert names(sort_by_age(branches)) == ["b", "c", "a"]

    def test_sort_by_name_ignores_case(self, make_branch):
        branches = [make_branch("beta"), make_branch("Alpha"), make_branch("gamma")]
        assert names(sort_by_name(branches)) == ["Alpha", "beta", "gamma"]

    def test_sort_does_not_modify_input(self, make_branch):
        branches = [make_branch("b"), make_branch("a")]
        sort_by_name(branches)
        assert names(branches) == ["b", "a"]

    def test_stats(self, make_branch):
        branches = [
            make_branch("main", is_protected=True, is_merged=True),
            make_branch("feature/a", is_remote=True, is_merged=True),
            Branch(name="feature/r", is_remote=True),
        ]
        assert get_branch_stats(branches) == {
            "total": 3,
            "local": 2,
            "remote": 2,
            "merged": 2,
            "protected": 1,
        }
