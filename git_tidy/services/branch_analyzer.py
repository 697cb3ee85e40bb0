"""Branch discovery and filtering for git-tidy"""

from datetime import datetime
from typing import Dict, List, Optional

from git_tidy.formatters.date import is_older_than
from git_tidy.logging_config import get_logger
from git_tidy.models.branch import Branch, BranchScope, FilterOptions
from git_tidy.services.branch_validation_service import BranchValidationService, matches_pattern

logger = get_logger(__name__)


def merge_branch_lists(scope: BranchScope, local: List[Branch], remote: List[Branch]) -> List[Branch]:
    """
    Combine per-namespace branch lists into one list for the requested scope.

    For ``both`` a remote branch whose name is already present locally flips
    ``is_remote`` on the local entry instead of being appended, so every name
    appears once. Local order comes first, then remote-only branches.
    """
    branches: List[Branch] = []

    if scope.includes_local:
        branches.extend(local)

    if scope.includes_remote:
        if scope is BranchScope.BOTH:
            by_name: Dict[str, Branch] = {branch.name: branch for branch in branches}
            for remote_branch in remote:
                existing = by_name.get(remote_branch.name)
                if existing is not None:
                    existing.is_remote = True
                else:
                    branches.append(remote_branch)
                    by_name[remote_branch.name] = remote_branch
        else:
            branches = list(remote)

    return branches


def fetch_branches(source, scope: BranchScope, default_branch: str, current_branch: str) -> List[Branch]:
    """
    Ask the branch source for the namespaces in scope and merge the results.

    Args:
        source: Object providing get_local_branches/get_remote_branches (GitOperations)
        scope: Which namespaces to read
        default_branch: Merge target and always-protected branch
        current_branch: Checked-out branch name
    """
    local: List[Branch] = []
    remote: List[Branch] = []

    if scope.includes_local:
        local = source.get_local_branches(default_branch, current_branch)
    if scope.includes_remote:
        remote = source.get_remote_branches(default_branch)

    branches = merge_branch_lists(scope, local, remote)
    logger.info(
        f"Discovered {len(branches)} branches (scope={scope.value}, "
        f"local={len(local)}, remote={len(remote)})"
    )
    return branches


def _matches_filters(branch: Branch, filters: FilterOptions, now: Optional[datetime]) -> bool:
    """True if the branch satisfies at least one active filter."""
    if filters.merged and branch.is_merged:
        return True
    if filters.stale and is_older_than(branch.last_commit_date, filters.stale_days, now):
        return True
    if filters.age and is_older_than(branch.last_commit_date, filters.age_days, now):
        return True
    if filters.pattern and matches_pattern(branch.name, filters.pattern_value):
        return True
    return False


def filter_branches(
    branches: List[Branch], filters: FilterOptions, now: Optional[datetime] = None
) -> List[Branch]:
    """
    Apply the safety rule and the user's filters.

    Protected branches and the current branch are always dropped. With no
    filter toggled every remaining branch is returned; otherwise a branch is
    kept if it matches any active filter (OR, not AND). Order is preserved.
    """
    eligible = [b for b in branches if BranchValidationService.is_eligible(b)]

    if not filters.has_active_filters:
        return eligible

    filtered = [b for b in eligible if _matches_filters(b, filters, now)]
    logger.debug(f"Filters kept {len(filtered)} of {len(eligible)} eligible branches")
    return filtered


def sort_by_age(branches: List[Branch]) -> List[Branch]:
    """Sort branches by last commit date, oldest first."""
    return sorted(branches, key=lambda b: b.last_commit_date)


def sort_by_name(branches: List[Branch]) -> List[Branch]:
    """Sort branches by name, ignoring case."""
    return sorted(branches, key=lambda b: b.name.lower())


def get_branch_stats(branches: List[Branch]) -> Dict[str, int]:
    """Count branches by location, merge status and protection."""
    return {
        "total": len(branches),
        "local": sum(1 for b in branches if b.is_local),
        "remote": sum(1 for b in branches if b.is_remote),
        "merged": sum(1 for b in branches if b.is_merged),
        "protected": sum(1 for b in branches if b.is_protected),
    }
