"""Branch validation service for git-tidy."""

import re
from typing import Iterable

from git_tidy.models.branch import Branch


def matches_pattern(branch_name: str, pattern: str) -> bool:
    """
    Check if a branch name matches a glob-like pattern.

    Supports ``*`` (any run of characters, including none) and ``?`` (exactly one
    character). Every other character is literal. The whole name must match and
    the comparison ignores case.

    Args:
        branch_name: Branch name without any remote prefix
        pattern: Glob such as ``feature/*`` or ``release-?``

    Returns:
        True if the branch name matches
    """
    if not pattern:
        return False

    regex = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char)
        for char in pattern
    )
    return re.fullmatch(regex, branch_name, flags=re.IGNORECASE | re.DOTALL) is not None


class BranchValidationService:
    """Service for deciding which branches may be offered for deletion."""

    @staticmethod
    def is_protected(branch_name: str, default_branch: str, protected_patterns: Iterable[str]) -> bool:
        """
        Check if a branch is protected.

        Args:
            branch_name: Name of the branch
            default_branch: The repository's mainline branch
            protected_patterns: Protected branch names or globs

        Returns:
            True if the branch is the default branch or matches a protected pattern
        """
        if branch_name == default_branch:
            return True
        return any(matches_pattern(branch_name, pattern) for pattern in protected_patterns)

    @staticmethod
    def is_eligible(branch: Branch) -> bool:
        """
        Check if a branch may appear in the candidate list at all.

        Protected branches and the checked-out branch are never candidates,
        whatever filters are active.
        """
        return (
            not branch.is_protected
            and not branch.is_current_branch
            and (branch.is_local or branch.is_remote)
        )
