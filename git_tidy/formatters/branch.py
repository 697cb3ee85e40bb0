"""Branch formatting utilities."""

from datetime import datetime
from typing import Iterable, Optional

from git_tidy.constants import MAX_CONFIRM_ITEMS, SYMBOL_FAILURE, SYMBOL_SUCCESS
from git_tidy.formatters.date import format_days_ago
from git_tidy.models.branch import Branch
from git_tidy.models.deletion import DeletionResult


def format_branch_hint(branch: Branch, now: Optional[datetime] = None) -> str:
    """
    Format the hint shown next to a branch in the selection list.

    Example:
        "(merged, 3 weeks ago, local+remote)"
    """
    status = "merged" if branch.is_merged else "not merged"
    return f"({status}, {format_days_ago(branch.last_commit_date, now)}, {branch.location})"


def format_deletion_items(branches: Iterable[Branch], limit: int = MAX_CONFIRM_ITEMS) -> str:
    """
    Format branches for the confirmation message.

    Each branch is on a separate line, "  - name (local, remote)", followed by
    "  ... and N more" when the list is longer than ``limit``.
    """
    branches = list(branches)
    lines = []
    for branch in branches[:limit]:
        sides = []
        if branch.is_local:
            sides.append("local")
        if branch.is_remote:
            sides.append("remote")
        lines.append(f"  - {branch.name} ({', '.join(sides)})")
    if len(branches) > limit:
        lines.append(f"  ... and {len(branches) - limit} more")
    return "\n".join(lines)


def format_result_line(result: DeletionResult) -> str:
    """Format a single deletion result, e.g. "✓ feature/x (local) (remote)"."""
    symbol = SYMBOL_SUCCESS if result.success else SYMBOL_FAILURE
    parts = [symbol, result.branch.name]
    if result.deleted_local:
        parts.append("(local)")
    if result.deleted_remote:
        parts.append("(remote)")
    if result.error:
        parts.append(f"- {result.error}")
    return " ".join(parts)
