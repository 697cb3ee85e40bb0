"""Formatting utilities for git-tidy.

This package provides formatting functions for displaying branch information,
organized into logical modules:
- date: Elapsed-day arithmetic and human-readable ages
- branch: Branch hints, deletion lists and result lines
"""

# Date formatters
from .date import days_ago, is_older_than, format_age, format_days_ago, format_date

# Branch formatters
from .branch import (
    format_branch_hint,
    format_deletion_items,
    format_result_line,
)

__all__ = [
    # Date
    "days_ago",
    "is_older_than",
    "format_age",
    "format_days_ago",
    "format_date",
    # Branch
    "format_branch_hint",
    "format_deletion_items",
    "format_result_line",
]
