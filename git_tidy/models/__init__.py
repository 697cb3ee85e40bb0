"""Data models for git-tidy."""

from .branch import Branch, BranchScope, FilterOptions, RemoteInfo, RepoInfo
from .deletion import DeletionResult, DeletionSummary

__all__ = [
    "Branch",
    "BranchScope",
    "FilterOptions",
    "RemoteInfo",
    "RepoInfo",
    "DeletionResult",
    "DeletionSummary",
]
