"""Git-related services for git-tidy."""

from .operations import GitOperations
from .github import GitHubService

__all__ = [
    "GitOperations",
    "GitHubService",
]
