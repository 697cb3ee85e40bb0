"""Custom exceptions for git-tidy"""

from typing import Optional


class GitTidyError(Exception):
    """Base exception for all git-tidy errors."""
    pass


class GitOperationError(GitTidyError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitHubAPIError(GitTidyError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotAGitRepositoryError(GitTidyError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "Not a git repository. Please run this command in a git repository."
        )


class InvalidTransitionError(GitTidyError):
    """Exception raised when the wizard receives an event its current step does not accept."""

    def __init__(self, step, event):
        self.step = step
        self.event = event
        super().__init__(f"Event '{event.value}' is not valid in step '{step.value}'")
