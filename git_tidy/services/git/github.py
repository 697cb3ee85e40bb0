"""GitHub API integration service"""

import os
from typing import Optional, TYPE_CHECKING, Union

from github import Github, Auth

from git_tidy.constants import DEFAULT_BRANCH
from git_tidy.exceptions import GitHubAPIError
from git_tidy.logging_config import get_logger

if TYPE_CHECKING:
    from git_tidy.config import Config

logger = get_logger(__name__)


class GitHubService:
    """Repository metadata lookups. Only used when a token is available."""

    def __init__(self, config: Union["Config", dict]):
        self.config = config
        self.github_token: Optional[str] = config.get("github_token") or os.environ.get("GITHUB_TOKEN")
        self.fallback_branch: str = config.get("default_branch", DEFAULT_BRANCH)
        self.github: Optional[Github] = None

    @property
    def has_token(self) -> bool:
        return bool(self.github_token)

    @property
    def is_authenticated(self) -> bool:
        return self.github is not None

    def setup_github_api(self) -> None:
        """Create the API client.

        Raises:
            GitHubAPIError: if no token is configured
        """
        if not self.github_token:
            raise GitHubAPIError("setup", "No GitHub token configured (use --token or GITHUB_TOKEN)")

        self.github = Github(auth=Auth.Token(self.github_token))
        logger.debug("[GitHub] API client initialized")

    def get_default_branch(self, owner: str, repo: str) -> str:
        """Look up the repository's default branch.

        Falls back to the configured default branch when not authenticated or
        when the lookup fails for any reason.
        """
        if not self.github:
            logger.debug(f"[GitHub] Not authenticated, using default branch '{self.fallback_branch}'")
            return self.fallback_branch

        try:
            default_branch = self.github.get_repo(f"{owner}/{repo}").default_branch
            logger.debug(f"[GitHub] Default branch for {owner}/{repo}: {default_branch}")
            return default_branch
        except Exception as e:
            logger.warning(f"[GitHub] Error fetching default branch for {owner}/{repo}: {e}")
            return self.fallback_branch

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
            self.github = None
