"""Core functionality for git-tidy"""

from typing import List, Optional, Tuple, Union

from git_tidy.config import Config
from git_tidy.exceptions import NotAGitRepositoryError
from git_tidy.logging_config import get_logger
from git_tidy.models.branch import Branch, BranchScope, FilterOptions, RepoInfo
from git_tidy.models.deletion import DeletionSummary
from git_tidy.services.branch_analyzer import fetch_branches, filter_branches
from git_tidy.services.deletion_executor import DeletionExecutor, ProgressCallback
from git_tidy.services.git import GitHubService, GitOperations

logger = get_logger(__name__)


class GitTidy:
    """Connects the git and GitHub clients to discovery, filtering and deletion.

    The clients are created here (or passed in) and handed to whatever needs
    them; nothing is kept in module-level state.
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        git_service: Optional[GitOperations] = None,
        github_service: Optional[GitHubService] = None,
    ):
        """Initialize GitTidy.

        Args:
            repo_path: Path inside the git working tree
            config: Configuration dict or Config object
            git_service: Branch source to use instead of GitOperations
            github_service: Metadata client to use instead of GitHubService
        """
        self.repo_path = repo_path
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.git_service = git_service or GitOperations(self.repo_path, self.config)
        self.github_service = github_service or GitHubService(self.config)
        self.executor = DeletionExecutor(self.git_service)
        self.repo_info: Optional[RepoInfo] = None

    def initialize(self) -> RepoInfo:
        """Check the repository and resolve the default branch.

        Raises:
            NotAGitRepositoryError: if repo_path is not inside a git working tree
        """
        if not self.git_service.is_git_repo():
            raise NotAGitRepositoryError(self.repo_path)

        repo_info = self.git_service.get_repo_info(self.config.default_branch)

        if repo_info.is_github and self.github_service.has_token:
            try:
                self.github_service.setup_github_api()
                repo_info.default_branch = self.github_service.get_default_branch(
                    repo_info.owner, repo_info.repo
                )
                logger.info(f"[GitHub] Default branch is {repo_info.default_branch}")
            except Exception as e:
                logger.warning(f"[GitHub] Setup failed, using '{repo_info.default_branch}': {e}")
        elif repo_info.is_github:
            logger.info("GitHub token not found, using the configured default branch")
        else:
            logger.debug("Not a GitHub remote, using the configured default branch")

        self.repo_info = repo_info
        return repo_info

    def load_branches(
        self, scope: BranchScope, filters: FilterOptions
    ) -> Tuple[List[Branch], List[Branch]]:
        """Discover branches in scope and apply the filters.

        Returns:
            Tuple of (all discovered branches, filtered candidates)
        """
        if self.repo_info is None:
            raise RuntimeError("Repository info not available; call initialize() first")

        branches = fetch_branches(
            self.git_service,
            scope,
            self.repo_info.default_branch,
            self.repo_info.current_branch,
        )
        return branches, filter_branches(branches, filters)

    def execute(
        self,
        branches: List[Branch],
        dry_run: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DeletionSummary:
        """Run the deletion executor over the selection."""
        self.executor.progress_delay = self.config.progress_delay if dry_run else 0.0
        return self.executor.execute(branches, dry_run=dry_run, on_progress=on_progress)

    def close(self) -> None:
        """Release API connections."""
        self.github_service.close()
