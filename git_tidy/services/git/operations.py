"""Git operations service"""

from datetime import datetime, timezone
from typing import Union, TYPE_CHECKING, List, Optional, Set
from urllib.parse import urlparse

import git

from git_tidy.constants import DEFAULT_REMOTE, PROTECTED_PATTERNS
from git_tidy.exceptions import GitOperationError
from git_tidy.logging_config import get_logger
from git_tidy.models.branch import Branch, RemoteInfo, RepoInfo
from git_tidy.services.branch_validation_service import BranchValidationService

if TYPE_CHECKING:
    from git_tidy.config import Config

logger = get_logger(__name__)

GITHUB_HOST = "github.com"


def _command_error_message(error: git.exc.GitCommandError) -> str:
    """Build a readable message from a failed git command."""
    stderr = (error.stderr or "").strip()
    # GitPython wraps stderr as "\n  stderr: '...'"
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
    stderr = stderr.strip("'").strip()
    if stderr:
        return stderr
    return f"git exited with status {error.status}"


def parse_remote_url(url: str) -> Optional[RemoteInfo]:
    """
    Extract host, owner and repository from a remote URL.

    Handles SSH (``git@github.com:owner/repo.git``) and HTTPS
    (``https://github.com/owner/repo.git``) forms.

    Returns:
        RemoteInfo, or None if the URL has no owner/repo path
    """
    url = url.strip()
    if not url:
        return None

    if "://" in url:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        path = parsed.path
    elif "@" in url and ":" in url:
        # scp-like syntax: user@host:owner/repo.git
        user_host, path = url.split(":", 1)
        host = user_host.split("@", 1)[1]
    else:
        return None

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]

    parts = path.split("/")
    if len(parts) < 2 or not all(parts):
        return None

    owner, repo = parts[-2], parts[-1]
    return RemoteInfo(
        owner=owner,
        repo=repo,
        host=host,
        is_github=host.lower() == GITHUB_HOST,
    )


class GitOperations:
    """Service for Git operations."""

    def __init__(self, repo_path: str, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            repo_path: Path inside the git working tree
            config: Configuration dictionary or Config object
        """
        self.repo_path = repo_path
        self.config = config
        self.remote_name = config.get("remote_name", DEFAULT_REMOTE)
        self.protected_patterns = config.get("protected_branches", PROTECTED_PATTERNS)

    def _get_repo(self) -> git.Repo:
        """Open the repository containing repo_path.

        GitPython repos are lightweight - they don't clone, just open the existing repo.
        """
        return git.Repo(self.repo_path, search_parent_directories=True)

    def is_git_repo(self) -> bool:
        """Check whether repo_path is inside a git working tree."""
        try:
            self._get_repo()
            return True
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            return False

    def get_current_branch(self) -> str:
        """Name of the checked-out branch, or "HEAD" when detached."""
        repo = self._get_repo()
        try:
            return repo.active_branch.name
        except TypeError:
            logger.debug("Repository is in detached HEAD state")
            return "HEAD"

    def get_remote_url(self) -> Optional[str]:
        """URL of the configured remote, if it exists."""
        try:
            return self._get_repo().remote(self.remote_name).url
        except (ValueError, AttributeError) as e:
            logger.debug(f"No remote named {self.remote_name}: {e}")
            return None

    def get_remote_info(self) -> Optional[RemoteInfo]:
        """Owner/repo coordinates of the configured remote."""
        remote_url = self.get_remote_url()
        if not remote_url:
            return None
        return parse_remote_url(remote_url)

    def get_repo_info(self, default_branch: str) -> RepoInfo:
        """Collect repository facts for the header and for discovery."""
        remote_info = self.get_remote_info()
        return RepoInfo(
            owner=remote_info.owner if remote_info else "",
            repo=remote_info.repo if remote_info else "",
            default_branch=default_branch,
            current_branch=self.get_current_branch(),
            is_github=remote_info.is_github if remote_info else False,
        )

    def _is_protected(self, branch_name: str, default_branch: str) -> bool:
        return BranchValidationService.is_protected(
            branch_name, default_branch, self.protected_patterns
        )

    @staticmethod
    def _commit_date(ref) -> datetime:
        """Author date of a ref's tip; now if it cannot be read."""
        try:
            return ref.commit.authored_datetime
        except Exception as e:
            logger.debug(f"Could not read commit date for {ref}: {e}")
            return datetime.now(timezone.utc)

    def get_merged_branches(self, target: str, remote: bool = False) -> Set[str]:
        """Names of branches whose tips are reachable from target.

        Remote names are returned without the remote prefix. Any failure yields
        an empty set, so branches read as not merged.
        """
        try:
            repo = self._get_repo()
            args = ["--remotes", "--merged", target] if remote else ["--merged", target]
            output = repo.git.branch(*args)
        except git.exc.GitCommandError as e:
            logger.warning(f"Could not list branches merged into {target}: {_command_error_message(e)}")
            return set()

        prefix = f"{self.remote_name}/"
        merged = set()
        for line in output.splitlines():
            name = line.strip().lstrip("*+").strip()
            if not name or " -> " in name:
                continue
            if remote:
                if not name.startswith(prefix):
                    continue
                name = name[len(prefix):]
            merged.add(name)
        return merged

    def get_local_branches(self, default_branch: str, current_branch: str) -> List[Branch]:
        """List local branches with commit date, merge status and protection."""
        try:
            repo = self._get_repo()
            merged = self.get_merged_branches(default_branch)

            branches = []
            for head in repo.heads:
                branches.append(Branch(
                    name=head.name,
                    is_local=True,
                    is_remote=False,
                    last_commit_date=self._commit_date(head),
                    is_merged=head.name in merged,
                    is_protected=self._is_protected(head.name, default_branch),
                    is_current_branch=head.name == current_branch,
                ))

            logger.debug(f"Found {len(branches)} local branches")
            return branches
        except Exception as e:
            logger.error(f"Error getting local branches: {e}")
            return []

    def fetch(self) -> None:
        """Fetch from the remote, pruning deleted branches.

        A failed fetch is logged; listing continues on the refs we already have.
        """
        try:
            self._get_repo().remote(self.remote_name).fetch(prune=True)
            logger.debug(f"Fetched {self.remote_name} with prune")
        except (git.exc.GitCommandError, ValueError) as e:
            logger.warning(f"Could not fetch {self.remote_name}, using cached remote refs: {e}")

    def get_remote_branches(self, default_branch: str) -> List[Branch]:
        """List branches on the remote (prefix stripped), excluding HEAD and the default branch."""
        try:
            self.fetch()
            repo = self._get_repo()
            remote = repo.remote(self.remote_name)
            merged = self.get_merged_branches(f"{self.remote_name}/{default_branch}", remote=True)

            branches = []
            for ref in remote.refs:
                short_name = ref.remote_head
                if short_name == "HEAD" or short_name == default_branch:
                    continue

                branches.append(Branch(
                    name=short_name,
                    is_local=False,
                    is_remote=True,
                    last_commit_date=self._commit_date(ref),
                    is_merged=short_name in merged,
                    is_protected=self._is_protected(short_name, default_branch),
                    is_current_branch=False,
                ))

            logger.debug(f"Found {len(branches)} remote branches on {self.remote_name}")
            return branches
        except Exception as e:
            logger.error(f"Error getting remote branches: {e}")
            return []

    def delete_local_branch(self, branch_name: str) -> None:
        """Force-delete a local branch (like ``git branch -D``).

        Raises:
            GitOperationError: if git refuses, e.g. for the checked-out branch
        """
        try:
            repo = self._get_repo()
            repo.git.branch("-D", branch_name)
            logger.info(f"Deleted local branch {branch_name}")
        except git.exc.GitCommandError as e:
            raise GitOperationError("delete_local_branch", branch_name, _command_error_message(e)) from e

    def delete_remote_branch(self, branch_name: str) -> None:
        """Delete a branch on the remote (``git push <remote> --delete``).

        Raises:
            GitOperationError: if the push is rejected or the remote is unreachable
        """
        try:
            repo = self._get_repo()
            repo.git.push(self.remote_name, "--delete", branch_name)
            logger.info(f"Deleted remote branch {self.remote_name}/{branch_name}")
        except git.exc.GitCommandError as e:
            raise GitOperationError("delete_remote_branch", branch_name, _command_error_message(e)) from e
