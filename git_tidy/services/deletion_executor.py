"""Sequential branch deletion for git-tidy"""

import time
from typing import Callable, List, Optional

from git_tidy.exceptions import GitOperationError
from git_tidy.logging_config import get_logger
from git_tidy.models.branch import Branch
from git_tidy.models.deletion import DeletionResult, DeletionSummary

logger = get_logger(__name__)

ProgressCallback = Callable[[DeletionResult, int, int], None]


def _error_text(error: Exception) -> str:
    if isinstance(error, GitOperationError) and error.message:
        return error.message
    return str(error) or "Unknown error"


class DeletionExecutor:
    """Deletes selected branches one at a time, in selection order.

    Only one git command is in flight at any moment; local and remote deletion
    of a branch are both attempted even if the first one fails.
    """

    def __init__(self, git_service, progress_delay: float = 0.0):
        """
        Args:
            git_service: Object providing delete_local_branch/delete_remote_branch
            progress_delay: Seconds to pause per simulated deletion (display only)
        """
        self.git_service = git_service
        self.progress_delay = progress_delay

    def execute(
        self,
        branches: List[Branch],
        dry_run: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DeletionSummary:
        """
        Process every branch and return the summary of the whole pass.

        Args:
            branches: Selected branches, processed in this order
            dry_run: Simulate only; nothing in the repository changes
            on_progress: Called after each branch with (result, completed, total)

        Returns:
            DeletionSummary built once all branches are processed
        """
        total = len(branches)
        mode = "dry run" if dry_run else "deletion"
        logger.info(f"Starting {mode} of {total} branch(es)")

        results: List[DeletionResult] = []
        for branch in branches:
            if dry_run:
                result = self._simulate(branch)
            else:
                result = self._delete(branch)
            results.append(result)

            if on_progress:
                on_progress(result, len(results), total)

        summary = DeletionSummary.from_results(results)
        logger.info(
            f"Finished {mode}: {summary.successful} succeeded, {summary.failed} failed"
        )
        return summary

    def _simulate(self, branch: Branch) -> DeletionResult:
        if self.progress_delay:
            time.sleep(self.progress_delay)
        logger.debug(f"Would delete {branch.name} ({branch.location})")
        return DeletionResult(
            branch=branch,
            success=True,
            deleted_local=branch.is_local,
            deleted_remote=branch.is_remote,
        )

    def _delete(self, branch: Branch) -> DeletionResult:
        result = DeletionResult(branch=branch)

        if branch.is_local:
            try:
                self.git_service.delete_local_branch(branch.name)
                result.deleted_local = True
            except Exception as e:
                logger.warning(f"Failed to delete local branch {branch.name}: {e}")
                result.record_failure("Local", _error_text(e))

        if branch.is_remote:
            try:
                self.git_service.delete_remote_branch(branch.name)
                result.deleted_remote = True
            except Exception as e:
                logger.warning(f"Failed to delete remote branch {branch.name}: {e}")
                result.record_failure("Remote", _error_text(e))

        return result
