"""Tests for DeletionExecutor"""
from unittest.mock import Mock, call, patch

from git_tidy.exceptions import GitOperationError
from git_tidy.models.branch import Branch
from git_tidy.services.deletion_executor import DeletionExecutor


def local_and_remote(name):
    return Branch(name=name, is_local=True, is_remote=True)


class TestDryRun:
    def test_makes_no_git_calls(self, mock_git_service):
        executor = DeletionExecutor(mock_git_service)
        branches = [local_and_remote("feature/a"), Branch(name="feature/b", is_remote=True)]

        summary = executor.execute(branches, dry_run=True)

        mock_git_service.delete_local_branch.assert_not_called()
        mock_git_service.delete_remote_branch.assert_not_called()
        assert summary.total == 2
        assert summary.successful == 2
        assert summary.failed == 0
        assert summary.skipped == 0

    def test_reports_what_would_be_deleted(self, mock_git_service):
        executor = DeletionExecutor(mock_git_service)
        summary = executor.execute([Branch(name="feature/r", is_remote=True)], dry_run=True)

        result = summary.results[0]
        assert result.success is True
        assert result.deleted_local is False
        assert result.deleted_remote is True

    @patch("git_tidy.services.deletion_executor.time.sleep")
    def test_progress_delay(self, mock_sleep, mock_git_service):
        executor = DeletionExecutor(mock_git_service, progress_delay=0.1)
        executor.execute([Branch(name="a", is_local=True), Branch(name="b", is_local=True)])
        assert mock_sleep.call_args_list == [call(0.1), call(0.1)]

    @patch("git_tidy.services.deletion_executor.time.sleep")
    def test_no_delay_by_default(self, mock_sleep, mock_git_service):
        DeletionExecutor(mock_git_service).execute([Branch(name="a", is_local=True)])
        mock_sleep.assert_not_called()


class TestRealRun:
    def test_deletes_both_sides(self, mock_git_service):
        executor = DeletionExecutor(mock_git_service)

        summary = executor.execute([local_and_remote("feature/a")], dry_run=False)

        mock_git_service.delete_local_branch.assert_called_once_with("feature/a")
        mock_git_service.delete_remote_branch.assert_called_once_with("feature/a")
        result = summary.results[0]
        assert result.success is True
        assert result.deleted_local is True
        assert result.deleted_remote is True
        assert result.error is None

    def test_only_present_sides_are_deleted(self, mock_git_service):
        executor = DeletionExecutor(mock_git_service)

        executor.execute([Branch(name="feature/local", is_local=True)], dry_run=False)

        mock_git_service.delete_local_branch.assert_called_once_with("feature/local")
        mock_git_service.delete_remote_branch.assert_not_called()

    def test_remote_attempted_after_local_failure(self, mock_git_service):
        mock_git_service.delete_local_branch.side_effect = GitOperationError(
            "delete_local_branch", "feature/a", "branch is checked out"
        )
        executor = DeletionExecutor(mock_git_service)

        summary = executor.execute([local_and_remote("feature/a")], dry_run=False)

        mock_git_service.delete_remote_branch.assert_called_once_with("feature/a")
        result = summary.results[0]
        assert result.success is False
        assert result.deleted_local is False
        assert result.deleted_remote is True
        assert result.error == "Local: branch is checked out"

    def test_both_failures_are_reported(self, mock_git_service):
        mock_git_service.delete_local_branch.side_effect = GitOperationError(
            "delete_local_branch", "feature/a", "local boom"
        )
        mock_git_service.delete_remote_branch.side_effect = RuntimeError("remote boom")
        executor = DeletionExecutor(mock_git_service)

        summary = executor.execute([local_and_remote("feature/a")], dry_run=False)

        result = summary.results[0]
        assert result.success is False
        assert result.error == "Local: local boom; Remote: remote boom"

    def test_error_without_message(self, mock_git_service):
        mock_git_service.delete_local_branch.side_effect = RuntimeError()
        executor = DeletionExecutor(mock_git_service)

        summary = executor.execute([Branch(name="x", is_local=True)], dry_run=False)

        assert summary.results[0].error == "Local: Unknown error"

    def test_failure_does_not_stop_the_run(self, mock_git_service):
        mock_git_service.delete_local_branch.side_effect = [
            GitOperationError("delete_local_branch", "a", "nope"),
            None,
        ]
        executor = DeletionExecutor(mock_git_service)

        summary = executor.execute(
            [Branch(name="a", is_local=True), Branch(name="b", is_local=True)], dry_run=False
        )

        assert summary.total == 2
        assert summary.successful == 1
        assert summary.failed == 1
        assert [r.branch.name for r in summary.failures] == ["a"]

    def test_sequential_in_selection_order(self):
        service = Mock()
        executor = DeletionExecutor(service)

        executor.execute([local_and_remote("one"), local_and_remote("two")], dry_run=False)

        assert service.mock_calls == [
            call.delete_local_branch("one"),
            call.delete_remote_branch("one"),
            call.delete_local_branch("two"),
            call.delete_remote_branch("two"),
        ]


class TestProgress:
    def test_callback_per_branch(self, mock_git_service):
        progress = Mock()
        executor = DeletionExecutor(mock_git_service)
        branches = [Branch(name="a", is_local=True), Branch(name="b", is_local=True)]

        summary = executor.execute(branches, dry_run=True, on_progress=progress)

        assert progress.call_count == 2
        first, second = progress.call_args_list
        assert first == call(summary.results[0], 1, 2)
        assert second == call(summary.results[1], 2, 2)

    def test_empty_selection(self, mock_git_service):
        progress = Mock()
        summary = DeletionExecutor(mock_git_service).execute([], on_progress=progress)
        assert summary.total == 0
        progress.assert_not_called()
