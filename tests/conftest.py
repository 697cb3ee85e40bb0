"""Pytest fixtures for git-tidy tests"""
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_tidy.models.branch import Branch


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference instant for date arithmetic."""
    return NOW


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'execute': False,
        'yes': False,
        'verbose': False,
        'debug': False,
        'remote_name': 'origin',
        'default_branch': 'main',
        'protected_branches': ['main', 'master', 'develop', 'release/*'],
        'stale_days': 30,
        'age_days': 60,
        'github_token': None,
        'progress_delay': 0.0,
    }


def _commit_file(repo, name, content, message):
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    _commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with merged, unmerged and protected branches.

    main            <- checked out
    feature/merged  merged into main
    feature/active  one commit ahead of main
    develop         protected by name
    """
    repo = git_repo

    repo.git.checkout('-b', 'feature/merged')
    _commit_file(repo, "merged.txt", "Merged content\n", "Feature to merge")
    repo.git.checkout('main')
    repo.git.merge('feature/merged', '--no-ff', '-m', 'Merge feature/merged')

    repo.git.checkout('-b', 'feature/active')
    _commit_file(repo, "active.txt", "Active content\n", "Unmerged work")

    repo.git.checkout('main')
    repo.git.branch('develop')

    yield repo


@pytest.fixture
def git_repo_with_remote(git_repo_with_branches, temp_dir):
    """Repository whose branches are also pushed to a bare 'origin' remote.

    Pushed: main, feature/merged, feature/active, develop.
    Remote only: remote/only (pushed, then the local copy is deleted).
    """
    repo = git_repo_with_branches
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)
    repo.create_remote('origin', str(origin_path))

    repo.git.branch('remote/only', 'feature/active')
    repo.git.push('origin', 'main', 'feature/merged', 'feature/active', 'develop', 'remote/only')
    repo.git.branch('-D', 'remote/only')
    repo.remote('origin').fetch()

    yield repo


@pytest.fixture
def make_branch(now):
    """Factory for Branch records with a commit date ``days_old`` before ``now``."""
    def _make(name, days_old=0, is_local=True, is_remote=False, **kwargs):
        return Branch(
            name=name,
            is_local=is_local,
            is_remote=is_remote,
            last_commit_date=now - timedelta(days=days_old),
            **kwargs,
        )
    return _make


@pytest.fixture
def mock_git_service():
    """Create a mock branch source / deletion adapter."""
    from git_tidy.services.git import GitOperations

    service = Mock(spec=GitOperations)
    service.is_git_repo = Mock(return_value=True)
    service.get_local_branches = Mock(return_value=[])
    service.get_remote_branches = Mock(return_value=[])
    service.delete_local_branch = Mock(return_value=None)
    service.delete_remote_branch = Mock(return_value=None)
    return service


@pytest.fixture
def mock_github_service():
    """Create a mock GitHubService without a token."""
    from git_tidy.services.git import GitHubService

    service = Mock(spec=GitHubService)
    service.has_token = False
    service.get_default_branch = Mock(return_value="main")
    return service
