"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from git_tidy.constants import (
    DEFAULT_AGE_DAYS,
    DEFAULT_STALE_DAYS,
    LOCATION_BOTH,
    LOCATION_LOCAL,
    LOCATION_REMOTE,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BranchScope(Enum):
    """Which branch namespaces a run looks at."""
    LOCAL = "local"
    REMOTE = "remote"
    BOTH = "both"

    @property
    def includes_local(self) -> bool:
        return self in (BranchScope.LOCAL, BranchScope.BOTH)

    @property
    def includes_remote(self) -> bool:
        return self in (BranchScope.REMOTE, BranchScope.BOTH)


@dataclass
class Branch:
    """One git branch, present locally, on the remote, or both."""
    name: str
    is_local: bool = False
    is_remote: bool = False
    # Never None: a tip without a readable date counts as committed just now
    last_commit_date: datetime = field(default_factory=_utc_now)
    is_merged: bool = False
    is_protected: bool = False
    is_current_branch: bool = False

    @property
    def location(self) -> str:
        """Where the branch lives: local, remote or local+remote."""
        if self.is_local and self.is_remote:
            return LOCATION_BOTH
        if self.is_local:
            return LOCATION_LOCAL
        return LOCATION_REMOTE

    def age_days(self, now: Optional[datetime] = None) -> int:
        """Whole days since the last commit."""
        from git_tidy.formatters.date import days_ago

        return days_ago(self.last_commit_date, now)


@dataclass(frozen=True)
class FilterOptions:
    """Filter toggles chosen in the criteria step, each with its own parameter."""
    merged: bool = False
    stale: bool = False
    stale_days: int = DEFAULT_STALE_DAYS
    age: bool = False
    age_days: int = DEFAULT_AGE_DAYS
    pattern: bool = False
    pattern_value: str = ""

    @property
    def has_active_filters(self) -> bool:
        return self.merged or self.stale or self.age or self.pattern


@dataclass
class RemoteInfo:
    """Owner and repository parsed from a remote URL."""
    owner: str
    repo: str
    host: str
    is_github: bool


@dataclass
class RepoInfo:
    """Repository facts shown in the header and used for discovery."""
    owner: str
    repo: str
    default_branch: str
    current_branch: str
    is_github: bool = False

    @property
    def full_name(self) -> str:
        if self.owner and self.repo:
            return f"{self.owner}/{self.repo}"
        return self.repo or "(local repository)"
