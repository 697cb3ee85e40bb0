"""Configuration handling for git-tidy"""

from dataclasses import dataclass, field
from typing import Optional, List

from git_tidy.constants import (
    DEFAULT_AGE_DAYS,
    DEFAULT_BRANCH,
    DEFAULT_PATTERN,
    DEFAULT_REMOTE,
    DEFAULT_STALE_DAYS,
    DRY_RUN_PROGRESS_DELAY,
    PROTECTED_PATTERNS,
)


@dataclass
class Config:
    """Configuration for git-tidy with validation."""

    # Execution modes
    execute: bool = False  # Dry run unless --execute is given
    yes: bool = False  # Skip the confirmation step
    verbose: bool = False
    debug: bool = False

    # Branch discovery
    remote_name: str = DEFAULT_REMOTE
    default_branch: str = DEFAULT_BRANCH  # Fallback when GitHub cannot tell us
    protected_branches: List[str] = field(default_factory=lambda: list(PROTECTED_PATTERNS))

    # Filter defaults shown in the criteria step
    stale_days: int = DEFAULT_STALE_DAYS
    age_days: int = DEFAULT_AGE_DAYS
    pattern: str = DEFAULT_PATTERN

    # GitHub integration
    github_token: Optional[str] = None

    # UI
    progress_delay: float = DRY_RUN_PROGRESS_DELAY

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_days()
        self._validate_remote_name()
        self._validate_default_branch()
        self._validate_protected_branches()
        self._validate_progress_delay()

    def _validate_days(self):
        """Validate stale_days and age_days are positive."""
        if self.stale_days <= 0:
            raise ValueError(f"stale_days must be positive, got {self.stale_days}")
        if self.age_days <= 0:
            raise ValueError(f"age_days must be positive, got {self.age_days}")

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_default_branch(self):
        """Validate default_branch is not empty."""
        if not self.default_branch or not self.default_branch.strip():
            raise ValueError("default_branch cannot be empty")
        self.default_branch = self.default_branch.strip()

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")

    def _validate_progress_delay(self):
        if self.progress_delay < 0:
            raise ValueError(f"progress_delay cannot be negative, got {self.progress_delay}")

    @property
    def dry_run(self) -> bool:
        """True unless the user asked for real deletions."""
        return not self.execute

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "execute": self.execute,
            "yes": self.yes,
            "verbose": self.verbose,
            "debug": self.debug,
            "remote_name": self.remote_name,
            "default_branch": self.default_branch,
            "protected_branches": self.protected_branches,
            "stale_days": self.stale_days,
            "age_days": self.age_days,
            "pattern": self.pattern,
            "github_token": self.github_token,
            "progress_delay": self.progress_delay,
        }

    def get(self, key: str, default=None):
        """Get config value by key so services accept a Config or a plain dict."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "execute",
            "yes",
            "verbose",
            "debug",
            "remote_name",
            "default_branch",
            "protected_branches",
            "stale_days",
            "age_days",
            "pattern",
            "github_token",
            "progress_delay",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
