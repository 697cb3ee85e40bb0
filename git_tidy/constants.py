"""Shared constants for git-tidy."""

from typing import List

# Filter defaults offered by the criteria step
DEFAULT_STALE_DAYS = 30
DEFAULT_AGE_DAYS = 60
DEFAULT_PATTERN = "feature/*"

# Used when the default branch cannot be looked up on GitHub
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE = "origin"

# Protected branch globs (in addition to the detected default branch)
PROTECTED_PATTERNS: List[str] = [
    "main",
    "master",
    "develop",
    "development",
    "staging",
    "production",
    "release/*",
]

# Pause between simulated deletions so the progress view is readable
DRY_RUN_PROGRESS_DELAY = 0.1

# How many entries the confirm, execute and summary screens list before "... and N more"
MAX_CONFIRM_ITEMS = 10
MAX_PROGRESS_ITEMS = 8
MAX_FAILED_ITEMS = 5

# Symbol constants
SYMBOL_SUCCESS = "✓"
SYMBOL_FAILURE = "✗"
SYMBOL_SKIPPED = "○"

# Location labels
LOCATION_LOCAL = "local"
LOCATION_REMOTE = "remote"
LOCATION_BOTH = "local+remote"
