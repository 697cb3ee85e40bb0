"""Command-line argument parsing for git-tidy."""

import argparse

from git_tidy.__version__ import __version__
from git_tidy.constants import (
    DEFAULT_AGE_DAYS,
    DEFAULT_BRANCH,
    DEFAULT_REMOTE,
    DEFAULT_STALE_DAYS,
    PROTECTED_PATTERNS,
)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-tidy",
        description="Interactive CLI tool for cleaning up unused git branches",
        epilog="Runs as a dry run unless --execute is given. A GitHub token (--token or "
        "GITHUB_TOKEN) lets git-tidy look up the repository's default branch.",
    )
    parser.add_argument("--version", action="version", version=f"git-tidy {__version__}")
    parser.add_argument(
        "-x",
        "--execute",
        action="store_true",
        help="Actually delete branches (default: dry-run mode)",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip the confirmation step (does not turn off dry-run mode)",
    )
    parser.add_argument(
        "-t",
        "--token",
        metavar="TOKEN",
        help="GitHub personal access token (or use GITHUB_TOKEN env)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--stale-days",
        type=int,
        default=DEFAULT_STALE_DAYS,
        help=f"Suggested days without commits for the stale filter (default: {DEFAULT_STALE_DAYS})",
    )
    parser.add_argument(
        "--age-days",
        type=int,
        default=DEFAULT_AGE_DAYS,
        help=f"Suggested minimum age for the age filter (default: {DEFAULT_AGE_DAYS})",
    )
    parser.add_argument(
        "--protected",
        nargs="*",
        default=list(PROTECTED_PATTERNS),
        help="Protected branch names or globs, never offered for deletion",
    )
    parser.add_argument(
        "--remote", default=DEFAULT_REMOTE, help=f"Remote to clean up (default: {DEFAULT_REMOTE})"
    )
    parser.add_argument(
        "--default-branch",
        default=DEFAULT_BRANCH,
        help=f"Default branch when GitHub cannot be asked (default: {DEFAULT_BRANCH})",
    )

    return parser.parse_args(argv)
