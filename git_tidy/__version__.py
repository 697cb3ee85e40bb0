"""Version information for git-tidy."""

__version__ = "1.0.0"
