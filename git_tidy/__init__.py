"""
git-tidy - An interactive wizard for cleaning up stale and merged git branches
"""

from .__version__ import __version__
from .core import GitTidy
from .cli.main import main

__all__ = ["GitTidy", "main", "__version__"]
