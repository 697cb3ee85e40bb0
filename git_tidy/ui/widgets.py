"""Custom widgets for git-tidy TUI."""

from typing import Optional

from rich.text import Text
from textual.app import RenderResult
from textual.widgets import Static

from git_tidy.__version__ import __version__
from git_tidy.models.branch import RepoInfo


class RepoHeader(Static):
    """Banner with the tool name, repository coordinates and run mode."""

    DEFAULT_CSS = """
    RepoHeader {
        border: round $accent;
        padding: 0 2;
        margin-bottom: 1;
        height: auto;
    }
    """

    def __init__(self, repo_info: Optional[RepoInfo], dry_run: bool, **kwargs):
        super().__init__(**kwargs)
        self.repo_info = repo_info
        self.dry_run = dry_run

    def render(self) -> RenderResult:
        text = Text()
        text.append("git-tidy", style="bold cyan")
        text.append(f" v{__version__} - Branch Cleanup Tool", style="dim")
        if self.dry_run:
            text.append("  [DRY RUN]", style="bold yellow")
        else:
            text.append("  [EXECUTE]", style="bold red")

        if self.repo_info:
            text.append("\nRepository: ", style="dim")
            text.append(self.repo_info.full_name)
            text.append("  Branch: ", style="dim")
            text.append(self.repo_info.current_branch, style="green")
            text.append("  Default: ", style="dim")
            text.append(self.repo_info.default_branch, style="yellow")
        return text


class StepTitle(Static):
    """"Step N: question" line at the top of each wizard screen."""

    DEFAULT_CSS = """
    StepTitle {
        margin-bottom: 1;
        height: auto;
    }
    """

    def __init__(self, number: Optional[int], title: str, **kwargs):
        text = Text()
        if number is not None:
            text.append(f"Step {number}: ", style="bold cyan")
        text.append(title)
        super().__init__(text, **kwargs)
