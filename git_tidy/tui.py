"""Interactive TUI for git-tidy using Textual."""

import asyncio
from typing import List

from textual import work
from textual.app import App
from textual.binding import Binding
from textual.screen import Screen

from .__version__ import __version__
from .core import GitTidy
from .logging_config import get_logger
from .models.branch import Branch, BranchScope, FilterOptions, RepoInfo
from .ui.screens import (
    BranchSelectScreen,
    ConfirmScreen,
    CriteriaScreen,
    ErrorScreen,
    ExecutionScreen,
    LoadingScreen,
    ScopeScreen,
    SummaryScreen,
)
from .wizard import Wizard, WizardStep

logger = get_logger(__name__)


class GitTidyApp(App):
    """Interactive branch cleanup wizard.

    Screens call back into the handlers below; each handler feeds the wizard
    state machine and then shows the screen for whatever step it lands on.
    """

    TITLE = "git-tidy"
    SUB_TITLE = f"v{__version__}"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, tidy: GitTidy, repo_info: RepoInfo):
        super().__init__()
        self.tidy = tidy
        self.wizard = Wizard(execute=tidy.config.execute, auto_confirm=tidy.config.yes)
        self.wizard.initialized(repo_info)

    def on_mount(self) -> None:
        self.push_screen(self._screen_for_step())

    def _screen_for_step(self) -> Screen:
        wizard = self.wizard
        step = wizard.step
        if step is WizardStep.SCOPE:
            return ScopeScreen()
        if step is WizardStep.CRITERIA:
            return CriteriaScreen(self.tidy.config, wizard.filters)
        if step is WizardStep.LOADING:
            return LoadingScreen("Fetching branches...")
        if step is WizardStep.SELECT:
            return BranchSelectScreen(wizard.candidates, wizard.all_branches)
        if step is WizardStep.CONFIRM:
            return ConfirmScreen(wizard.selection, wizard.is_dry_run)
        if step is WizardStep.EXECUTE:
            return ExecutionScreen(wizard.selection, wizard.is_dry_run)
        if step is WizardStep.SUMMARY:
            return SummaryScreen(wizard.summary, wizard.is_dry_run)
        if step is WizardStep.ERROR:
            return ErrorScreen(wizard.error or "Unknown error occurred")
        raise RuntimeError(f"No screen for step {step.value}")

    def _show_current_step(self) -> None:
        if self.wizard.step is WizardStep.DONE:
            self.exit(return_code=1 if self.wizard.error else 0)
            return

        self.switch_screen(self._screen_for_step())

        if self.wizard.step is WizardStep.LOADING:
            self.load_branches()

    # Handlers called by the step screens

    def choose_scope(self, scope: BranchScope) -> None:
        self.wizard.choose_scope(scope)
        self._show_current_step()

    def submit_criteria(self, filters: FilterOptions) -> None:
        self.wizard.submit_criteria(filters)
        self._show_current_step()

    def select_branches(self, branches: List[Branch]) -> None:
        self.wizard.select(branches)
        self._show_current_step()

    def confirm(self) -> None:
        self.wizard.confirm()
        self._show_current_step()

    def run_for_real(self) -> None:
        self.wizard.run_for_real()
        self._show_current_step()

    def go_back(self) -> None:
        self.wizard.back()
        self._show_current_step()

    def exit_wizard(self) -> None:
        self.wizard.exit()
        self._show_current_step()

    # Background work

    @work(exclusive=True, thread=False)
    async def load_branches(self) -> None:
        """Discover and filter branches off the event loop."""
        try:
            all_branches, candidates = await asyncio.to_thread(
                self.tidy.load_branches, self.wizard.scope, self.wizard.filters
            )
        except Exception as e:
            logger.error(f"Error loading branches: {e}", exc_info=True)
            self.wizard.fail(str(e) or "Failed to fetch branches")
            self._show_current_step()
            return

        self.wizard.branches_loaded(all_branches, candidates)
        self._show_current_step()

    @work(exclusive=True, thread=False)
    async def run_deletion(self, screen: ExecutionScreen) -> None:
        """Run the executor over the selection; the summary arrives once, at the end.

        Started by the execution screen once it is mounted.
        """
        dry_run = self.wizard.is_dry_run

        def on_progress(result, completed, total):
            self.call_from_thread(screen.add_result, result, completed, total)

        summary = await asyncio.to_thread(
            self.tidy.execute, self.wizard.selection, dry_run, on_progress
        )
        # Let the final state show for a moment
        await asyncio.sleep(0.5)
        self.wizard.finish_execution(summary)
        self._show_current_step()

    async def action_quit(self) -> None:
        """Quit, except while branches are being deleted (no mid-run cancellation)."""
        if self.wizard.step is WizardStep.EXECUTE:
            self.notify("Deletion in progress - wait for it to finish", severity="warning")
            return
        self.exit()
