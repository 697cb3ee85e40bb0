"""Wizard step screens for git-tidy TUI."""

from typing import TYPE_CHECKING, Callable, List, Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Footer,
    Input,
    LoadingIndicator,
    OptionList,
    ProgressBar,
    SelectionList,
    Static,
)
from textual.widgets.option_list import Option
from textual.widgets.selection_list import Selection

from git_tidy.constants import MAX_FAILED_ITEMS, MAX_PROGRESS_ITEMS
from git_tidy.formatters import format_branch_hint, format_deletion_items, format_result_line
from git_tidy.models.branch import Branch, BranchScope, FilterOptions
from git_tidy.models.deletion import DeletionResult, DeletionSummary
from git_tidy.services.branch_analyzer import get_branch_stats, sort_by_age, sort_by_name
from git_tidy.ui.widgets import RepoHeader, StepTitle

if TYPE_CHECKING:
    from git_tidy.tui import GitTidyApp


class WizardScreen(Screen):
    """Base for step screens: repository header on top, key hints at the bottom."""

    DEFAULT_CSS = """
    WizardScreen {
        padding: 1 2;
    }

    .hint {
        color: $text-muted;
        margin-top: 1;
        height: auto;
    }

    .warning {
        color: $warning;
        text-style: bold;
    }

    .danger {
        color: $error;
        text-style: bold;
    }
    """

    @property
    def tidy_app(self) -> "GitTidyApp":
        return self.app  # type: ignore[return-value]

    def compose_header(self) -> ComposeResult:
        wizard = self.tidy_app.wizard
        yield RepoHeader(wizard.repo_info, wizard.is_dry_run)


class ScopeScreen(WizardScreen):
    """Step 1: local, remote or both."""

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        yield StepTitle(1, "What would you like to clean up?")
        yield OptionList(
            Option("Both local and remote branches", id=BranchScope.BOTH.value),
            Option("Local branches only", id=BranchScope.LOCAL.value),
            Option("Remote branches only", id=BranchScope.REMOTE.value),
            id="scope-options",
        )
        yield Static("Use ↑↓ to navigate, Enter to select", classes="hint")
        yield Footer()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.tidy_app.choose_scope(BranchScope(event.option.id))


class PromptScreen(ModalScreen[Optional[str]]):
    """Ask for one value; dismisses with None on Escape."""

    DEFAULT_CSS = """
    PromptScreen {
        align: center middle;
    }

    #prompt-dialog {
        width: 70%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #prompt-error {
        color: $error;
        height: auto;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Back")]

    def __init__(
        self,
        question: str,
        default: str,
        validate: Optional[Callable[[str], Optional[str]]] = None,
        hint: str = "",
    ):
        """
        Args:
            question: Text shown above the input
            default: Pre-filled value
            validate: Returns an error message for invalid input, None if valid
            hint: Dim help line under the input
        """
        super().__init__()
        self.question = question
        self.default = default
        self.validate = validate
        self.hint = hint

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog"):
            yield Static(Text(self.question, style="cyan"))
            yield Input(value=self.default, id="prompt-input")
            yield Static("", id="prompt-error")
            if self.hint:
                yield Static(Text(self.hint, style="dim"))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        error = self.validate(value) if self.validate else None
        if error:
            self.query_one("#prompt-error", Static).update(error)
            return
        self.dismiss(value)

    def action_cancel(self) -> None:
        self.dismiss(None)


def validate_positive_int(value: str) -> Optional[str]:
    """Error message unless value is an integer greater than zero."""
    try:
        number = int(value)
    except ValueError:
        return "Please enter a valid number greater than 0"
    if number <= 0:
        return "Please enter a valid number greater than 0"
    return None


class CriteriaScreen(WizardScreen):
    """Step 2: which filters to apply, then their parameters."""

    BINDINGS = [
        Binding("enter", "submit", "Continue", priority=True),
        Binding("escape", "back", "Back"),
    ]

    def __init__(self, config, previous: FilterOptions):
        """
        Args:
            config: Run configuration holding the suggested day counts and pattern
            previous: Filters from an earlier pass through this step
        """
        super().__init__()
        self.stale_days = previous.stale_days if previous.stale else config.stale_days
        self.age_days = previous.age_days if previous.age else config.age_days
        self.pattern = previous.pattern_value or config.pattern
        self._chosen: List[str] = []
        self._pending: List[str] = []

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        yield StepTitle(2, "Which branches should be included? (select multiple)")
        yield SelectionList[str](
            Selection("Merged branches (already merged into default branch)", "merged"),
            Selection(f"Stale branches (no commits in {self.stale_days} days)", "stale"),
            Selection(f"Branches older than {self.age_days} days", "age"),
            Selection(f"Pattern matching: {self.pattern}", "pattern"),
            id="criteria-list",
        )
        yield Static(
            "Use ↑↓ to navigate, Space to toggle, Enter to confirm. "
            "Nothing selected shows every deletable branch. Press Esc to go back",
            classes="hint",
        )
        yield Footer()

    def action_back(self) -> None:
        self.tidy_app.go_back()

    def action_submit(self) -> None:
        self._chosen = list(self.query_one("#criteria-list", SelectionList).selected)
        self._pending = [name for name in ("stale", "age", "pattern") if name in self._chosen]
        self._ask_next()

    def _ask_next(self) -> None:
        if not self._pending:
            self._finish()
            return

        field = self._pending[0]
        if field == "stale":
            screen = PromptScreen(
                "How many days without commits is considered stale?",
                str(self.stale_days),
                validate_positive_int,
                hint="days",
            )
        elif field == "age":
            screen = PromptScreen(
                "How many days old should a branch be?",
                str(self.age_days),
                validate_positive_int,
                hint="days",
            )
        else:
            screen = PromptScreen(
                "Enter branch name pattern (use * as wildcard):",
                self.pattern,
                hint="Examples: feature/*, hotfix/*, *-old, test-*",
            )
        self.app.push_screen(screen, self._on_prompt_answered)

    def _on_prompt_answered(self, value: Optional[str]) -> None:
        if value is None:
            # Escape from a prompt returns to the filter list
            self._pending = []
            return

        field = self._pending.pop(0)
        if field == "stale":
            self.stale_days = int(value)
        elif field == "age":
            self.age_days = int(value)
        else:
            self.pattern = value
        self._ask_next()

    def _finish(self) -> None:
        filters = FilterOptions(
            merged="merged" in self._chosen,
            stale="stale" in self._chosen,
            stale_days=self.stale_days,
            age="age" in self._chosen,
            age_days=self.age_days,
            pattern="pattern" in self._chosen,
            pattern_value=self.pattern,
        )
        self.tidy_app.submit_criteria(filters)


class LoadingScreen(WizardScreen):
    """Shown while branches are discovered and analyzed."""

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        yield Static(self.message, id="loading-message")
        yield LoadingIndicator()


class BranchSelectScreen(WizardScreen):
    """Step 3: pick the branches to delete."""

    BINDINGS = [
        Binding("enter", "submit", "Continue", priority=True),
        Binding("escape", "back", "Back"),
        Binding("a", "select_all", "Select all"),
        Binding("n", "select_none", "Select none"),
        Binding("i", "invert", "Invert"),
        Binding("s", "cycle_sort", "Change sort"),
    ]

    SORT_MODES = ["discovery", "age", "name"]

    def __init__(self, branches: List[Branch], all_branches: List[Branch]):
        super().__init__()
        self.branches = branches
        self.all_branches = all_branches
        self.sort_mode = "discovery"

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        if not self.branches:
            yield StepTitle(3, "Select branches to delete")
            yield Static("No branches match your criteria.", classes="warning")
            yield Static("Press Esc to go back and adjust filters", classes="hint")
            yield Footer()
            return

        yield StepTitle(3, f"Select branches to delete ({len(self.branches)} found)")
        stats = get_branch_stats(self.all_branches)
        yield Static(
            Text(
                f"Scanned {stats['total']} branches: {stats['local']} local, "
                f"{stats['remote']} remote, {stats['merged']} merged, "
                f"{stats['protected']} protected",
                style="dim",
            ),
            id="branch-stats",
        )
        yield SelectionList[str](*self._selections(), id="branch-list")
        yield Static(id="selection-status", classes="hint")
        yield Footer()

    def on_mount(self) -> None:
        self._update_status()

    def _ordered(self) -> List[Branch]:
        if self.sort_mode == "age":
            return sort_by_age(self.branches)
        if self.sort_mode == "name":
            return sort_by_name(self.branches)
        return list(self.branches)

    def _selections(self, selected: Optional[List[str]] = None) -> List[Selection]:
        chosen = set(selected or [])
        selections = []
        for branch in self._ordered():
            prompt = Text.assemble(branch.name, " ", (format_branch_hint(branch), "dim"))
            selections.append(Selection(prompt, branch.name, branch.name in chosen))
        return selections

    def _list(self) -> Optional[SelectionList]:
        try:
            return self.query_one("#branch-list", SelectionList)
        except NoMatches:
            return None

    def _update_status(self) -> None:
        selection_list = self._list()
        if selection_list is None:
            return
        count = len(selection_list.selected)
        text = Text(f"{count} branch(es) selected", style="green" if count else "dim")
        if count:
            text.append(" - Press Enter to continue", style="dim")
        text.append(f"   sorted by {self.sort_mode}", style="dim")
        self.query_one("#selection-status", Static).update(text)

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        self._update_status()

    def action_select_all(self) -> None:
        if self._list() is not None:
            self._list().select_all()

    def action_select_none(self) -> None:
        if self._list() is not None:
            self._list().deselect_all()

    def action_invert(self) -> None:
        if self._list() is not None:
            self._list().toggle_all()

    def action_cycle_sort(self) -> None:
        selection_list = self._list()
        if selection_list is None:
            return
        index = self.SORT_MODES.index(self.sort_mode)
        self.sort_mode = self.SORT_MODES[(index + 1) % len(self.SORT_MODES)]
        selected = list(selection_list.selected)
        selection_list.clear_options()
        selection_list.add_options(self._selections(selected))
        self._update_status()

    def action_back(self) -> None:
        self.tidy_app.go_back()

    def action_submit(self) -> None:
        selection_list = self._list()
        if selection_list is None or not selection_list.selected:
            self.notify("Select at least one branch", severity="warning")
            return
        chosen = set(selection_list.selected)
        # Keep the order the branches were listed in
        self.tidy_app.select_branches([b for b in self._ordered() if b.name in chosen])


class ConfirmScreen(WizardScreen):
    """Step 4: last look before anything happens."""

    BINDINGS = [
        Binding("enter", "confirm", "Confirm", priority=True),
        Binding("y", "confirm", "Confirm", show=False),
        Binding("escape", "back", "Cancel"),
        Binding("n", "back", "Cancel", show=False),
    ]

    def __init__(self, branches: List[Branch], dry_run: bool):
        super().__init__()
        self.branches = branches
        self.dry_run = dry_run

    def compose(self) -> ComposeResult:
        local_count = sum(1 for b in self.branches if b.is_local)
        remote_count = sum(1 for b in self.branches if b.is_remote)

        yield from self.compose_header()
        yield StepTitle(4, "Confirm deletion")
        yield Static(Text(f"Ready to delete {len(self.branches)} branch(es)", style="bold"))
        yield Static(Text.assemble(
            "Local: ", (str(local_count), "cyan"), "   Remote: ", (str(remote_count), "magenta")
        ))
        if self.dry_run:
            yield Static("DRY RUN MODE - No branches will actually be deleted", classes="warning")
        else:
            yield Static("WARNING: This will permanently delete these branches!", classes="danger")
        yield Static(Text("Branches to delete:", style="dim"))
        yield Static(Text(format_deletion_items(self.branches), style="dim"))
        yield Static("[Enter/Y] Confirm   [Esc/N] Cancel", classes="hint")
        yield Footer()

    def action_confirm(self) -> None:
        self.tidy_app.confirm()

    def action_back(self) -> None:
        self.tidy_app.go_back()


class ExecutionScreen(WizardScreen):
    """Step 5: progress while the executor works through the selection."""

    def __init__(self, branches: List[Branch], dry_run: bool):
        super().__init__()
        self.branches = branches
        self.dry_run = dry_run
        self.results: List[DeletionResult] = []

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        yield StepTitle(5, "Simulating deletion..." if self.dry_run else "Deleting branches...")
        yield ProgressBar(total=len(self.branches), show_eta=False, id="deletion-progress")
        yield Static(id="current-branch")
        yield Static(Text("Results:", style="dim"))
        yield VerticalScroll(Static(id="results"))

    def on_mount(self) -> None:
        self._show_current()
        self.tidy_app.run_deletion(self)

    def _show_current(self) -> None:
        completed = len(self.results)
        current = self.query_one("#current-branch", Static)
        if completed < len(self.branches):
            verb = "Processing" if self.dry_run else "Deleting"
            current.update(Text.assemble(
                f"{verb} {self.branches[completed].name} ",
                (f"({completed + 1}/{len(self.branches)})", "dim"),
            ))
        else:
            done = "Simulation" if self.dry_run else "Deletion"
            current.update(Text(f"{done} complete!", style="green"))

    def add_result(self, result: DeletionResult, completed: int, total: int) -> None:
        """Live progress hook, called once per processed branch."""
        self.results.append(result)
        self.query_one("#deletion-progress", ProgressBar).update(progress=completed)

        lines = Text()
        for item in self.results[-MAX_PROGRESS_ITEMS:]:
            lines.append(format_result_line(item) + "\n", style="green" if item.success else "red")
        if len(self.results) > MAX_PROGRESS_ITEMS:
            lines.append(f"... and {len(self.results) - MAX_PROGRESS_ITEMS} more", style="dim")
        self.query_one("#results", Static).update(lines)
        self._show_current()


class SummaryScreen(WizardScreen):
    """Final counts, failures, and the dry-run to real-run switch."""

    BINDINGS = [
        Binding("d", "delete_for_real", "Delete for real"),
        Binding("q", "quit_wizard", "Quit"),
        Binding("escape", "quit_wizard", "Quit", show=False),
    ]

    def __init__(self, summary: DeletionSummary, dry_run: bool):
        super().__init__()
        self.summary = summary
        self.dry_run = dry_run

    @property
    def can_run_for_real(self) -> bool:
        return self.dry_run and self.summary.successful > 0

    def compose(self) -> ComposeResult:
        summary = self.summary
        yield from self.compose_header()
        yield Static(Text(
            "Dry Run Complete!" if self.dry_run else "Cleanup Complete!", style="bold cyan"
        ))

        verb = "would be deleted" if self.dry_run else "deleted successfully"
        counts = Text()
        counts.append("✓ ", style="green" if summary.successful else "dim")
        counts.append(f"{summary.successful} branch(es) {verb}")
        if summary.failed:
            counts.append(f"\n✗ {summary.failed} branch(es) failed", style="red")
        if summary.skipped:
            counts.append(f"\n○ {summary.skipped} branch(es) skipped", style="dim")
        yield Static(counts)

        failures = summary.failures
        if failures:
            lines = Text("Failed branches:\n", style="red")
            for result in failures[:MAX_FAILED_ITEMS]:
                lines.append(f"  - {result.branch.name}: {result.error}\n", style="red")
            if len(failures) > MAX_FAILED_ITEMS:
                lines.append(f"  ... and {len(failures) - MAX_FAILED_ITEMS} more", style="dim")
            yield Static(lines)

        if self.can_run_for_real:
            yield Static(Text.assemble(("[d] Delete for real", "bold red"), "   ", ("[q] Quit", "dim")))
        else:
            yield Static("Press any key to exit", classes="hint")
        yield Footer()

    def on_key(self, event: events.Key) -> None:
        # Without a real run to offer, any key exits
        if not self.can_run_for_real and event.key not in ("d", "q", "escape"):
            event.stop()
            self.tidy_app.exit_wizard()

    def action_delete_for_real(self) -> None:
        if self.can_run_for_real:
            self.tidy_app.run_for_real()
        else:
            self.tidy_app.exit_wizard()

    def action_quit_wizard(self) -> None:
        self.tidy_app.exit_wizard()


class ErrorScreen(WizardScreen):
    """Fatal error; any key exits."""

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield from self.compose_header()
        yield Static(Text(f"Error: {self.message}", style="bold red"))
        yield Static("Press any key to exit", classes="hint")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.tidy_app.exit_wizard()
