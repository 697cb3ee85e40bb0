"""Wizard step sequencing for git-tidy.

The interactive flow is a finite-state machine: every step change goes through
``transition`` and the table below, never through ad-hoc conditionals in the UI.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from git_tidy.exceptions import InvalidTransitionError
from git_tidy.models.branch import Branch, BranchScope, FilterOptions, RepoInfo
from git_tidy.models.deletion import DeletionSummary
from git_tidy.logging_config import get_logger

logger = get_logger(__name__)


class WizardStep(Enum):
    INIT = "init"
    SCOPE = "scope"
    CRITERIA = "criteria"
    LOADING = "loading"
    SELECT = "select"
    CONFIRM = "confirm"
    EXECUTE = "execute"
    SUMMARY = "summary"
    ERROR = "error"
    DONE = "done"


class WizardEvent(Enum):
    INITIALIZED = "initialized"
    FAILED = "failed"
    SCOPE_CHOSEN = "scope_chosen"
    CRITERIA_SUBMITTED = "criteria_submitted"
    BRANCHES_LOADED = "branches_loaded"
    BRANCHES_SELECTED = "branches_selected"
    CONFIRMED = "confirmed"
    EXECUTION_FINISHED = "execution_finished"
    RUN_FOR_REAL = "run_for_real"
    BACK = "back"
    EXIT = "exit"


TRANSITIONS: Dict[Tuple[WizardStep, WizardEvent], WizardStep] = {
    (WizardStep.INIT, WizardEvent.INITIALIZED): WizardStep.SCOPE,
    (WizardStep.INIT, WizardEvent.FAILED): WizardStep.ERROR,
    (WizardStep.SCOPE, WizardEvent.SCOPE_CHOSEN): WizardStep.CRITERIA,
    (WizardStep.CRITERIA, WizardEvent.CRITERIA_SUBMITTED): WizardStep.LOADING,
    (WizardStep.CRITERIA, WizardEvent.BACK): WizardStep.SCOPE,
    (WizardStep.LOADING, WizardEvent.BRANCHES_LOADED): WizardStep.SELECT,
    (WizardStep.LOADING, WizardEvent.FAILED): WizardStep.ERROR,
    (WizardStep.SELECT, WizardEvent.BRANCHES_SELECTED): WizardStep.CONFIRM,
    (WizardStep.SELECT, WizardEvent.BACK): WizardStep.CRITERIA,
    (WizardStep.CONFIRM, WizardEvent.CONFIRMED): WizardStep.EXECUTE,
    (WizardStep.CONFIRM, WizardEvent.BACK): WizardStep.SELECT,
    (WizardStep.EXECUTE, WizardEvent.EXECUTION_FINISHED): WizardStep.SUMMARY,
    (WizardStep.SUMMARY, WizardEvent.RUN_FOR_REAL): WizardStep.EXECUTE,
    (WizardStep.SUMMARY, WizardEvent.EXIT): WizardStep.DONE,
    (WizardStep.ERROR, WizardEvent.EXIT): WizardStep.DONE,
}


def transition(step: WizardStep, event: WizardEvent) -> WizardStep:
    """Return the step that follows ``step`` on ``event``.

    Raises:
        InvalidTransitionError: if the step does not accept the event
    """
    try:
        return TRANSITIONS[(step, event)]
    except KeyError:
        raise InvalidTransitionError(step, event) from None


@dataclass
class Wizard:
    """State of one interactive run.

    Args:
        execute: True when the run was started with --execute
        auto_confirm: True when the run was started with --yes; the confirm
            step is passed through without asking
    """
    execute: bool = False
    auto_confirm: bool = False
    step: WizardStep = WizardStep.INIT
    repo_info: Optional[RepoInfo] = None
    scope: BranchScope = BranchScope.BOTH
    filters: FilterOptions = field(default_factory=FilterOptions)
    all_branches: List[Branch] = field(default_factory=list)
    candidates: List[Branch] = field(default_factory=list)
    selection: List[Branch] = field(default_factory=list)
    summary: Optional[DeletionSummary] = None
    execute_for_real: bool = False
    error: Optional[str] = None

    @property
    def is_dry_run(self) -> bool:
        return not self.execute and not self.execute_for_real

    def dispatch(self, event: WizardEvent) -> WizardStep:
        """Advance the wizard and return the new step."""
        if event is WizardEvent.RUN_FOR_REAL and not self.is_dry_run:
            raise InvalidTransitionError(self.step, event)

        next_step = transition(self.step, event)
        if next_step is WizardStep.CONFIRM and self.auto_confirm:
            logger.debug("Confirmation skipped (--yes)")
            next_step = transition(next_step, WizardEvent.CONFIRMED)

        logger.debug(f"Wizard: {self.step.value} --{event.value}--> {next_step.value}")
        self.step = next_step
        return next_step

    def initialized(self, repo_info: RepoInfo) -> WizardStep:
        self.repo_info = repo_info
        return self.dispatch(WizardEvent.INITIALIZED)

    def fail(self, message: str) -> WizardStep:
        self.error = message
        return self.dispatch(WizardEvent.FAILED)

    def choose_scope(self, scope: BranchScope) -> WizardStep:
        self.scope = scope
        return self.dispatch(WizardEvent.SCOPE_CHOSEN)

    def submit_criteria(self, filters: FilterOptions) -> WizardStep:
        self.filters = filters
        return self.dispatch(WizardEvent.CRITERIA_SUBMITTED)

    def branches_loaded(self, all_branches: List[Branch], candidates: List[Branch]) -> WizardStep:
        self.all_branches = all_branches
        self.candidates = candidates
        return self.dispatch(WizardEvent.BRANCHES_LOADED)

    def select(self, selection: List[Branch]) -> WizardStep:
        if not selection:
            raise InvalidTransitionError(self.step, WizardEvent.BRANCHES_SELECTED)
        self.selection = list(selection)
        return self.dispatch(WizardEvent.BRANCHES_SELECTED)

    def confirm(self) -> WizardStep:
        return self.dispatch(WizardEvent.CONFIRMED)

    def finish_execution(self, summary: DeletionSummary) -> WizardStep:
        self.summary = summary
        return self.dispatch(WizardEvent.EXECUTION_FINISHED)

    def run_for_real(self) -> WizardStep:
        """Repeat the same selection as a real deletion run."""
        step = self.dispatch(WizardEvent.RUN_FOR_REAL)
        self.execute_for_real = True
        self.summary = None
        return step

    def back(self) -> WizardStep:
        return self.dispatch(WizardEvent.BACK)

    def exit(self) -> WizardStep:
        return self.dispatch(WizardEvent.EXIT)
