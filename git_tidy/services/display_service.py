"""Console output for the outcome of a run"""
from rich.console import Console
from rich.table import Table

from git_tidy.constants import SYMBOL_FAILURE, SYMBOL_SKIPPED, SYMBOL_SUCCESS
from git_tidy.formatters.date import format_date
from git_tidy.logging_config import get_logger
from git_tidy.models.deletion import DeletionSummary

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def display_summary(self, summary: DeletionSummary, dry_run: bool) -> None:
        """Print a table of every processed branch followed by the counts."""
        title = "Dry run" if dry_run else "Cleanup"
        table = Table(title=f"{title}: {summary.total} branch(es) processed")
        table.add_column("")
        table.add_column("Branch")
        table.add_column("Last commit")
        table.add_column("Local", justify="center")
        table.add_column("Remote", justify="center")
        table.add_column("Error")

        for result in summary.results:
            table.add_row(
                SYMBOL_SUCCESS if result.success else SYMBOL_FAILURE,
                result.branch.name,
                format_date(result.branch.last_commit_date),
                SYMBOL_SUCCESS if result.deleted_local else "",
                SYMBOL_SUCCESS if result.deleted_remote else "",
                result.error or "",
                style=None if result.success else "red",
            )

        console.print(table)

        verb = "would be deleted" if dry_run else "deleted successfully"
        console.print(f"[green]{SYMBOL_SUCCESS}[/green] {summary.successful} branch(es) {verb}")
        if summary.failed:
            console.print(f"[red]{SYMBOL_FAILURE} {summary.failed} branch(es) failed[/red]")
        if summary.skipped:
            console.print(f"[dim]{SYMBOL_SKIPPED} {summary.skipped} branch(es) skipped[/dim]")
        if dry_run and summary.successful:
            console.print("[dim]Run again with --execute to delete these branches.[/dim]")

        logger.debug(
            f"Displayed summary: total={summary.total} successful={summary.successful} "
            f"failed={summary.failed}"
        )
