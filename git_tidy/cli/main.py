"""Entry point for git-tidy"""

import os
import sys

from rich.console import Console

from git_tidy.cli.args import parse_args
from git_tidy.config import Config
from git_tidy.core import GitTidy
from git_tidy.exceptions import GitTidyError
from git_tidy.logging_config import get_log_file, setup_logging
from git_tidy.services.display_service import DisplayService

console = Console()


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    tidy = None
    try:
        parsed_args = parse_args(argv)

        # The TUI owns the terminal, so log records go to a file
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=True)

        config = Config(
            execute=parsed_args.execute,
            yes=parsed_args.yes,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            remote_name=parsed_args.remote,
            default_branch=parsed_args.default_branch,
            protected_branches=parsed_args.protected,
            stale_days=parsed_args.stale_days,
            age_days=parsed_args.age_days,
            github_token=parsed_args.token,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[dim]Logging to {get_log_file()}[/dim]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}")

        tidy = GitTidy(os.getcwd(), config)
        with console.status("Detecting repository..."):
            repo_info = tidy.initialize()

        from git_tidy.tui import GitTidyApp

        app = GitTidyApp(tidy, repo_info)
        app.run()

        if app.wizard.error:
            console.print(f"[red]Error: {app.wizard.error}[/red]")
        elif app.wizard.summary is not None:
            DisplayService().display_summary(app.wizard.summary, dry_run=app.wizard.is_dry_run)

        return app.return_code or 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (GitTidyError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1
    finally:
        if tidy is not None:
            tidy.close()


if __name__ == "__main__":
    sys.exit(main())
