#!/usr/bin/env python3
"""sshlink CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: colored CLI help
import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"

from sshlink.commands.setup import setup  # noqa: E402
from sshlink.constants import EXIT_INVALID_INPUT, EXIT_INTERRUPTED  # noqa: E402

console = Console(stderr=True)


def handle_cli_errors(func):
    """Decorator mapping click usage errors and crashes to exit codes."""
    from click.exceptions import Abort, ClickException, UsageError

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(
                f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n",
                highlight=False,
            )
            console.print(
                "[dim]Run[/dim] [cyan]sshlink --help[/cyan] [dim]for usage information[/dim]\n"
            )
            sys.exit(EXIT_INVALID_INPUT)
        except ClickException as e:
            e.show()
            sys.exit(EXIT_INVALID_INPUT)
        except (KeyboardInterrupt, Abort):
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(EXIT_INTERRUPTED)
        except SystemExit:
            raise
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(EXIT_INVALID_INPUT)

    return wrapper


@handle_cli_errors
def main(argv=None):
    """Main entry point with error handling."""
    exit_code = setup.main(args=argv, prog_name="sshlink", standalone_mode=False)
    # --help returns 0 here instead of raising
    if isinstance(exit_code, int):
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
