"""
Base Command Class

Abstract base for sshlink CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Any, Dict
import json

from rich.console import Console
from rich.markup import escape

from sshlink.constants import EXIT_INVALID_INPUT, EXIT_INTERRUPTED
from sshlink.exceptions import SSHLinkError
from sshlink.logger import ProvisionLogger
from sshlink.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error to exit code mapping
    - JSON output support
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = console or Console()
        self.logger: Optional[ProvisionLogger] = None

    def init_logger(
        self, host_alias: str, command_name: str, log_dir: Path
    ) -> Optional[ProvisionLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            host_alias: Host alias the command works on
            command_name: Command name
            log_dir: Root directory for log files

        Returns:
            ProvisionLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = ProvisionLogger(
            host_alias,
            command_name,
            log_dir,
            verbose=self.verbose,
            output=self.console,
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit on error.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {message}[/green]", highlight=False)

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {message}[/red]", highlight=False)

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{message}[/dim]", highlight=False)

    def handle_error(self, error: SSHLinkError) -> None:
        """
        Report a workflow error with consistent formatting.

        Args:
            error: The raised sshlink error
        """
        if self.logger:
            self.logger.log_error(error.message, context=error.context)
            self.print_dim(f"Logs saved to: {self.logger.log_path}")
        else:
            self.print_error(escape(error.message))
            if error.context:
                self.print_dim(escape(error.context))

    def json_error_payload(self, error: SSHLinkError) -> Dict[str, Any]:
        """Build the JSON document reported for a failed run."""
        data = {
            "error": error.message,
            "exit_code": error.exit_code,
            "message": error.message,
        }
        if error.context:
            data["details"] = error.context
        return data

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except SSHLinkError as e:
            if self.json_output:
                self.output_json(self.json_error_payload(e), exit_code=e.exit_code)
            self.handle_error(e)
            raise SystemExit(e.exit_code)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.console.print(
                    f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n"
                )
            raise SystemExit(EXIT_INTERRUPTED)
        except SystemExit:
            raise
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
                self.console.print(
                    f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n"
                )
            raise SystemExit(EXIT_INVALID_INPUT)
        finally:
            if self.logger:
                self.logger.close()
