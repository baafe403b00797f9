"""
Logging system for sshlink
Provides per-run log files with clean console output
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TextIO

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from sshlink.models import ExecutionResult
from sshlink.utils import strip_ansi

console = Console()


class ProvisionLogger:
    """
    Manages logging for a provisioning run
    - Writes all output to a log file in real-time
    - Shows clean progress UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        host_alias: str,
        operation: str,
        log_dir: Path,
        verbose: bool = False,
        output: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            host_alias: Host alias the run provisions
            operation: Operation name (e.g., 'setup')
            log_dir: Root directory for log files
            verbose: If True, show all output in console
            output: Console to render to (module console by default)
        """
        self.host_alias = host_alias
        self.operation = operation
        self.verbose = verbose
        self.console = output or console
        self.log_file: Optional[TextIO] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: {log_dir}/{alias}/{date}/{time}_{operation}.log
        now = datetime.now()
        alias_logs_dir = Path(log_dir) / host_alias / now.strftime("%Y-%m-%d")
        alias_logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = alias_logs_dir / f"{now.strftime('%H-%M-%S')}_{operation}.log"

        self.log_file = open(self.log_path, "w", buffering=1)
        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
sshlink Provisioning Log
{"=" * 80}
Host alias: {self.host_alias}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{message}[/dim]")
            else:
                self.console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file; shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        if self.log_file:
            for line in strip_ansi(output).splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if self.verbose:
            self.console.print(output, markup=False)

    def log_result(self, result: ExecutionResult):
        """Log a finished tool invocation with its captured output."""
        self.log_command(result.command)
        self.log_output(result.stdout, "stdout")
        self.log_output(result.stderr, "stderr")
        self.log(
            f"Exit status {result.returncode} ({result.duration_seconds:.2f}s)",
            "DEBUG",
        )

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"
        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            self.console.print()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]", highlight=False)
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]", highlight=False)

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{step_name}[/white]", highlight=False
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {message}[/dim]", highlight=False)

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(
                f"  [yellow]⚠[/yellow] [dim]{message}[/dim]", highlight=False
            )

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None


def run_with_progress(
    logger: Optional[ProvisionLogger],
    action: Callable[[], ExecutionResult],
    description: str,
) -> ExecutionResult:
    """
    Run a captured tool invocation behind a spinner.

    Args:
        logger: ProvisionLogger instance (None runs the action silently)
        action: Zero-argument callable returning an ExecutionResult
        description: Description for progress indicator

    Returns:
        The action's ExecutionResult
    """
    if logger is None:
        return action()

    if logger.verbose:
        result = action()
        logger.log_result(result)
        return result

    spinner = Spinner("dots", text=f"[cyan]{description}...[/cyan]")
    padded_spinner = Padding(spinner, (0, 0, 0, 2))

    with Live(padded_spinner, console=logger.console, refresh_per_second=10) as live:
        result = action()
        logger.log_result(result)

        if result.is_success:
            checkmark = Text("  ✓ ", style="dim")
            checkmark.append(description, style="dim")
            live.update(checkmark)
        else:
            x_mark = Text("  ✗ ", style="red")
            x_mark.append(description, style="dim")
            live.update(x_mark)

    return result
