"""Runs external tools and reports their outcome as an ExecutionResult."""

import shlex
import subprocess
import time
from typing import Sequence

from sshlink.models import ExecutionResult

# Conventional shell status for "command not found"
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Blocking subprocess runner used by every tool-backed service."""

    def run(self, argv: Sequence[str], capture_output: bool = True) -> ExecutionResult:
        """
        Run a command and wait for it to exit.

        Args:
            argv: Program and arguments (no shell)
            capture_output: Capture stdout/stderr; pass False for tools that
                need the terminal (password or host key prompts)

        Returns:
            ExecutionResult with the exit status. A missing program is
            reported as exit status 127 rather than raised.
        """
        command = shlex.join(argv)
        start_time = time.time()

        try:
            result = subprocess.run(
                list(argv),
                capture_output=capture_output,
                text=True,
            )
        except FileNotFoundError:
            return ExecutionResult(
                returncode=COMMAND_NOT_FOUND,
                stderr=f"{argv[0]}: command not found",
                command=command,
                duration_seconds=time.time() - start_time,
            )

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout if capture_output else "",
            stderr=result.stderr if capture_output else "",
            command=command,
            duration_seconds=time.time() - start_time,
        )
