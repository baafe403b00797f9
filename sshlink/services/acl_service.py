"""Default-ACL capability backed by setfacl."""

from pathlib import Path
from typing import Optional

from sshlink.constants import DEFAULT_ACL_SPEC, SETFACL_BINARY
from sshlink.models import ExecutionResult
from sshlink.services.command_runner import CommandRunner


class AclService:
    """Applies a default ACL to a directory."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def apply_default_acl(
        self, directory: Path, spec: str = DEFAULT_ACL_SPEC
    ) -> ExecutionResult:
        """
        Set the default ACL so files created later inherit it.

        Reapplying the same spec is harmless; setfacl replaces the entries.

        Args:
            directory: Target directory
            spec: ACL entries, e.g. "u::rw,g::-,o::-"

        Returns:
            ExecutionResult of the setfacl call
        """
        return self.runner.run([SETFACL_BINARY, "-d", "-m", spec, str(directory)])
