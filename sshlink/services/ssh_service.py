"""SSH service for installing keys on remote hosts and testing logins."""

from pathlib import Path
from typing import Optional

from sshlink.constants import SSH_BINARY, SSH_COPY_ID_BINARY
from sshlink.models import ExecutionResult
from sshlink.services.command_runner import CommandRunner


class SSHService:
    """Service for SSH operations."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        """
        Initialize SSH service.

        Args:
            runner: Command runner (a fake one in tests)
        """
        self.runner = runner or CommandRunner()

    def copy_id(self, public_key_path: Path, target: str) -> ExecutionResult:
        """
        Append a public key to the remote user's authorized keys.

        Runs attached to the terminal: the first login to a host usually
        needs a password and a host key confirmation.

        Args:
            public_key_path: Local .pub file
            target: Remote login (user@address)

        Returns:
            ExecutionResult of the ssh-copy-id call
        """
        return self.runner.run(
            [SSH_COPY_ID_BINARY, "-i", str(public_key_path), target],
            capture_output=False,
        )

    def check_connection(
        self,
        host_alias: str,
        config_file: Path,
        connect_timeout: Optional[int] = None,
    ) -> ExecutionResult:
        """
        Log in through the configured alias and run a no-op.

        Only the alias is passed so the lookup goes through the given ssh
        config, which is the one this run just updated. BatchMode makes a
        missing key fail instead of prompting.

        Args:
            host_alias: Alias from the generated Host stanza
            config_file: Global ssh config to read (passed with -F)
            connect_timeout: Optional ConnectTimeout in seconds

        Returns:
            ExecutionResult of the ssh call
        """
        argv = [SSH_BINARY, "-o", "BatchMode=yes"]
        if connect_timeout:
            argv.extend(["-o", f"ConnectTimeout={connect_timeout}"])
        argv.extend(["-F", str(config_file), host_alias, "true"])
        return self.runner.run(argv)
