"""Key pair generation backed by ssh-keygen."""

from typing import Optional

from sshlink.constants import KEY_TYPE, SSH_KEYGEN_BINARY
from sshlink.models import ExecutionResult, KeyPair
from sshlink.services.command_runner import CommandRunner


class KeygenService:
    """Generates passphrase-less key pairs for automation."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def generate(self, key_pair: KeyPair, comment: str = "") -> ExecutionResult:
        """
        Generate a new key pair at the given location.

        The caller removes any existing files first; ssh-keygen would
        otherwise stop at its overwrite prompt.

        Args:
            key_pair: Target paths (public key path is derived)
            comment: Key comment, usually user@alias

        Returns:
            ExecutionResult of the ssh-keygen call
        """
        argv = [
            SSH_KEYGEN_BINARY,
            "-t",
            KEY_TYPE,
            "-f",
            str(key_pair.private_key_path),
            "-N",
            "",
            "-q",
        ]
        if comment:
            argv.extend(["-C", comment])
        return self.runner.run(argv)
