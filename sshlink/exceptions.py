"""
sshlink Exception Hierarchy

One exception per failure kind of the provisioning workflow. Each carries
the process exit code the CLI reports for it.
"""

from typing import Optional

from sshlink.constants import (
    EXIT_INVALID_INPUT,
    EXIT_LOCAL_RESOURCE,
    EXIT_KEY_GENERATION,
    EXIT_REMOTE_INSTALL,
    EXIT_CONNECTIVITY,
)


class SSHLinkError(Exception):
    """Base exception for all sshlink errors."""

    exit_code = EXIT_INVALID_INPUT

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


# Input errors


class InvalidArgumentCount(SSHLinkError):
    """Raised when the command does not receive exactly three arguments."""

    def __init__(self, received: int, usage: str):
        self.received = received
        super().__init__(
            f"Expected 3 arguments, got {received}",
            context=usage,
        )


class InvalidAddressFormat(SSHLinkError):
    """Raised when the remote address is not a dotted-quad IPv4 address."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid IP address format: {address}")


class InvalidHostAlias(SSHLinkError):
    """Raised when the host alias cannot be used as a path component."""

    def __init__(self, alias: str, reason: str):
        self.alias = alias
        super().__init__(f"Invalid host alias: {alias!r}", context=reason)


class InvalidRemoteUser(SSHLinkError):
    """Raised when the remote username cannot be used as a login name."""

    def __init__(self, user: str, reason: str):
        self.user = user
        super().__init__(f"Invalid username: {user!r}", context=reason)


class ConfigurationError(SSHLinkError):
    """Raised when the sshlink configuration file is invalid."""

    pass


# Local resource errors


class DirectoryCreateFailed(SSHLinkError):
    """Raised when the credential store directory cannot be created."""

    exit_code = EXIT_LOCAL_RESOURCE


class AclApplyFailed(SSHLinkError):
    """Raised when the default ACL cannot be applied to the store."""

    exit_code = EXIT_LOCAL_RESOURCE


class ConfigWriteFailed(SSHLinkError):
    """Raised when the per-host config file cannot be written."""

    exit_code = EXIT_LOCAL_RESOURCE


class GlobalConfigUpdateFailed(SSHLinkError):
    """Raised when the global ssh config cannot be created or replaced."""

    exit_code = EXIT_LOCAL_RESOURCE


# Tooling, network and diagnostic errors


class KeyGenerationFailed(SSHLinkError):
    """Raised when key pair generation fails."""

    exit_code = EXIT_KEY_GENERATION


class KeyPairExists(KeyGenerationFailed):
    """Raised when a partial key pair is in the way of generation."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Incomplete key pair found at {path}",
            context="Run again with --force to regenerate it",
        )


class RemoteKeyInstallFailed(SSHLinkError):
    """Raised when the public key cannot be installed on the remote host."""

    exit_code = EXIT_REMOTE_INSTALL


class ConnectivityCheckFailed(SSHLinkError):
    """Raised when the final connection test fails. Setup itself is complete."""

    exit_code = EXIT_CONNECTIVITY
