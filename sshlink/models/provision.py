"""
Provisioning Models

Dataclass models for a single provisioning run.
"""

from dataclasses import dataclass
from pathlib import Path

from sshlink.constants import PUBLIC_KEY_SUFFIX


@dataclass(frozen=True)
class ProvisionRequest:
    """Validated input of one provisioning run."""

    host_alias: str
    remote_address: str
    remote_user: str
    local_user: str

    @property
    def remote_target(self) -> str:
        """Get remote login string (user@address)."""
        return f"{self.remote_user}@{self.remote_address}"

    def __repr__(self) -> str:
        return f"ProvisionRequest(alias={self.host_alias}, target={self.remote_target})"


@dataclass(frozen=True)
class KeyPair:
    """Private/public key file locations inside a credential store."""

    private_key_path: Path

    @property
    def public_key_path(self) -> Path:
        """Public key lives next to the private key with a .pub suffix."""
        return self.private_key_path.with_name(
            self.private_key_path.name + PUBLIC_KEY_SUFFIX
        )

    @property
    def exists(self) -> bool:
        """Check if both halves of the pair are on disk."""
        return self.private_key_path.exists() and self.public_key_path.exists()

    @property
    def partially_exists(self) -> bool:
        """Check if exactly one half of the pair is on disk."""
        return self.private_key_path.exists() != self.public_key_path.exists()


@dataclass(frozen=True)
class HostConfigStanza:
    """A `Host` block for one alias."""

    host: str
    hostname: str
    user: str
    identity_file: Path

    def render(self) -> str:
        """Render the stanza in ssh_config syntax."""
        return (
            f"Host {self.host}\n"
            f"    HostName {self.hostname}\n"
            f"    User {self.user}\n"
            f"    IdentityFile {self.identity_file}\n"
        )
