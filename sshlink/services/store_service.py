"""Credential store management - one locked-down directory per host alias."""

from pathlib import Path
from typing import Optional

from sshlink.constants import SSH_DIR_PERMISSIONS
from sshlink.core.config_loader import ProvisionConfig
from sshlink.exceptions import DirectoryCreateFailed, AclApplyFailed
from sshlink.models import KeyPair
from sshlink.services.acl_service import AclService


class StoreService:
    """
    Creates credential stores and applies their default ACL.

    Responsibilities:
    - Deterministic store path per alias
    - Directory creation (no-op when it already exists)
    - Default ACL so later files are owner read/write only
    """

    def __init__(self, config: ProvisionConfig, acl: Optional[AclService] = None):
        self.config = config
        self.acl = acl or AclService()

    def store_path(self, host_alias: str) -> Path:
        """Get the credential store directory for an alias."""
        return self.config.store_path(host_alias)

    def key_pair(self, host_alias: str) -> KeyPair:
        """Get the key pair location inside the alias' store."""
        return KeyPair(private_key_path=self.store_path(host_alias) / host_alias)

    def ensure_store(self, host_alias: str) -> tuple[Path, bool]:
        """
        Make sure the store exists and carries the default ACL.

        The ACL is applied on every call, existing directory or not.

        Args:
            host_alias: Validated host alias

        Returns:
            Tuple of (store path, whether the directory was created now)

        Raises:
            DirectoryCreateFailed: If the directory cannot be created
            AclApplyFailed: If setfacl fails
        """
        store = self.store_path(host_alias)
        created = not store.is_dir()

        if created:
            try:
                self._ensure_ssh_dir()
                store.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateFailed(
                    f"Failed to create directory {store}", context=str(e)
                )

        result = self.acl.apply_default_acl(store)
        if result.is_failure:
            raise AclApplyFailed(
                f"Failed to set ACL on {store}",
                context=result.output or f"exit status {result.returncode}",
            )

        return store, created

    def _ensure_ssh_dir(self) -> None:
        """Create the ssh directory owner-only if missing."""
        ssh_dir = self.config.ssh_dir
        if not ssh_dir.exists():
            ssh_dir.mkdir(parents=True, exist_ok=True)
            ssh_dir.chmod(SSH_DIR_PERMISSIONS)
