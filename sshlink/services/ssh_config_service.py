"""
SSH client config service

Writes per-host config fragments and wires them into the global ssh config
through an Include line.
"""

import os
from pathlib import Path

from sshlink.constants import HOST_CONFIG_NAME, SSH_CONFIG_PERMISSIONS
from sshlink.exceptions import ConfigWriteFailed, GlobalConfigUpdateFailed
from sshlink.models import HostConfigStanza, KeyPair, ProvisionRequest
from sshlink.utils import atomic_write_text


def include_line(host_config_path: Path) -> str:
    """Render the Include directive for a per-host config file."""
    return f"Include {host_config_path}"


class SSHConfigService:
    """Config composer and global config merger."""

    @staticmethod
    def host_config_path(store: Path) -> Path:
        """Per-host config file inside a credential store."""
        return store / HOST_CONFIG_NAME

    @staticmethod
    def build_stanza(request: ProvisionRequest, key_pair: KeyPair) -> HostConfigStanza:
        """Build the Host stanza for a request."""
        return HostConfigStanza(
            host=request.host_alias,
            hostname=request.remote_address,
            user=request.remote_user,
            identity_file=key_pair.private_key_path,
        )

    def write_host_config(self, stanza: HostConfigStanza, path: Path) -> None:
        """
        Write the stanza as the whole content of the per-host file.

        Any previous content is replaced, so reruns converge.

        Raises:
            ConfigWriteFailed: On any filesystem error
        """
        try:
            path.write_text(stanza.render(), encoding="utf-8")
        except OSError as e:
            raise ConfigWriteFailed(f"Failed to write {path}", context=str(e))

    def ensure_global_config(self, global_path: Path) -> Path:
        """
        Create the global config if absent and force owner-only permissions.

        Returns:
            The real file behind global_path (symlinks resolved)

        Raises:
            GlobalConfigUpdateFailed: If the file cannot be created or chmod-ed
        """
        try:
            target = global_path.resolve()
            if not target.exists():
                target.parent.mkdir(parents=True, exist_ok=True)
                fd = os.open(
                    target, os.O_CREAT | os.O_WRONLY, SSH_CONFIG_PERMISSIONS
                )
                os.close(fd)
            target.chmod(SSH_CONFIG_PERMISSIONS)
        except OSError as e:
            raise GlobalConfigUpdateFailed(
                f"Failed to prepare {global_path}", context=str(e)
            )
        return target

    def ensure_include(self, global_path: Path, host_config_path: Path) -> bool:
        """
        Make the global config include the per-host file exactly once.

        If the Include line is already present as a whole line nothing is
        written. Otherwise it is prepended: ssh uses the first value it
        finds for each option, so the new Host block must come before any
        broader patterns further down. The rest of the file is kept byte
        for byte and the file is replaced atomically.

        Args:
            global_path: The user's ssh config
            host_config_path: Per-host config to include

        Returns:
            True if the Include line was added, False if already present

        Raises:
            GlobalConfigUpdateFailed: If reading or replacing the file fails;
                the original file is left untouched
        """
        target = self.ensure_global_config(global_path)
        line = include_line(host_config_path)

        try:
            with open(target, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise GlobalConfigUpdateFailed(f"Failed to read {target}", context=str(e))

        if line in content.split("\n"):
            return False

        try:
            atomic_write_text(target, f"{line}\n{content}")
        except OSError as e:
            raise GlobalConfigUpdateFailed(
                "Failed to update SSH config", context=f"{target}: {e}"
            )
        return True
