"""
Provisioning workflow

Validation, credential store, key pair, remote install, per-host config,
global Include and connection test, run strictly in that order. The first
failing step stops the run; nothing done by earlier steps is rolled back.
"""

from pathlib import Path
from typing import Optional, Sequence

from sshlink.constants import EXIT_SUCCESS
from sshlink.core.config_loader import ProvisionConfig
from sshlink.core.validator import build_request
from sshlink.exceptions import (
    SSHLinkError,
    KeyGenerationFailed,
    KeyPairExists,
    RemoteKeyInstallFailed,
    ConnectivityCheckFailed,
)
from sshlink.logger import ProvisionLogger, run_with_progress
from sshlink.models import (
    KeyPair,
    ProvisionRequest,
    ProvisionResult,
    ProvisionStage,
)
from sshlink.services import (
    KeygenService,
    SSHService,
    StoreService,
    SSHConfigService,
)


class Provisioner:
    """Runs one provisioning workflow against injected capabilities."""

    def __init__(
        self,
        config: ProvisionConfig,
        store: Optional[StoreService] = None,
        keygen: Optional[KeygenService] = None,
        ssh: Optional[SSHService] = None,
        ssh_config: Optional[SSHConfigService] = None,
        logger: Optional[ProvisionLogger] = None,
    ):
        self.config = config
        self.store = store or StoreService(config)
        self.keygen = keygen or KeygenService()
        self.ssh = ssh or SSHService()
        self.ssh_config = ssh_config or SSHConfigService()
        self.logger = logger
        self.result: Optional[ProvisionResult] = None

    def provision(self, args: Sequence[str], force: bool = False) -> ProvisionResult:
        """
        Validate the arguments and run every step.

        Args:
            args: Raw positional arguments (host_alias, ip_address, username)
            force: Regenerate an existing key pair

        Returns:
            ProvisionResult in stage VERIFIED (or GLOBAL_CONFIG_ENSURED when
            verification is disabled)

        Raises:
            SSHLinkError: The failure of the first step that failed; the
                partial result is kept on self.result
        """
        alias = args[0] if args else ""
        self.result = ProvisionResult(host_alias=alias)

        try:
            request = build_request(args, self.config.local_user)
            self._advance(ProvisionStage.VALIDATED)
            self._run_steps(request, force)
        except SSHLinkError as e:
            self.result.failed_after = self.result.stage
            self.result.stage = ProvisionStage.FAILED
            self.result.exit_code = e.exit_code
            self.result.message = e.message
            raise

        return self.result

    def _run_steps(self, request: ProvisionRequest, force: bool) -> None:
        key_pair = self._prepare_store(request)
        self._provision_key(request, key_pair, force)
        self._install_remote(request, key_pair)
        host_config = self._write_stanza(request, key_pair)
        self._ensure_include(host_config)

        if self.config.verify:
            self._verify(request)
            self.result.message = "Key created, config updated, and connection tested"
        else:
            self.result.message = "Key created and config updated"
        self.result.exit_code = EXIT_SUCCESS

    def _prepare_store(self, request: ProvisionRequest) -> KeyPair:
        store_path = self.store.store_path(request.host_alias)
        self._step("Preparing credential store")
        store, created = self.store.ensure_store(request.host_alias)
        if created:
            self._success(f"Created SSH config directory: {store}")
        self._success(f"Default ACL applied to {store}")

        key_pair = self.store.key_pair(request.host_alias)
        self.result.paths.update(
            {
                "store": str(store_path),
                "private_key": str(key_pair.private_key_path),
                "public_key": str(key_pair.public_key_path),
            }
        )
        self._advance(ProvisionStage.STORE_READY)
        return key_pair

    def _provision_key(
        self, request: ProvisionRequest, key_pair: KeyPair, force: bool
    ) -> None:
        self._step("Generating SSH key pair")

        if not force:
            if key_pair.exists:
                self.result.key_reused = True
                self._warning(
                    f"Reusing existing key pair {key_pair.private_key_path} "
                    "(use --force to regenerate)"
                )
                self._advance(ProvisionStage.KEY_GENERATED)
                return
            if key_pair.partially_exists:
                raise KeyPairExists(str(key_pair.private_key_path))
        else:
            self._remove_key_pair(key_pair)

        result = run_with_progress(
            self.logger,
            lambda: self.keygen.generate(
                key_pair, comment=f"{request.local_user}@{request.host_alias}"
            ),
            f"ssh-keygen {self.config.key_type}",
        )
        if result.is_failure:
            raise KeyGenerationFailed(
                "SSH key generation failed",
                context=result.output or f"exit status {result.returncode}",
            )

        self._success(f"Key pair written to {key_pair.private_key_path}")
        self._advance(ProvisionStage.KEY_GENERATED)

    def _remove_key_pair(self, key_pair: KeyPair) -> None:
        for path in (key_pair.private_key_path, key_pair.public_key_path):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise KeyGenerationFailed(
                    f"Cannot remove existing key {path}", context=str(e)
                )
            self._log(f"Removed existing key file {path}")

    def _install_remote(self, request: ProvisionRequest, key_pair: KeyPair) -> None:
        self._step(f"Copying SSH public key to {request.remote_target}")

        result = self.ssh.copy_id(key_pair.public_key_path, request.remote_target)
        if self.logger:
            self.logger.log_result(result)
        if result.is_failure:
            raise RemoteKeyInstallFailed(
                "Failed to copy SSH key",
                context=f"ssh-copy-id to {request.remote_target} exited with status {result.returncode}",
            )

        self._success(f"Public key installed for {request.remote_target}")
        self._advance(ProvisionStage.REMOTE_INSTALLED)

    def _write_stanza(self, request: ProvisionRequest, key_pair: KeyPair) -> Path:
        store = self.store.store_path(request.host_alias)
        host_config = self.ssh_config.host_config_path(store)

        self._step("Writing host config")
        stanza = self.ssh_config.build_stanza(request, key_pair)
        self.ssh_config.write_host_config(stanza, host_config)

        self.result.paths["host_config"] = str(host_config)
        self._success(f"Host {request.host_alias} -> {request.remote_target}")
        self._advance(ProvisionStage.STANZA_WRITTEN)
        return host_config

    def _ensure_include(self, host_config: Path) -> None:
        global_path = self.config.global_config_path

        self._step(f"Updating {global_path}")
        added = self.ssh_config.ensure_include(global_path, host_config)

        self.result.include_added = added
        self.result.paths["global_config"] = str(global_path)
        if added:
            self._success(f"Added 'Include {host_config}' to {global_path}")
        else:
            self._success(f"'Include {host_config}' already present")
        self._advance(ProvisionStage.GLOBAL_CONFIG_ENSURED)

    def _verify(self, request: ProvisionRequest) -> None:
        self._step(f"Testing SSH connection to {request.host_alias}")

        result = run_with_progress(
            self.logger,
            lambda: self.ssh.check_connection(
                request.host_alias,
                self.config.global_config_path,
                self.config.connect_timeout,
            ),
            f"ssh {request.host_alias}",
        )
        if result.is_failure:
            raise ConnectivityCheckFailed(
                f"Failed to connect to {request.host_alias}",
                context="Setup completed, but the test login did not succeed",
            )

        self._advance(ProvisionStage.VERIFIED)

    def _advance(self, stage: ProvisionStage) -> None:
        self.result.stage = stage
        self._log(f"Stage: {stage.value}", "DEBUG")

    def _step(self, name: str) -> None:
        if self.logger:
            self.logger.step(name)

    def _success(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def _warning(self, message: str) -> None:
        if self.logger:
            self.logger.warning(message)

    def _log(self, message: str, level: str = "INFO") -> None:
        if self.logger:
            self.logger.log(message, level)
