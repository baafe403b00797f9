"""sshlink - setup command"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import rich_click as click

from sshlink.base import BaseCommand
from sshlink.constants import SUCCESS_SETUP_COMPLETE, SUCCESS_SETUP_UNVERIFIED
from sshlink.core.config_loader import ProvisionConfig, load_config
from sshlink.core.provisioner import Provisioner
from sshlink.core.validator import build_request
from sshlink.exceptions import SSHLinkError, ConnectivityCheckFailed
from sshlink.models import ProvisionStage


class SetupCommand(BaseCommand):
    """Provision passwordless SSH access to one host."""

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        config: Optional[ProvisionConfig] = None,
        provisioner: Optional[Provisioner] = None,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.config = config
        self.provisioner = provisioner
        self.args: Sequence[str] = ()

    def execute(
        self,
        args: Sequence[str],
        force: bool = False,
        config_file: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Execute setup command."""
        self.args = args
        if self.config is None:
            self.config = load_config(config_file, overrides)

        # Reject bad input before anything is written, log files included
        request = build_request(args, self.config.local_user)

        self.show_header(
            title="Provision SSH Access",
            details={"Host": request.host_alias, "Target": request.remote_target},
        )
        self.init_logger(request.host_alias, "setup", self.config.log_dir)

        if self.provisioner is None:
            self.provisioner = Provisioner(self.config, logger=self.logger)
        else:
            self.provisioner.logger = self.logger

        result = self.provisioner.provision(args, force=force)

        if self.json_output:
            self.output_json(result.to_dict())
            return

        self.console.print()
        if self.config.verify:
            self.print_success(SUCCESS_SETUP_COMPLETE)
        else:
            self.print_success(SUCCESS_SETUP_UNVERIFIED)
        self.print_dim(f"Connect with: ssh {request.host_alias}")
        if self.logger:
            self.print_dim(f"Logs saved to: {self.logger.log_path}")

    def handle_error(self, error: SSHLinkError) -> None:
        super().handle_error(error)
        if isinstance(error, ConnectivityCheckFailed) and not self.json_output:
            self.print_dim(
                "Key and config are in place; retry with: "
                f"ssh {self.provisioner.result.host_alias}"
            )

    def json_error_payload(self, error: SSHLinkError) -> Dict[str, Any]:
        data = super().json_error_payload(error)
        data.update(
            {
                "host_alias": self.args[0] if self.args else None,
                "stage": ProvisionStage.FAILED.value,
                "paths": {},
            }
        )
        if self.provisioner is not None and self.provisioner.result is not None:
            data.update(self.provisioner.result.to_dict())
        return data


@click.command(
    name="sshlink",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("args", nargs=-1, metavar="HOST_ALIAS IP_ADDRESS USERNAME")
@click.option(
    "--force", is_flag=True, help="Regenerate the key pair if one already exists"
)
@click.option(
    "--no-verify", is_flag=True, help="Skip the final test login through the alias"
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: ~/.config/sshlink/config.yml)",
)
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local home directory holding .ssh",
)
@click.option("--local-user", help="Local account the credentials belong to")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show all tool output")
def setup(args, force, no_verify, config_file, home, local_user, json_output, verbose):
    """
    Provision passwordless SSH access to a remote host

    \b
    Steps:
    - Create ~/.ssh/include.d/HOST_ALIAS with an owner-only default ACL
    - Generate an ed25519 key pair in it
    - Install the public key on USERNAME@IP_ADDRESS
    - Write a Host stanza and Include it from ~/.ssh/config
    - Test the login with: ssh HOST_ALIAS

    \b
    Exit codes:
      0 success
      1 invalid arguments or configuration
      2 directory, ACL or config file failure
      3 key generation failure
      4 remote key installation failure
      5 connection test failed (setup itself completed)
    """
    overrides = {"home": home, "local_user": local_user}
    if no_verify:
        overrides["verify"] = False

    cmd = SetupCommand(verbose=verbose, json_output=json_output)
    cmd.run(args=args, force=force, config_file=config_file, overrides=overrides)
