"""Shared fixtures: a fake tool runner and a throwaway home directory."""

from pathlib import Path

import pytest

from sshlink.core.config_loader import ProvisionConfig
from sshlink.core.provisioner import Provisioner
from sshlink.models import ExecutionResult
from sshlink.services import (
    AclService,
    KeygenService,
    SSHService,
    StoreService,
    SSHConfigService,
)


class FakeRunner:
    """Records argv lists and returns scripted exit statuses per program."""

    def __init__(self):
        self.calls = []
        self.returncodes = {}

    def fail(self, program: str, returncode: int = 1) -> None:
        self.returncodes[program] = returncode

    def programs(self) -> list:
        return [argv[0] for argv, _ in self.calls]

    def calls_for(self, program: str) -> list:
        return [argv for argv, _ in self.calls if argv[0] == program]

    def run(self, argv, capture_output=True) -> ExecutionResult:
        argv = list(argv)
        self.calls.append((argv, capture_output))
        program = argv[0]
        returncode = self.returncodes.get(program, 0)
        stderr = "" if returncode == 0 else f"{program} failed"

        if program == "ssh-keygen" and returncode == 0:
            private_key = Path(argv[argv.index("-f") + 1])
            if private_key.exists():
                # Real ssh-keygen stops at its overwrite prompt
                return ExecutionResult(
                    returncode=1,
                    stderr=f"{private_key} already exists.",
                    command=" ".join(argv),
                )
            private_key.write_text("PRIVATE KEY\n")
            private_key.with_name(private_key.name + ".pub").write_text(
                "ssh-ed25519 AAAA tester@host\n"
            )

        return ExecutionResult(
            returncode=returncode, stderr=stderr, command=" ".join(argv)
        )


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Never read the real ~/.config/sshlink/config.yml."""
    monkeypatch.setattr(
        "sshlink.core.config_loader.DEFAULT_CONFIG_FILE",
        str(tmp_path / "absent" / "config.yml"),
    )


@pytest.fixture
def home(tmp_path) -> Path:
    path = tmp_path / "home" / "tester"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def config(home) -> ProvisionConfig:
    return ProvisionConfig(local_user="tester", home=home)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def provisioner(config, runner) -> Provisioner:
    return Provisioner(
        config,
        store=StoreService(config, acl=AclService(runner)),
        keygen=KeygenService(runner),
        ssh=SSHService(runner),
        ssh_config=SSHConfigService(),
    )
