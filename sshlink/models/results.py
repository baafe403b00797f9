"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from sshlink.constants import EXIT_SUCCESS


class ProvisionStage(Enum):
    """Stages of the provisioning workflow, in order."""

    START = "start"
    VALIDATED = "validated"
    STORE_READY = "store_ready"
    KEY_GENERATED = "key_generated"
    REMOTE_INSTALLED = "remote_installed"
    STANZA_WRITTEN = "stanza_written"
    GLOBAL_CONFIG_ENSURED = "global_config_ensured"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    """Result of a command execution (subprocess)."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass
class ProvisionResult:
    """Outcome of a provisioning run."""

    host_alias: str
    stage: ProvisionStage = ProvisionStage.START
    exit_code: int = EXIT_SUCCESS
    message: str = ""
    key_reused: bool = False
    include_added: bool = False
    paths: Dict[str, str] = field(default_factory=dict)
    failed_after: Optional[ProvisionStage] = None

    @property
    def is_success(self) -> bool:
        """Check if the run finished without error."""
        return self.exit_code == EXIT_SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        data = {
            "host_alias": self.host_alias,
            "stage": self.stage.value,
            "exit_code": self.exit_code,
            "message": self.message,
            "key_reused": self.key_reused,
            "include_added": self.include_added,
            "paths": self.paths,
        }
        if self.failed_after is not None:
            data["failed_after"] = self.failed_after.value
        return data

    def __repr__(self) -> str:
        return f"ProvisionResult(alias={self.host_alias}, stage={self.stage.value}, exit_code={self.exit_code})"
