"""
sshlink Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    ProvisionResult,
    ProvisionStage,
)
from .provision import (
    ProvisionRequest,
    KeyPair,
    HostConfigStanza,
)

__all__ = [
    # Results
    "ExecutionResult",
    "ProvisionResult",
    "ProvisionStage",
    # Provisioning
    "ProvisionRequest",
    "KeyPair",
    "HostConfigStanza",
]
