"""
sshlink Services Layer

Capabilities the provisioning workflow is built from. Tool-backed services
take a CommandRunner so tests can swap in a fake.
"""

from .command_runner import CommandRunner
from .acl_service import AclService
from .keygen_service import KeygenService
from .ssh_service import SSHService
from .store_service import StoreService
from .ssh_config_service import SSHConfigService

__all__ = [
    "CommandRunner",
    "AclService",
    "KeygenService",
    "SSHService",
    "StoreService",
    "SSHConfigService",
]
