"""Core provisioning components"""

from .validator import valid_ip, validate_host_alias, validate_remote_user, build_request
from .config_loader import ProvisionConfig, load_config, read_config_file

__all__ = [
    "valid_ip",
    "validate_host_alias",
    "validate_remote_user",
    "build_request",
    "ProvisionConfig",
    "load_config",
    "read_config_file",
]
