"""sshlink configuration loader - defaults, YAML file, CLI overrides"""

import getpass
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from sshlink.constants import (
    DEFAULT_SSH_DIR_NAME,
    DEFAULT_INCLUDE_DIR_NAME,
    DEFAULT_LOG_DIR,
    DEFAULT_CONFIG_FILE,
    GLOBAL_CONFIG_NAME,
    KEY_TYPE,
)
from sshlink.exceptions import ConfigurationError


@dataclass
class ProvisionConfig:
    """
    Local environment the workflow runs against.

    The workflow reads the local identity and every path from here instead
    of looking at the process environment, so tests can point it at a
    temporary home directory.
    """

    local_user: str
    home: Path
    ssh_dir: Optional[Path] = None
    include_dir_name: str = DEFAULT_INCLUDE_DIR_NAME
    log_dir: Optional[Path] = None
    connect_timeout: Optional[int] = None
    verify: bool = True
    key_type: str = KEY_TYPE

    def __post_init__(self):
        self.home = Path(self.home).expanduser().absolute()
        if self.ssh_dir is None:
            self.ssh_dir = self.home / DEFAULT_SSH_DIR_NAME
        else:
            self.ssh_dir = Path(self.ssh_dir).expanduser().absolute()
        if self.log_dir is None:
            self.log_dir = self.home / DEFAULT_LOG_DIR
        else:
            self.log_dir = Path(self.log_dir).expanduser().absolute()
        if self.key_type != KEY_TYPE:
            raise ConfigurationError(
                f"Unsupported key type: {self.key_type}",
                context=f"Only {KEY_TYPE} keys are generated",
            )

    @property
    def credential_root(self) -> Path:
        """Directory holding one credential store per host alias."""
        return self.ssh_dir / self.include_dir_name

    @property
    def global_config_path(self) -> Path:
        """The user's global ssh client config."""
        return self.ssh_dir / GLOBAL_CONFIG_NAME

    def store_path(self, host_alias: str) -> Path:
        """Deterministic credential store location for an alias."""
        return self.credential_root / host_alias

    def __repr__(self) -> str:
        return f"ProvisionConfig(user={self.local_user}, ssh_dir={self.ssh_dir})"


_ALLOWED_KEYS = {f.name for f in fields(ProvisionConfig)}


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Read a YAML config file.

    Args:
        path: Config file path

    Returns:
        Mapping of config keys (empty for an empty file)

    Raises:
        ConfigurationError: If the file cannot be read, is not a mapping,
            or has unknown keys
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file: {path}", context=str(e))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {path}", context=str(e))

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {path}",
            context=f"Got {type(data).__name__}",
        )

    unknown = sorted(set(data) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown config keys: {', '.join(unknown)}",
            context=f"Allowed keys: {', '.join(sorted(_ALLOWED_KEYS))}",
        )

    return data


def load_config(
    config_file: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None
) -> ProvisionConfig:
    """
    Build the effective configuration.

    Precedence, lowest first: process user and home directory, YAML file,
    explicit overrides (CLI options). None-valued overrides are ignored.

    Args:
        config_file: Explicit config file; must exist if given
        overrides: Values taken from command line options

    Returns:
        ProvisionConfig
    """
    values: Dict[str, Any] = {
        "local_user": getpass.getuser(),
        "home": Path.home(),
    }

    if config_file is not None:
        if not Path(config_file).exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        values.update(read_config_file(Path(config_file)))
    else:
        default_file = Path(DEFAULT_CONFIG_FILE).expanduser()
        if default_file.exists():
            values.update(read_config_file(default_file))

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        return ProvisionConfig(**values)
    except TypeError as e:
        raise ConfigurationError("Invalid configuration values", context=str(e))
