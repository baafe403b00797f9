"""
sshlink Constants

Centralized constants for defaults, exit codes and file permissions.
"""

# Default layout under the local user's home
DEFAULT_SSH_DIR_NAME = ".ssh"
DEFAULT_INCLUDE_DIR_NAME = "include.d"
GLOBAL_CONFIG_NAME = "config"
HOST_CONFIG_NAME = "config"
DEFAULT_LOG_DIR = ".local/state/sshlink/logs"
DEFAULT_CONFIG_FILE = "~/.config/sshlink/config.yml"

# Key generation (single supported signature scheme)
KEY_TYPE = "ed25519"
PUBLIC_KEY_SUFFIX = ".pub"

# Default ACL: owner read/write, nothing for group and other
DEFAULT_ACL_SPEC = "u::rw,g::-,o::-"

# File Permissions
SSH_DIR_PERMISSIONS = 0o700
SSH_CONFIG_PERMISSIONS = 0o600

# Exit Codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_LOCAL_RESOURCE = 2
EXIT_KEY_GENERATION = 3
EXIT_REMOTE_INSTALL = 4
EXIT_CONNECTIVITY = 5
EXIT_INTERRUPTED = 130

# Tools invoked as black boxes
SETFACL_BINARY = "setfacl"
SSH_KEYGEN_BINARY = "ssh-keygen"
SSH_COPY_ID_BINARY = "ssh-copy-id"
SSH_BINARY = "ssh"

# Messages
USAGE = "Usage: sshlink <host_alias> <ip_address> <username>"
SUCCESS_SETUP_COMPLETE = (
    "SSH setup complete: Key created, config updated, and connection tested."
)
SUCCESS_SETUP_UNVERIFIED = "SSH setup complete (connection test skipped)."
