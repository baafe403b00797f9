"""Input validation for the three positional arguments"""

import re
from typing import Sequence

from sshlink.constants import USAGE
from sshlink.exceptions import (
    InvalidArgumentCount,
    InvalidAddressFormat,
    InvalidHostAlias,
    InvalidRemoteUser,
)
from sshlink.models import ProvisionRequest

# Four dot-separated groups of one to three ASCII digits
_IPV4_PATTERN = re.compile(r"([0-9]{1,3}\.){3}[0-9]{1,3}")

# Usable as a directory/file name and as a single ssh_config `Host` token
_ALIAS_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")

# Whitespace or control characters would split the ssh_config `User` line
_UNSAFE_USER_PATTERN = re.compile(r"[\s\x00-\x1f\x7f]")

EXPECTED_ARGUMENTS = 3


def valid_ip(ip: str) -> bool:
    """
    Check that a string is a dotted-quad IPv4 address.

    The pattern alone accepts values like "999.1.1.1", so every octet is
    also range-checked against 255.

    Args:
        ip: Candidate address

    Returns:
        True if the address has four octets, each in [0, 255]
    """
    if not _IPV4_PATTERN.fullmatch(ip):
        return False
    return all(int(octet) <= 255 for octet in ip.split("."))


def validate_host_alias(alias: str) -> None:
    """
    Validate that the alias can name the credential store and the key files.

    Raises:
        InvalidHostAlias: If the alias is empty or has unsafe characters
    """
    if not alias:
        raise InvalidHostAlias(alias, "Alias must not be empty")
    if alias in (".", ".."):
        raise InvalidHostAlias(alias, "Alias must not be a relative path marker")
    if not _ALIAS_PATTERN.fullmatch(alias):
        raise InvalidHostAlias(
            alias,
            "Use letters, digits, '.', '_' or '-', starting with a letter or digit",
        )


def validate_remote_user(user: str) -> None:
    """
    Validate that the username is a single ssh_config token.

    Raises:
        InvalidRemoteUser: If the name is empty, looks like an option or
            contains whitespace or control characters
    """
    if not user:
        raise InvalidRemoteUser(user, "Username must not be empty")
    if user.startswith("-"):
        raise InvalidRemoteUser(user, "Username must not start with '-'")
    if _UNSAFE_USER_PATTERN.search(user):
        raise InvalidRemoteUser(
            user, "Username must not contain whitespace or control characters"
        )


def build_request(args: Sequence[str], local_user: str) -> ProvisionRequest:
    """
    Validate raw positional arguments and build a ProvisionRequest.

    Nothing is touched on disk or on the network here; a request either
    comes back fully validated or an input error is raised.

    Args:
        args: Positional arguments (host_alias, ip_address, username)
        local_user: Local account the store belongs to

    Returns:
        Validated ProvisionRequest

    Raises:
        InvalidArgumentCount: Wrong number of arguments
        InvalidHostAlias: Alias is not a safe path component
        InvalidAddressFormat: Address fails the IPv4 check
        InvalidRemoteUser: Username is not a single safe token
    """
    if len(args) != EXPECTED_ARGUMENTS:
        raise InvalidArgumentCount(len(args), USAGE)

    host_alias, ip_address, remote_user = args

    validate_host_alias(host_alias)

    if not valid_ip(ip_address):
        raise InvalidAddressFormat(ip_address)

    validate_remote_user(remote_user)

    return ProvisionRequest(
        host_alias=host_alias,
        remote_address=ip_address,
        remote_user=remote_user,
        local_user=local_user,
    )
