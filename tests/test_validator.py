"""Tests for argument validation."""

import pytest

from sshlink.core.validator import (
    build_request,
    valid_ip,
    validate_host_alias,
    validate_remote_user,
)
from sshlink.exceptions import (
    InvalidAddressFormat,
    InvalidArgumentCount,
    InvalidHostAlias,
    InvalidRemoteUser,
)


@pytest.mark.parametrize(
    "ip",
    ["192.168.1.10", "10.1.2.3", "0.0.0.0", "255.255.255.255", "1.22.133.4"],
)
def test_valid_ip_accepts_dotted_quads(ip):
    assert valid_ip(ip)


@pytest.mark.parametrize(
    "ip",
    [
        "999.1.1.1",
        "256.0.0.1",
        "1.2.3.256",
        "10.0.0",
        "1.2.3.4.5",
        "1234.1.1.1",
        "1..2.3",
        "a.b.c.d",
        "",
        " 1.2.3.4",
        "1.2.3.4\n",
        "1.2.3.-4",
    ],
)
def test_valid_ip_rejects_malformed(ip):
    assert not valid_ip(ip)


@pytest.mark.parametrize("alias", ["db1", "web-01", "prod.api", "a_b", "9host"])
def test_validate_host_alias_accepts_path_safe_names(alias):
    validate_host_alias(alias)


@pytest.mark.parametrize(
    "alias", ["", ".", "..", "a/b", "../etc", "bad alias", "-oProxyCommand", "web*"]
)
def test_validate_host_alias_rejects_unsafe_names(alias):
    with pytest.raises(InvalidHostAlias) as exc_info:
        validate_host_alias(alias)
    assert exc_info.value.exit_code == 1


@pytest.mark.parametrize("args", [[], ["db1"], ["db1", "10.1.2.3"], ["a", "1.1.1.1", "u", "x"]])
def test_build_request_requires_three_arguments(args):
    with pytest.raises(InvalidArgumentCount) as exc_info:
        build_request(args, "tester")
    assert exc_info.value.exit_code == 1
    assert exc_info.value.received == len(args)
    assert "Usage: sshlink" in exc_info.value.context


def test_build_request_rejects_out_of_range_octet():
    with pytest.raises(InvalidAddressFormat) as exc_info:
        build_request(["db1", "999.1.1.1", "admin"], "tester")
    assert exc_info.value.exit_code == 1
    assert "999.1.1.1" in exc_info.value.message


@pytest.mark.parametrize("user", ["admin", "deploy_bot", "ops.user", "svc-1"])
def test_validate_remote_user_accepts_login_names(user):
    validate_remote_user(user)


@pytest.mark.parametrize(
    "user",
    [
        "",
        "-oProxyCommand=sh",
        "admin\n    ProxyCommand touch /tmp/x",
        "ad min",
        "admin\t",
        "admin\r",
        "admin\x00",
    ],
)
def test_validate_remote_user_rejects_unsafe_names(user):
    with pytest.raises(InvalidRemoteUser) as exc_info:
        validate_remote_user(user)
    assert exc_info.value.exit_code == 1


def test_build_request_rejects_multiline_user():
    with pytest.raises(InvalidRemoteUser):
        build_request(["db1", "10.1.2.3", "admin\nProxyCommand sh"], "tester")


def test_build_request_returns_request():
    request = build_request(["db1", "10.1.2.3", "admin"], "tester")

    assert request.host_alias == "db1"
    assert request.remote_address == "10.1.2.3"
    assert request.remote_user == "admin"
    assert request.local_user == "tester"
    assert request.remote_target == "admin@10.1.2.3"


def test_request_is_immutable():
    request = build_request(["db1", "10.1.2.3", "admin"], "tester")
    with pytest.raises(AttributeError):
        request.host_alias = "other"
