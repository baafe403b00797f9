"""CLI tests: exit codes, console and JSON output."""

import json

import pytest
from click.testing import CliRunner

from sshlink.commands.setup import setup
from sshlink.main import main
from sshlink.services import CommandRunner

cli_runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_tools(runner, monkeypatch):
    """Route every tool invocation to the fake runner."""

    def run(self, argv, capture_output=True):
        return runner.run(argv, capture_output=capture_output)

    monkeypatch.setattr(CommandRunner, "run", run)


def invoke(home, *args):
    return cli_runner.invoke(
        setup, [*args, "--home", str(home), "--local-user", "tester"]
    )


class TestSetupCommand:
    """Tests for the sshlink command."""

    def test_success(self, home, runner):
        result = invoke(home, "db1", "10.1.2.3", "admin")

        assert result.exit_code == 0, result.output
        assert "SSH setup complete" in result.output
        assert runner.programs() == ["setfacl", "ssh-keygen", "ssh-copy-id", "ssh"]
        config_text = (home / ".ssh" / "config").read_text()
        assert config_text.startswith(f"Include {home}/.ssh/include.d/db1/config\n")

    def test_writes_log_file(self, home):
        invoke(home, "db1", "10.1.2.3", "admin")

        logs = list((home / ".local" / "state" / "sshlink" / "logs" / "db1").rglob("*_setup.log"))
        assert len(logs) == 1
        content = logs[0].read_text()
        assert "Executing: ssh-keygen -t ed25519" in content
        assert "Status: SUCCESS" in content

    @pytest.mark.parametrize("args", [(), ("db1",), ("db1", "10.1.2.3"), ("a", "1.1.1.1", "u", "x")])
    def test_wrong_argument_count(self, home, runner, args):
        result = invoke(home, *args)

        assert result.exit_code == 1
        assert "Expected 3 arguments" in result.output
        assert runner.calls == []
        assert not (home / ".ssh").exists()

    def test_invalid_address(self, home, runner):
        result = invoke(home, "db1", "999.1.1.1", "admin")

        assert result.exit_code == 1
        assert "Invalid IP address format: 999.1.1.1" in result.output
        assert runner.calls == []
        assert not (home / ".ssh").exists()
        assert not (home / ".local").exists()

    def test_invalid_alias(self, home, runner):
        result = invoke(home, "../evil", "10.1.2.3", "admin")

        assert result.exit_code == 1
        assert "Invalid host alias" in result.output
        assert runner.calls == []

    def test_invalid_username(self, home, runner):
        result = invoke(home, "db1", "10.1.2.3", "admin\n    ProxyCommand touch /tmp/x")

        assert result.exit_code == 1
        assert "Invalid username" in result.output
        assert runner.calls == []
        assert not (home / ".ssh").exists()

    def test_relative_home_writes_absolute_include(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = cli_runner.invoke(
            setup, ["db1", "10.1.2.3", "admin", "--home", "h", "--local-user", "tester"]
        )

        assert result.exit_code == 0, result.output
        first_line = (tmp_path / "h" / ".ssh" / "config").read_text().splitlines()[0]
        assert first_line == f"Include {tmp_path}/h/.ssh/include.d/db1/config"

    @pytest.mark.parametrize(
        "program, exit_code",
        [("setfacl", 2), ("ssh-keygen", 3), ("ssh-copy-id", 4), ("ssh", 5)],
    )
    def test_failure_exit_codes(self, home, runner, program, exit_code):
        runner.fail(program)

        result = invoke(home, "db1", "10.1.2.3", "admin")

        assert result.exit_code == exit_code

    def test_connectivity_failure_says_setup_completed(self, home, runner):
        runner.fail("ssh", 255)

        result = invoke(home, "db1", "10.1.2.3", "admin")

        assert result.exit_code == 5
        assert "Failed to connect to db1" in result.output
        assert "Setup completed" in result.output

    def test_no_verify(self, home, runner):
        result = invoke(home, "db1", "10.1.2.3", "admin", "--no-verify")

        assert result.exit_code == 0
        assert "ssh" not in runner.programs()
        assert "connection test skipped" in result.output

    def test_rerun_reuses_key_and_force_regenerates(self, home, runner):
        assert invoke(home, "db1", "10.1.2.3", "admin").exit_code == 0
        assert invoke(home, "db1", "10.1.2.3", "admin").exit_code == 0
        assert len(runner.calls_for("ssh-keygen")) == 1

        assert invoke(home, "db1", "10.1.2.3", "admin", "--force").exit_code == 0
        assert len(runner.calls_for("ssh-keygen")) == 2

        lines = (home / ".ssh" / "config").read_text().splitlines()
        assert len([line for line in lines if line.startswith("Include ")]) == 1

    def test_config_file_option(self, home, tmp_path, runner):
        config_file = tmp_path / "sshlink.yml"
        config_file.write_text("include_dir_name: hosts\nconnect_timeout: 3\n")

        result = invoke(home, "db1", "10.1.2.3", "admin", "--config", str(config_file))

        assert result.exit_code == 0, result.output
        assert (home / ".ssh" / "hosts" / "db1" / "config").exists()
        assert runner.calls_for("ssh")[0][:5] == [
            "ssh",
            "-o",
            "BatchMode=yes",
            "-o",
            "ConnectTimeout=3",
        ]

    def test_bad_config_file(self, home, tmp_path):
        config_file = tmp_path / "sshlink.yml"
        config_file.write_text("colour: blue\n")

        result = invoke(home, "db1", "10.1.2.3", "admin", "--config", str(config_file))

        assert result.exit_code == 1
        assert "Unknown config keys" in result.output


class TestJsonOutput:
    """Tests for --json."""

    def test_success_document(self, home):
        result = invoke(home, "db1", "10.1.2.3", "admin", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["host_alias"] == "db1"
        assert data["stage"] == "verified"
        assert data["exit_code"] == 0
        assert data["include_added"] is True
        assert data["paths"]["private_key"] == f"{home}/.ssh/include.d/db1/db1"
        assert not (home / ".local").exists()

    def test_failure_document(self, home, runner):
        runner.fail("ssh-copy-id")

        result = invoke(home, "db1", "10.1.2.3", "admin", "--json")

        assert result.exit_code == 4
        data = json.loads(result.output)
        assert data["stage"] == "failed"
        assert data["failed_after"] == "key_generated"
        assert data["error"] == "Failed to copy SSH key"

    def test_input_error_document(self, home):
        result = invoke(home, "db1", "10.0.0", "admin", "--json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"] == "Invalid IP address format: 10.0.0"
        assert data["message"] == "Invalid IP address format: 10.0.0"
        assert data["exit_code"] == 1
        assert data["host_alias"] == "db1"
        assert data["stage"] == "failed"
        assert data["paths"] == {}

    def test_argument_count_error_document(self, home):
        result = invoke(home, "--json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["host_alias"] is None
        assert data["stage"] == "failed"
        assert data["exit_code"] == 1
        assert data["paths"] == {}


class TestMain:
    """Tests for the console script entry point."""

    def test_usage_errors_exit_with_input_code(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--no-such-option", "db1", "10.1.2.3", "admin"])
        assert exc_info.value.code == 1

    def test_wrong_argument_count(self, home):
        with pytest.raises(SystemExit) as exc_info:
            main(["db1", "--home", str(home)])
        assert exc_info.value.code == 1

    def test_help(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
