"""
Tests for the command-line entry point.
"""

import pytest
from unittest.mock import AsyncMock, patch

from check_teamviewer import cli
from check_teamviewer._types import CriterionKind, ServiceState, Verdict


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("TEAMVIEWER_API_KEY", raising=False)
    monkeypatch.delenv("TEAMVIEWER_LOG_LEVEL", raising=False)


@pytest.fixture
def mock_probe():
    """Replace the network probe with a canned verdict."""
    with patch("check_teamviewer.cli.run_probe", new_callable=AsyncMock) as probe:
        probe.return_value = Verdict(ServiceState.OK, "OK - TeamViewer Online: 5_host1")
        yield probe


class TestUsageErrors:
    """Invalid invocations exit 1 with the usage message."""

    def test_no_target(self, capsys, mock_probe):
        assert cli.main(["-apikey", "token"]) == 1
        assert cli.MISSING_ARGS_MESSAGE in capsys.readouterr().out
        mock_probe.assert_not_awaited()

    def test_both_targets(self, capsys, mock_probe):
        assert cli.main(["-apikey", "token", "-host", "h", "-teamviewerid", "1"]) == 1
        assert cli.MISSING_ARGS_MESSAGE in capsys.readouterr().out

    def test_no_api_key(self, capsys, mock_probe):
        assert cli.main(["-host", "myhost"]) == 1
        assert cli.MISSING_ARGS_MESSAGE in capsys.readouterr().out
        mock_probe.assert_not_awaited()

    def test_invalid_timeout(self, capsys, mock_probe):
        assert cli.main(["-apikey", "token", "-host", "h", "--timeout", "0"]) == 1
        assert "Invalid configuration: timeout" in capsys.readouterr().out

    def test_unknown_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["-apikey", "token", "--bogus"])
        assert exc_info.value.code == 1


class TestProbeRun:
    """Valid invocations print the verdict and return its exit code."""

    def test_ok_by_host(self, capsys, mock_probe):
        assert cli.main(["-apikey", "token", "-host", "host1"]) == 0

        assert capsys.readouterr().out.strip() == "OK - TeamViewer Online: 5_host1"
        config, criterion = mock_probe.await_args.args
        assert config.api_key == "token"
        assert criterion.kind is CriterionKind.HOSTNAME
        assert criterion.value == "host1"

    def test_critical_by_id(self, capsys, mock_probe):
        mock_probe.return_value = Verdict(ServiceState.CRITICAL, "CRITICAL - TeamViewer Offline: 5_host1")

        assert cli.main(["--apikey", "token", "--teamviewerid", "100"]) == 2

        assert capsys.readouterr().out.strip() == "CRITICAL - TeamViewer Offline: 5_host1"
        _, criterion = mock_probe.await_args.args
        assert criterion.kind is CriterionKind.CONTROL_IDENTIFIER
        assert criterion.value == "100"

    def test_api_key_from_environment(self, monkeypatch, mock_probe):
        monkeypatch.setenv("TEAMVIEWER_API_KEY", "env-token")

        assert cli.main(["-host", "host1"]) == 0

        config, _ = mock_probe.await_args.args
        assert config.api_key == "env-token"

    def test_options_passed_to_config(self, mock_probe):
        cli.main([
            "-apikey", "token", "-host", "host1",
            "--api-url", "http://localhost:8080/api/v1/devices",
            "--timeout", "5", "-v",
        ])

        config, _ = mock_probe.await_args.args
        assert config.api_url == "http://localhost:8080/api/v1/devices"
        assert config.timeout == 5
        assert config.log_level == "DEBUG"

    def test_unknown_state_exit_code(self, capsys, mock_probe):
        mock_probe.return_value = Verdict(ServiceState.UNKNOWN, "UNKNOWN - Failed to decode TeamViewer API response: x")

        assert cli.main(["-apikey", "token", "-host", "host1"]) == 3
