"""
Tests for the state evaluator and shared verdict types.
"""

import pytest

from check_teamviewer._types import Device, MatchCriterion, ServiceState, Verdict
from check_teamviewer.evaluator import evaluate


def test_online_is_ok():
    """Only 'Online' is healthy."""
    verdict = evaluate(Device(alias="5_host1", online_state="Online"))

    assert verdict.state is ServiceState.OK
    assert verdict.exit_code == 0
    assert verdict.message == "OK - TeamViewer Online: 5_host1"


@pytest.mark.parametrize("state", ["Offline", "", "online", "ONLINE", "Online ", "Standby"])
def test_anything_else_is_critical(state):
    """Offline, empty, wrong case and unknown states are CRITICAL."""
    verdict = evaluate(Device(alias="5_host1", online_state=state))

    assert verdict.state is ServiceState.CRITICAL
    assert verdict.exit_code == 2
    assert verdict.message == f"CRITICAL - TeamViewer {state}: 5_host1"


def test_service_state_codes():
    """Exit codes follow the monitoring plugin convention."""
    assert [int(s) for s in ServiceState] == [0, 1, 2, 3]
    assert ServiceState.UNKNOWN.label == "UNKNOWN"


def test_verdict_to_dict():
    verdict = Verdict(ServiceState.CRITICAL, "CRITICAL - TeamViewer Offline: 1_a")
    assert verdict.to_dict() == {
        "state": "CRITICAL",
        "exit_code": 2,
        "message": "CRITICAL - TeamViewer Offline: 1_a",
    }


def test_device_hostname():
    """Hostname strips the numeric alias prefix only once."""
    assert Device(alias="12345_myhost").hostname == "myhost"
    assert Device(alias="1_2_host").hostname == "2_host"
    assert Device(alias="plainhost").hostname == "plainhost"


def test_device_is_frozen():
    device = Device(alias="1_a")
    with pytest.raises(Exception):
        device.alias = "2_b"


def test_criterion_str():
    assert str(MatchCriterion.by_hostname("myhost")) == "host myhost"
    assert str(MatchCriterion.by_control_identifier("123")) == "teamviewer id 123"
