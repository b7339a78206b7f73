"""State evaluator - maps a device's connectivity state to a verdict."""

from ._types import Device, ServiceState, Verdict


def evaluate(device: Device) -> Verdict:
    """
    Classify a device as OK or CRITICAL.

    Only the exact state "Online" is healthy. Offline, empty and any state
    the vendor adds later are all CRITICAL.
    """
    state = ServiceState.OK if device.is_online else ServiceState.CRITICAL
    return Verdict(
        state=state,
        message=f"{state.label} - TeamViewer {device.connectivity_state}: {device.alias}",
    )
