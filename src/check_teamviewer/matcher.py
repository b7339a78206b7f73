"""
Device matcher - selects the single device a probe run is about.

Two selection modes:
- By TeamViewer ID: the stored remote control ID is the bare ID with an
  'r' type prefix ("123" matches "r123").
- By hostname: aliases follow the '<numeric id>_<hostname>' convention and
  the hostname is searched after such a prefix. This is a substring search,
  so "myhost" also matches "12345_myhost2".

The first matching device in inventory order wins.
"""

import logging
import re
from typing import Sequence

from ._types import CheckTeamViewerError, CriterionKind, Device, MatchCriterion

logger = logging.getLogger(__name__)

CONTROL_IDENTIFIER_PREFIX = "r"


class DeviceNotFoundError(CheckTeamViewerError):
    """No device in the inventory satisfies the criterion."""

    def __init__(self, criterion: MatchCriterion):
        self.criterion = criterion
        super().__init__(
            f"Device not found: {criterion}",
            {"kind": criterion.kind.value, "value": criterion.value}
        )


def matches_control_identifier(device: Device, teamviewer_id: str) -> bool:
    return device.control_identifier == CONTROL_IDENTIFIER_PREFIX + teamviewer_id


def matches_hostname(device: Device, hostname: str) -> bool:
    return re.search(r"\d+_" + re.escape(hostname), device.alias) is not None


def find_device(devices: Sequence[Device], criterion: MatchCriterion) -> Device:
    """
    Return the first device satisfying the criterion.

    Args:
        devices: Inventory devices in upstream order
        criterion: Hostname or TeamViewer ID to look for

    Returns:
        The matching Device object from ``devices`` (not a copy)

    Raises:
        DeviceNotFoundError: No device matched, including an empty inventory
    """
    if criterion.kind is CriterionKind.HOSTNAME:
        predicate = matches_hostname
    elif criterion.kind is CriterionKind.CONTROL_IDENTIFIER:
        predicate = matches_control_identifier
    else:
        raise ValueError(f"Unsupported criterion kind: {criterion.kind!r}")

    for device in devices:
        if predicate(device, criterion.value):
            logger.debug(f"Matched {criterion} to device {device.alias!r}")
            return device

    logger.debug(f"No match for {criterion} among {len(devices)} devices")
    raise DeviceNotFoundError(criterion)
