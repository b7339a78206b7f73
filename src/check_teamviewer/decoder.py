"""
Response decoder for the TeamViewer devices API.

Turns the raw body of GET /api/v1/devices into an InventoryResponse.
Individual device fields are decoded leniently; only a payload that is not
a JSON document of the expected shape fails as a whole.
"""

import json
import logging
from typing import Any, List, Optional, Union

from ._types import CheckTeamViewerError, Device, InventoryResponse

logger = logging.getLogger(__name__)

DEVICES_FIELD = "devices"


class DecodeError(CheckTeamViewerError):
    """Inventory payload is not a well-formed devices document."""

    def __init__(self, message: str, detail: str = ""):
        self.detail = detail
        super().__init__(message, {"detail": detail} if detail else None)


def decode(raw_payload: Union[bytes, str]) -> InventoryResponse:
    """
    Decode a devices API response body.

    Args:
        raw_payload: Response body as returned by the API

    Returns:
        InventoryResponse with devices in payload order

    Raises:
        DecodeError: Payload is not valid JSON, or not an object with a
            devices array
    """
    try:
        document = json.loads(raw_payload, parse_int=_parse_int)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError("Invalid JSON in devices response", detail=str(e)) from e
    except RecursionError as e:
        raise DecodeError("Devices response is nested too deeply", detail=str(e)) from e

    if not isinstance(document, dict):
        raise DecodeError(
            "Devices response is not a JSON object",
            detail=f"got {type(document).__name__}"
        )

    entries = document.get(DEVICES_FIELD)
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise DecodeError(
            "Devices field is not an array",
            detail=f"got {type(entries).__name__}"
        )

    devices = _decode_devices(entries)
    logger.debug(f"Decoded {len(devices)} devices from inventory response")
    return InventoryResponse(devices=tuple(devices))


def _parse_int(literal: str) -> Optional[int]:
    # Literals past the interpreter's int digit limit become null so the
    # field takes its zero value.
    try:
        return int(literal)
    except ValueError:
        logger.warning(f"Ignoring integer literal of {len(literal)} digits")
        return None


def _decode_devices(entries: List[Any]) -> List[Device]:
    devices = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping device entry {index}: expected object, got {type(entry).__name__}")
            continue
        devices.append(Device.model_validate(entry))
    return devices
