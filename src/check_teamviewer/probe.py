"""
Probe pipeline: fetch -> decode -> match -> evaluate.

check_device() is the pure part and raises on failure. run_probe() adds the
single API fetch and always returns exactly one Verdict, mapping every
error in the taxonomy to the monitoring outcome the plugin reports.
"""

import logging
from typing import Optional, Union

from ._types import CheckTeamViewerError, MatchCriterion, ServiceState, Verdict
from .client import AuthenticationError, FetchError, TeamViewerClient
from .config import ProbeConfig
from .decoder import DecodeError, decode
from .evaluator import evaluate
from .matcher import DeviceNotFoundError, find_device

logger = logging.getLogger(__name__)


def check_device(raw_payload: Union[bytes, str], criterion: MatchCriterion) -> Verdict:
    """
    Evaluate one device from a raw devices API response.

    Raises:
        DecodeError: Payload is not a devices document
        DeviceNotFoundError: No device satisfies the criterion
    """
    inventory = decode(raw_payload)
    device = find_device(inventory.devices, criterion)
    return evaluate(device)


def verdict_for_error(error: CheckTeamViewerError) -> Verdict:
    """Map a probe error to the status line and exit state it is reported with."""
    if isinstance(error, DeviceNotFoundError):
        return Verdict(ServiceState.CRITICAL, f"CRITICAL - Device not found: {error.criterion}")
    if isinstance(error, DecodeError):
        return Verdict(
            ServiceState.UNKNOWN,
            f"UNKNOWN - Failed to decode TeamViewer API response: {error.detail or error.message}",
        )
    if isinstance(error, FetchError) and error.status is not None:
        return Verdict(
            ServiceState.CRITICAL,
            f"CRITICAL - TeamViewer API returned HTTP {error.status}: {error.message}",
        )
    if isinstance(error, FetchError):
        return Verdict(
            ServiceState.CRITICAL,
            f"CRITICAL - Failed to connect to TeamViewer API: {error.message}",
        )
    return Verdict(ServiceState.UNKNOWN, f"UNKNOWN - {error}")


async def run_probe(
    config: ProbeConfig,
    criterion: MatchCriterion,
    client: Optional[TeamViewerClient] = None,
) -> Verdict:
    """
    Run one probe invocation end to end.

    Args:
        config: Probe configuration
        criterion: Which device to evaluate
        client: Client to fetch with (default: a new TeamViewerClient,
            closed before returning)

    Returns:
        The verdict for the device, or for the error that prevented one
    """
    owns_client = client is None
    if client is None:
        client = TeamViewerClient(config)

    try:
        payload = await client.fetch_devices()
        verdict = check_device(payload, criterion)
    except AuthenticationError as e:
        logger.error(f"TeamViewer API rejected the token: {e}")
        verdict = verdict_for_error(e)
    except CheckTeamViewerError as e:
        logger.info(f"Probe for {criterion} failed: {e}")
        verdict = verdict_for_error(e)
    finally:
        if owns_client:
            await client.close()

    logger.debug(f"Verdict: {verdict.to_dict()}")
    return verdict
