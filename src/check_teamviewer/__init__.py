"""check-teamviewer - monitoring plugin for TeamViewer device connectivity"""

__version__ = "0.1.0"

from ._types import (
    CheckTeamViewerError,
    CriterionKind,
    Device,
    InventoryResponse,
    MatchCriterion,
    ServiceState,
    Verdict,
)
from .decoder import DecodeError, decode
from .matcher import DeviceNotFoundError, find_device
from .evaluator import evaluate
from .probe import check_device, run_probe, verdict_for_error

__all__ = [
    # Version
    "__version__",

    # Types
    "CheckTeamViewerError",
    "CriterionKind",
    "Device",
    "InventoryResponse",
    "MatchCriterion",
    "ServiceState",
    "Verdict",

    # Pipeline
    "DecodeError",
    "decode",
    "DeviceNotFoundError",
    "find_device",
    "evaluate",
    "check_device",
    "run_probe",
    "verdict_for_error",
]
