"""
Single source of truth for shared types in check-teamviewer.

Usage:
    from check_teamviewer._types import (
        Device, InventoryResponse, MatchCriterion, CriterionKind,
        ServiceState, Verdict, CheckTeamViewerError,
    )
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)


# Alias convention: "<numeric id>_<hostname>"
ALIAS_PREFIX_PATTERN = re.compile(r"^\d+_")

ONLINE_STATE = "Online"


# =============================================================================
# ERRORS
# =============================================================================


class CheckTeamViewerError(Exception):
    """
    Base exception for all check-teamviewer errors.

    Attributes:
        message: Error description
        details: Extra context for logs
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# =============================================================================
# ENUMS
# =============================================================================


class ServiceState(IntEnum):
    """Monitoring plugin states; the value is the process exit code."""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def label(self) -> str:
        return self.name


class CriterionKind(str, Enum):
    """How the target device is selected."""
    HOSTNAME = "hostname"
    CONTROL_IDENTIFIER = "control_identifier"


# =============================================================================
# INVENTORY MODELS
# =============================================================================


class Device(BaseModel):
    """One endpoint as reported by the TeamViewer devices API."""

    control_identifier: str = Field(
        default="",
        alias="remotecontrol_id",
        description="Remote control ID, 'r' followed by the TeamViewer ID"
    )
    device_identifier: str = Field(
        default="",
        alias="device_id",
        description="Vendor device identifier"
    )
    alias: str = Field(
        default="",
        description="Display name, by convention '<id>_<hostname>'"
    )
    group_identifier: str = Field(
        default="",
        alias="groupid",
        description="Group (folder) reference"
    )
    connectivity_state: str = Field(
        default="",
        alias="online_state",
        description="Vendor connectivity state, e.g. Online or Offline"
    )
    is_assigned: bool = Field(
        default=False,
        alias="assigned_to",
        description="Whether the device is assigned to an account"
    )
    numeric_identifier: int = Field(
        default=0,
        alias="teamviewer_id",
        description="Numeric TeamViewer ID"
    )

    model_config = ConfigDict(frozen=True, extra='ignore')

    @field_validator('*', mode='wrap')
    @classmethod
    def default_on_malformed(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        """A missing, null or malformed field falls back to its zero value."""
        if value is None:
            return cls.model_fields[info.field_name].get_default()
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default()

    @property
    def hostname(self) -> str:
        """Alias without the leading '<digits>_' prefix."""
        return ALIAS_PREFIX_PATTERN.sub("", self.alias, count=1)

    @property
    def is_online(self) -> bool:
        return self.connectivity_state == ONLINE_STATE


class InventoryResponse(BaseModel):
    """Decoded devices listing, in upstream order."""

    devices: Tuple[Device, ...] = ()

    model_config = ConfigDict(frozen=True, extra='ignore')

    def __len__(self) -> int:
        return len(self.devices)


# =============================================================================
# MATCHING & VERDICT
# =============================================================================


@dataclass(frozen=True)
class MatchCriterion:
    """Selects exactly one device, by hostname or by TeamViewer ID."""

    kind: CriterionKind
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", CriterionKind(self.kind))

    @classmethod
    def by_hostname(cls, hostname: str) -> "MatchCriterion":
        return cls(CriterionKind.HOSTNAME, hostname)

    @classmethod
    def by_control_identifier(cls, teamviewer_id: str) -> "MatchCriterion":
        return cls(CriterionKind.CONTROL_IDENTIFIER, teamviewer_id)

    def __str__(self) -> str:
        if self.kind is CriterionKind.HOSTNAME:
            return f"host {self.value}"
        return f"teamviewer id {self.value}"


@dataclass(frozen=True)
class Verdict:
    """Health classification plus the status line for the monitoring system."""

    state: ServiceState
    message: str

    @property
    def exit_code(self) -> int:
        return int(self.state)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.label,
            "exit_code": self.exit_code,
            "message": self.message,
        }
