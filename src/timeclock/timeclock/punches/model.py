from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import PunchStatus, PunchType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one accepted punch. Never mutated once written."""

    punch_id: int
    employee_id: int
    device_id: int
    unit: str
    punch_type: PunchType
    occurred_at: datetime
    status: PunchStatus
    selfie_ref: str


@dataclass(frozen=True)
class PunchResult:
    """What the kiosk gets back after a successful punch."""

    punch_id: int
    punch_type: PunchType
    occurred_at: datetime
    employee_name: str
