from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, LedgerSource


@dataclass(frozen=True)
class LedgerEntry:
    """Domain entity: one signed minute adjustment in the hour bank."""

    entry_id: int
    employee_id: int
    ref_date: date
    minutes: int
    source: LedgerSource
    approval_status: ApprovalStatus
    description: Optional[str] = None
    created_by: Optional[int] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class HourBankBalance:
    employee_id: int
    balance_minutes: int
