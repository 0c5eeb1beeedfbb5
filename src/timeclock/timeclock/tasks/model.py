from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ReconciliationFailure:
    """Dead letter: an employee-day whose reconciliation kept failing."""

    failure_id: int
    employee_id: int
    work_date: date
    attempts: int
    last_error: str
    failed_at: datetime
    resolved_at: Optional[datetime] = None


@dataclass(frozen=True)
class BackfillReport:
    retried: int
    resolved: int
    still_failing: int
