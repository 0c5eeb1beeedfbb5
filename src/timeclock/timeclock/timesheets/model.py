from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimesheetStatus


@dataclass(frozen=True)
class DailyTimesheet:
    """Domain entity: one employee's accounted day.

    Unique per (employee_id, work_date). balance_minutes is always
    worked_minutes - expected_minutes.
    """

    employee_id: int
    work_date: date
    first_punch_at: Optional[datetime]
    last_punch_at: Optional[datetime]
    worked_minutes: int
    break_minutes: int
    expected_minutes: int
    balance_minutes: int
    status: TimesheetStatus


@dataclass(frozen=True)
class TimesheetRow:
    """Read-model for admin listings (timesheet joined with employee)."""

    employee_id: int
    full_name: str
    work_date: date
    first_punch_at: Optional[datetime]
    last_punch_at: Optional[datetime]
    worked_minutes: int
    break_minutes: int
    expected_minutes: int
    balance_minutes: int
    status: TimesheetStatus
