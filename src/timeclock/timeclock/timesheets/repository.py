from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyTimesheet, TimesheetRow


class TimesheetRepository(Protocol):
    def upsert(self, timesheet: DailyTimesheet) -> None:
        """Insert or replace every derived field for (employee_id, work_date) atomically."""

        raise NotImplementedError

    def get(self, employee_id: int, work_date: date) -> Optional[DailyTimesheet]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> Sequence[TimesheetRow]:
        raise NotImplementedError
