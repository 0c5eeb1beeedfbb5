from __future__ import annotations

from typing import Optional, Protocol

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def get_for_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        """Individual schedule explicitly assigned to the employee."""

        raise NotImplementedError

    def get_for_sector(self, sector_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError
