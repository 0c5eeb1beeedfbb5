from __future__ import annotations

from ..common.datetime_utils import minutes_of_day
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_EXPECTED_MINUTES
from ..employees.repository import EmployeeRepository
from .model import DEFAULT_SCHEDULE, WorkSchedule
from .repository import ScheduleRepository


def expected_minutes(schedule: WorkSchedule) -> int:
    """Expected worked minutes for a day under `schedule`.

    End is taken as same-day as start. A missing break counts as the default
    60 minutes; an explicit 0 is kept.
    """
    if not schedule.has_hours:
        return DEFAULT_EXPECTED_MINUTES

    # 0 means "no break" and is kept; only a missing value falls back to the default.
    break_minutes = DEFAULT_BREAK_MINUTES if schedule.break_minutes is None else int(schedule.break_minutes)
    return minutes_of_day(schedule.expected_end) - minutes_of_day(schedule.expected_start) - break_minutes


class ScheduleResolver:
    """Resolve the schedule that applies to an employee.

    Order: individual schedule -> sector schedule -> organization default.
    """

    def __init__(self, schedules: ScheduleRepository, employees: EmployeeRepository):
        self._schedules = schedules
        self._employees = employees

    def resolve(self, employee_id: int) -> WorkSchedule:
        individual = self._schedules.get_for_employee(employee_id)
        if individual:
            return individual

        employee = self._employees.get_by_id(employee_id)
        if employee and employee.sector_id:
            sector = self._schedules.get_for_sector(employee.sector_id)
            if sector:
                return sector

        return DEFAULT_SCHEDULE
