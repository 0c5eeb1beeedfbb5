from __future__ import annotations

from typing import FrozenSet, Optional

from ..core.enums import ScheduleOrigin
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_time, optional_int
from .model import WEEKDAYS, WorkSchedule
from .repository import ScheduleRepository


def parse_weekly_days(value) -> FrozenSet[int]:
    """Parse the stored '0,1,2,3,4' weekday list."""
    if value is None or not str(value).strip():
        return WEEKDAYS
    return frozenset(int(part) for part in str(value).split(",") if part.strip())


def _row_to_schedule(r: dict, origin: ScheduleOrigin) -> WorkSchedule:
    return WorkSchedule(
        expected_start=to_time(r.get("expected_start")),
        expected_end=to_time(r.get("expected_end")),
        break_minutes=optional_int(r.get("break_minutes")),
        tolerance_early_minutes=int(r.get("tolerance_early_minutes") or 0),
        tolerance_late_minutes=int(r.get("tolerance_late_minutes") or 0),
        weekly_days=parse_weekly_days(r.get("weekly_days")),
        origin=origin,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT expected_start, expected_end, break_minutes,
                       tolerance_early_minutes, tolerance_late_minutes, weekly_days
                FROM work_schedules
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_schedule(r, ScheduleOrigin.EMPLOYEE) if r else None

    def get_for_sector(self, sector_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT expected_start, expected_end, break_minutes,
                       tolerance_early_minutes, tolerance_late_minutes, weekly_days
                FROM sector_schedules
                WHERE sector_id=%s
                """,
                (int(sector_id),),
            )
            r = fetchone(cur)
            return _row_to_schedule(r, ScheduleOrigin.SECTOR) if r else None
