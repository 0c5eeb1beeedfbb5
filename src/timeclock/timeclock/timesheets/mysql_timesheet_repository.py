from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TimesheetStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyTimesheet, TimesheetRow
from .repository import TimesheetRepository


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, timesheet: DailyTimesheet) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO timesheets_daily(
                    employee_id, work_date, first_punch_at, last_punch_at,
                    worked_minutes, break_minutes, expected_minutes, balance_minutes, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    first_punch_at=VALUES(first_punch_at),
                    last_punch_at=VALUES(last_punch_at),
                    worked_minutes=VALUES(worked_minutes),
                    break_minutes=VALUES(break_minutes),
                    expected_minutes=VALUES(expected_minutes),
                    balance_minutes=VALUES(balance_minutes),
                    status=VALUES(status)
                """,
                (
                    int(timesheet.employee_id),
                    timesheet.work_date,
                    timesheet.first_punch_at,
                    timesheet.last_punch_at,
                    int(timesheet.worked_minutes),
                    int(timesheet.break_minutes),
                    int(timesheet.expected_minutes),
                    int(timesheet.balance_minutes),
                    timesheet.status.value,
                ),
            )

    def get(self, employee_id: int, work_date: date) -> Optional[DailyTimesheet]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT employee_id, work_date, first_punch_at, last_punch_at,
                       worked_minutes, break_minutes, expected_minutes, balance_minutes, status
                FROM timesheets_daily
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return DailyTimesheet(
                employee_id=int(r["employee_id"]),
                work_date=r["work_date"],
                first_punch_at=r.get("first_punch_at"),
                last_punch_at=r.get("last_punch_at"),
                worked_minutes=int(r["worked_minutes"]),
                break_minutes=int(r["break_minutes"]),
                expected_minutes=int(r["expected_minutes"]),
                balance_minutes=int(r["balance_minutes"]),
                status=TimesheetStatus(r["status"]),
            )

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> Sequence[TimesheetRow]:
        clauses = ["t.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("t.employee_id=%s")
            params.append(int(employee_id))
        if company_id is not None:
            clauses.append("e.company_id=%s")
            params.append(int(company_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT
                    t.employee_id, e.full_name, t.work_date, t.first_punch_at, t.last_punch_at,
                    t.worked_minutes, t.break_minutes, t.expected_minutes, t.balance_minutes, t.status
                FROM timesheets_daily t
                JOIN employees e ON e.employee_id = t.employee_id
                WHERE {where}
                ORDER BY t.work_date DESC, e.full_name ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                TimesheetRow(
                    employee_id=int(r["employee_id"]),
                    full_name=r["full_name"],
                    work_date=r["work_date"],
                    first_punch_at=r.get("first_punch_at"),
                    last_punch_at=r.get("last_punch_at"),
                    worked_minutes=int(r["worked_minutes"]),
                    break_minutes=int(r["break_minutes"]),
                    expected_minutes=int(r["expected_minutes"]),
                    balance_minutes=int(r["balance_minutes"]),
                    status=TimesheetStatus(r["status"]),
                )
                for r in rows
            ]
