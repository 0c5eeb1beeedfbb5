from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PunchStatus, PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PunchEvent
from .repository import PunchRepository


def _row_to_punch(r: dict) -> PunchEvent:
    return PunchEvent(
        punch_id=int(r["punch_id"]),
        employee_id=int(r["employee_id"]),
        device_id=int(r["device_id"]),
        unit=r["unit"],
        punch_type=PunchType(r["punch_type"]),
        occurred_at=r["occurred_at"],
        status=PunchStatus(r["status"]),
        selfie_ref=r["selfie_ref"],
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, employee_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT punch_id, employee_id, device_id, unit, punch_type, occurred_at, status, selfie_ref
                FROM time_punches
                WHERE employee_id=%s AND occurred_at >= %s AND occurred_at < %s
                ORDER BY occurred_at ASC, punch_id ASC
                """,
                (int(employee_id), start, end),
            )
            return [_row_to_punch(r) for r in fetchall(cur)]

    def count_between(self, employee_id: int, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM time_punches
                WHERE employee_id=%s AND occurred_at >= %s AND occurred_at < %s
                """,
                (int(employee_id), start, end),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def get_latest(self, employee_id: int) -> Optional[PunchEvent]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT punch_id, employee_id, device_id, unit, punch_type, occurred_at, status, selfie_ref
                FROM time_punches
                WHERE employee_id=%s
                ORDER BY occurred_at DESC, punch_id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_punch(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        device_id: int,
        unit: str,
        punch_type: PunchType,
        occurred_at: datetime,
        status: PunchStatus,
        selfie_ref: str,
    ) -> PunchEvent:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO time_punches(employee_id, device_id, unit, punch_type, occurred_at, status, selfie_ref)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), int(device_id), unit, punch_type.value, occurred_at, status.value, selfie_ref),
            )
            return PunchEvent(
                punch_id=int(cur.lastrowid),
                employee_id=int(employee_id),
                device_id=int(device_id),
                unit=unit,
                punch_type=punch_type,
                occurred_at=occurred_at,
                status=status,
                selfie_ref=selfie_ref,
            )
