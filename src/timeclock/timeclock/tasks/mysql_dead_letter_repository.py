from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ReconciliationFailure
from .repository import DeadLetterRepository


class MySQLDeadLetterRepository(DeadLetterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, *, employee_id: int, work_date: date, attempts: int, last_error: str, failed_at: datetime) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO reconciliation_failures(employee_id, work_date, attempts, last_error, failed_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, int(attempts), last_error[:500], failed_at),
            )
            return int(cur.lastrowid)

    def list_open(self, *, limit: int = 100) -> Sequence[ReconciliationFailure]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT failure_id, employee_id, work_date, attempts, last_error, failed_at, resolved_at
                FROM reconciliation_failures
                WHERE resolved_at IS NULL
                ORDER BY failed_at ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                ReconciliationFailure(
                    failure_id=int(r["failure_id"]),
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    attempts=int(r["attempts"]),
                    last_error=r["last_error"],
                    failed_at=r["failed_at"],
                    resolved_at=r.get("resolved_at"),
                )
                for r in fetchall(cur)
            ]

    def mark_resolved(self, failure_id: int, *, resolved_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "UPDATE reconciliation_failures SET resolved_at=%s WHERE failure_id=%s AND resolved_at IS NULL",
                (resolved_at, int(failure_id)),
            )
            return cur.rowcount > 0
