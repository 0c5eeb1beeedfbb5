from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import ApprovalStatus, LedgerSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import HourBankBalance, LedgerEntry
from .repository import LedgerRepository

_ENTRY_COLUMNS = """
    l.entry_id, l.employee_id, l.ref_date, l.minutes, l.source, l.approval_status,
    l.description, l.created_by, l.approved_by, l.approved_at, l.created_at
"""


def _row_to_entry(r: dict) -> LedgerEntry:
    return LedgerEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        ref_date=r["ref_date"],
        minutes=int(r["minutes"]),
        source=LedgerSource(r["source"]),
        approval_status=ApprovalStatus(r["approval_status"]),
        description=r.get("description"),
        created_by=optional_int(r.get("created_by")),
        approved_by=optional_int(r.get("approved_by")),
        approved_at=r.get("approved_at"),
        created_at=r.get("created_at"),
    )


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_automatic(self, *, employee_id: int, ref_date: date, minutes: int) -> int:
        with db_cursor(self._conn_factory) as cur:
            # uq_hour_bank_automatic covers (employee_id, automatic_ref_date), so a
            # concurrent reconciliation lands on the same row instead of a duplicate.
            cur.execute(
                """
                INSERT INTO hour_bank_ledger(employee_id, ref_date, minutes, source, approval_status)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE minutes=VALUES(minutes), entry_id=LAST_INSERT_ID(entry_id)
                """,
                (
                    int(employee_id),
                    ref_date,
                    int(minutes),
                    LedgerSource.AUTOMATIC.value,
                    ApprovalStatus.APPROVED.value,
                ),
            )
            return int(cur.lastrowid)

    def create_entry(
        self,
        *,
        employee_id: int,
        ref_date: date,
        minutes: int,
        source: LedgerSource,
        approval_status: ApprovalStatus,
        description: Optional[str],
        created_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO hour_bank_ledger(
                    employee_id, ref_date, minutes, source, approval_status, description, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    ref_date,
                    int(minutes),
                    source.value,
                    approval_status.value,
                    description,
                    created_by,
                ),
            )
            return int(cur.lastrowid)

    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT {_ENTRY_COLUMNS} FROM hour_bank_ledger l WHERE l.entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def decide_entry(
        self,
        *,
        entry_id: int,
        status: ApprovalStatus,
        decided_by: Optional[int],
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE hour_bank_ledger
                SET approval_status=%s, approved_by=%s, approved_at=%s
                WHERE entry_id=%s AND approval_status=%s
                """,
                (status.value, decided_by, decided_at, int(entry_id), ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_entries(
        self,
        *,
        employee_id: Optional[int] = None,
        company_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LedgerEntry]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("l.employee_id=%s")
            params.append(int(employee_id))
        if company_id is not None:
            clauses.append("e.company_id=%s")
            params.append(int(company_id))
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM hour_bank_ledger l
                JOIN employees e ON e.employee_id = l.employee_id
                WHERE {where}
                ORDER BY l.ref_date DESC, l.entry_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def sum_approved(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT COALESCE(SUM(minutes), 0) AS total
                FROM hour_bank_ledger
                WHERE employee_id=%s AND approval_status=%s
                """,
                (int(employee_id), ApprovalStatus.APPROVED.value),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def upsert_balance(self, employee_id: int, balance_minutes: int) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO hour_bank_balance(employee_id, balance_minutes)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE balance_minutes=VALUES(balance_minutes)
                """,
                (int(employee_id), int(balance_minutes)),
            )

    def get_balance(self, employee_id: int) -> Optional[HourBankBalance]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "SELECT employee_id, balance_minutes FROM hour_bank_balance WHERE employee_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return HourBankBalance(employee_id=int(r["employee_id"]), balance_minutes=int(r["balance_minutes"]))
