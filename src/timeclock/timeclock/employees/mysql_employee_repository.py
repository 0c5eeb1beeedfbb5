from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, optional_int
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, full_name, cpf_hash, pin_hash, sector_id, company_id,
    photo_ref, is_active, failed_attempts, locked_until
"""


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        cpf_hash=row["cpf_hash"],
        pin_hash=row["pin_hash"],
        sector_id=optional_int(row.get("sector_id")),
        company_id=optional_int(row.get("company_id")),
        photo_ref=row.get("photo_ref"),
        is_active=bool(row.get("is_active", True)),
        failed_attempts=int(row.get("failed_attempts") or 0),
        locked_until=row.get("locked_until"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_active_by_cpf_hash(self, cpf_hash: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE cpf_hash=%s AND is_active=1",
                (cpf_hash,),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def set_failed_attempts(self, employee_id: int, *, failed_attempts: int, locked_until: Optional[datetime]) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "UPDATE employees SET failed_attempts=%s, locked_until=%s WHERE employee_id=%s",
                (int(failed_attempts), locked_until, int(employee_id)),
            )

    def update_pin_hash(self, employee_id: int, pin_hash: str) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "UPDATE employees SET pin_hash=%s, failed_attempts=0, locked_until=NULL WHERE employee_id=%s",
                (pin_hash, int(employee_id)),
            )
            return cur.rowcount > 0

    def record_login_attempt(
        self,
        *,
        cpf_hash: str,
        device_id: Optional[int],
        success: bool,
        attempted_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO login_attempts(cpf_hash, device_id, success, attempted_at)
                VALUES(%s,%s,%s,%s)
                """,
                (cpf_hash, device_id, 1 if success else 0, attempted_at),
            )
