from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_active_by_cpf_hash(self, cpf_hash: str) -> Optional[Employee]:
        raise NotImplementedError

    def set_failed_attempts(self, employee_id: int, *, failed_attempts: int, locked_until: Optional[datetime]) -> None:
        """Persist lockout accounting (0 attempts and no lock resets it)."""

        raise NotImplementedError

    def update_pin_hash(self, employee_id: int, pin_hash: str) -> bool:
        raise NotImplementedError

    def record_login_attempt(
        self,
        *,
        cpf_hash: str,
        device_id: Optional[int],
        success: bool,
        attempted_at: datetime,
    ) -> None:
        raise NotImplementedError
