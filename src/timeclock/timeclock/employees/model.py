from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: a kiosk employee.

    Note: plain data object, no DB access code here.
    """

    employee_id: int
    full_name: str
    cpf_hash: str
    pin_hash: str
    sector_id: Optional[int] = None
    company_id: Optional[int] = None
    photo_ref: Optional[str] = None
    is_active: bool = True
    failed_attempts: int = 0
    locked_until: Optional[datetime] = None

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
