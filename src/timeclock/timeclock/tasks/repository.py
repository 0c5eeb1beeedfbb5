from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from .model import ReconciliationFailure


class DeadLetterRepository(Protocol):
    def record(self, *, employee_id: int, work_date: date, attempts: int, last_error: str, failed_at: datetime) -> int:
        raise NotImplementedError

    def list_open(self, *, limit: int = 100) -> Sequence[ReconciliationFailure]:
        raise NotImplementedError

    def mark_resolved(self, failure_id: int, *, resolved_at: datetime) -> bool:
        raise NotImplementedError
