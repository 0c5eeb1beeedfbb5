from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchStatus, PunchType
from .model import PunchEvent


class PunchRepository(Protocol):
    """Append-only punch store: there is deliberately no update or delete."""

    def list_between(self, employee_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with start <= occurred_at < end, oldest first."""

        raise NotImplementedError

    def count_between(self, employee_id: int, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    def get_latest(self, employee_id: int) -> Optional[PunchEvent]:
        raise NotImplementedError

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
        raise NotImplementedError
