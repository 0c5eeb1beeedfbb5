from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import FrozenSet, Optional

from ..core.enums import ScheduleOrigin

WEEKDAYS: FrozenSet[int] = frozenset(range(7))


@dataclass(frozen=True)
class WorkSchedule:
    """Expected work schedule (per employee or per sector).

    `weekly_days` uses date.weekday() numbering (0=Monday). Tolerances and
    weekly days are stored for the admin screens; reconciliation does not read them.
    """

    expected_start: Optional[time] = None
    expected_end: Optional[time] = None
    break_minutes: Optional[int] = None
    tolerance_early_minutes: int = 0
    tolerance_late_minutes: int = 0
    weekly_days: FrozenSet[int] = field(default=WEEKDAYS)
    origin: ScheduleOrigin = ScheduleOrigin.DEFAULT

    @property
    def has_hours(self) -> bool:
        return self.expected_start is not None and self.expected_end is not None


DEFAULT_SCHEDULE = WorkSchedule()
