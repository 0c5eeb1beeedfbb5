from __future__ import annotations

from typing import Sequence

from ...core.enums import PunchType, TimesheetStatus
from ...punches.model import PunchEvent
from .base import PairTotals, TimesheetCalculator


class PositionalPairCalculator(TimesheetCalculator):
    """Pair punches by position: (0,1), (2,3), ...

    A pair counts as break time only when its first punch is a break_start;
    every other pair is worked time. A trailing unpaired punch is ignored.
    """

    def totals(self, punches: Sequence[PunchEvent]) -> PairTotals:
        worked = 0.0
        on_break = 0.0
        for i in range(0, len(punches) - 1, 2):
            start, end = punches[i], punches[i + 1]
            diff = (end.occurred_at - start.occurred_at).total_seconds() / 60
            if start.punch_type == PunchType.BREAK_START:
                on_break += diff
            else:
                worked += diff
        return PairTotals(worked_minutes=worked, break_minutes=on_break)

    def status(self, punch_count: int) -> TimesheetStatus:
        if punch_count >= 4:
            return TimesheetStatus.OK
        if punch_count >= 2:
            return TimesheetStatus.REVIEW
        return TimesheetStatus.PENDING
