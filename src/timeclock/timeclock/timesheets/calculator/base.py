from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ...core.enums import TimesheetStatus
from ...punches.model import PunchEvent


@dataclass(frozen=True)
class PairTotals:
    """Unrounded minute totals derived from a day's punches."""

    worked_minutes: float
    break_minutes: float


class TimesheetCalculator(ABC):
    """Calculator interface (Strategy Pattern for turning punches into totals)."""

    @abstractmethod
    def totals(self, punches: Sequence[PunchEvent]) -> PairTotals:
        raise NotImplementedError

    @abstractmethod
    def status(self, punch_count: int) -> TimesheetStatus:
        raise NotImplementedError
