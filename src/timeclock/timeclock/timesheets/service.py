from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, month_bounds, round_half_up
from ..core.context import RequestContext
from ..core.enums import TimesheetStatus
from ..employees.repository import EmployeeRepository
from ..employees.service import employee_in_scope
from ..hour_bank.service import HourBankLedger
from ..punches.repository import PunchRepository
from ..schedules.service import ScheduleResolver, expected_minutes
from .calculator.base import TimesheetCalculator
from .calculator.positional_calculator import PositionalPairCalculator
from .model import DailyTimesheet, TimesheetRow
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """Turn one employee-day of punches into a DailyTimesheet and hour-bank state.

    Idempotent: running it again over the same punches writes the same values.
    """

    def __init__(
        self,
        punches: PunchRepository,
        timesheets: TimesheetRepository,
        resolver: ScheduleResolver,
        ledger: HourBankLedger,
        *,
        calculator: Optional[TimesheetCalculator] = None,
    ):
        self._punches = punches
        self._timesheets = timesheets
        self._resolver = resolver
        self._ledger = ledger
        self._calculator = calculator or PositionalPairCalculator()

    def compute(self, employee_id: int, work_date: date) -> Optional[DailyTimesheet]:
        """Derive the timesheet without writing anything."""
        start, end = day_bounds(work_date)
        punches = self._punches.list_between(employee_id, start, end)
        if not punches:
            return None

        totals = self._calculator.totals(punches)
        expected = expected_minutes(self._resolver.resolve(employee_id))
        worked = round_half_up(totals.worked_minutes)

        return DailyTimesheet(
            employee_id=int(employee_id),
            work_date=work_date,
            first_punch_at=punches[0].occurred_at,
            last_punch_at=punches[-1].occurred_at,
            worked_minutes=worked,
            break_minutes=round_half_up(totals.break_minutes),
            expected_minutes=expected,
            # Same as round(worked_raw - expected) because expected is whole minutes.
            balance_minutes=worked - expected,
            status=self._calculator.status(len(punches)),
        )

    def reconcile(self, employee_id: int, work_date: date) -> Optional[DailyTimesheet]:
        timesheet = self.compute(employee_id, work_date)
        if timesheet is None:
            logger.debug("No punches for employee %s on %s, nothing to reconcile", employee_id, work_date)
            return None

        self._timesheets.upsert(timesheet)

        # Only complete days feed the hour bank; an older automatic entry is left as is otherwise.
        if timesheet.status == TimesheetStatus.OK:
            self._ledger.post_automatic(employee_id, work_date, timesheet.balance_minutes)
            self._ledger.recompute_balance(employee_id)

        logger.info(
            "Reconciled employee %s on %s: worked=%s break=%s expected=%s balance=%s status=%s",
            employee_id,
            work_date,
            timesheet.worked_minutes,
            timesheet.break_minutes,
            timesheet.expected_minutes,
            timesheet.balance_minutes,
            timesheet.status.value,
        )
        return timesheet


class TimesheetService:
    """Admin read/recalculate use cases over daily timesheets."""

    def __init__(self, timesheets: TimesheetRepository, engine: ReconciliationEngine, employees: EmployeeRepository):
        self._timesheets = timesheets
        self._engine = engine
        self._employees = employees

    def list_month(
        self,
        ctx: RequestContext,
        *,
        year: int,
        month: int,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimesheetRow]:
        ctx.require_any()
        start, end = month_bounds(int(year), int(month))
        return self._timesheets.list_range(
            start_date=start,
            end_date=end,
            employee_id=employee_id,
            company_id=ctx.company_id,
        )

    def recalculate(self, ctx: RequestContext, *, employee_id: int, work_date: date) -> Optional[DailyTimesheet]:
        ctx.require_any()
        employee_in_scope(self._employees, ctx, employee_id)
        return self._engine.reconcile(int(employee_id), work_date)
