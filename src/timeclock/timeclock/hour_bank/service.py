from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LEDGER_LIMIT
from ..core.context import RequestContext
from ..core.enums import ApprovalStatus, LedgerSource
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..employees.service import employee_in_scope
from .model import HourBankBalance, LedgerEntry
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class HourBankLedger:
    """Hour-bank ledger use cases.

    The reconciliation engine only ever calls `post_automatic` and
    `recompute_balance`; manual entries go through the admin methods and reach
    the balance once approved.
    """

    def __init__(self, ledger: LedgerRepository, employees: EmployeeRepository):
        self._ledger = ledger
        self._employees = employees

    def post_automatic(self, employee_id: int, ref_date: date, minutes: int) -> int:
        entry_id = self._ledger.upsert_automatic(employee_id=int(employee_id), ref_date=ref_date, minutes=int(minutes))
        logger.debug("Automatic ledger entry %s for employee %s on %s = %s min", entry_id, employee_id, ref_date, minutes)
        return entry_id

    def recompute_balance(self, employee_id: int) -> int:
        # Full aggregate every time; never adjusted incrementally.
        total = self._ledger.sum_approved(int(employee_id))
        self._ledger.upsert_balance(int(employee_id), total)
        return total

    def get_balance(self, employee_id: int) -> HourBankBalance:
        balance = self._ledger.get_balance(int(employee_id))
        return balance or HourBankBalance(employee_id=int(employee_id), balance_minutes=0)

    def balance_for(self, ctx: RequestContext, employee_id: int) -> HourBankBalance:
        ctx.require_any()
        employee_in_scope(self._employees, ctx, employee_id)
        return self.get_balance(employee_id)

    def add_manual_entry(
        self,
        ctx: RequestContext,
        *,
        employee_id: int,
        ref_date: date,
        minutes: int,
        source: LedgerSource,
        description: Optional[str] = None,
    ) -> int:
        ctx.require_any()

        if source == LedgerSource.AUTOMATIC:
            raise ValidationError("Automatic entries are created by reconciliation only")
        if int(employee_id) <= 0:
            raise ValidationError("Invalid employee")
        if int(minutes) == 0:
            raise ValidationError("Minutes must not be zero")
        employee_in_scope(self._employees, ctx, employee_id)

        description = description.strip() if description else None
        entry_id = self._ledger.create_entry(
            employee_id=int(employee_id),
            ref_date=ref_date,
            minutes=int(minutes),
            source=source,
            approval_status=ApprovalStatus.PENDING,
            description=description,
            created_by=ctx.actor_id,
        )
        logger.info("Manual ledger entry %s (%s, %s min) created by %s", entry_id, source.value, minutes, ctx.actor_id)
        return entry_id

    def approve_entry(self, ctx: RequestContext, entry_id: int, *, now: Optional[datetime] = None) -> int:
        return self._decide(ctx, entry_id, ApprovalStatus.APPROVED, now=now)

    def reject_entry(self, ctx: RequestContext, entry_id: int, *, now: Optional[datetime] = None) -> int:
        return self._decide(ctx, entry_id, ApprovalStatus.REJECTED, now=now)

    def _decide(self, ctx: RequestContext, entry_id: int, status: ApprovalStatus, *, now: Optional[datetime]) -> int:
        ctx.require_any()

        entry = self._ledger.get_entry(int(entry_id))
        if not entry:
            raise ValidationError("Ledger entry not found")
        employee_in_scope(self._employees, ctx, entry.employee_id)
        if entry.approval_status != ApprovalStatus.PENDING:
            raise ValidationError("Ledger entry was already decided")

        decided = self._ledger.decide_entry(
            entry_id=int(entry_id),
            status=status,
            decided_by=ctx.actor_id,
            decided_at=now or now_local(),
        )
        if not decided:
            raise ValidationError("Ledger entry was already decided")

        logger.info("Ledger entry %s %s by %s", entry_id, status.value, ctx.actor_id)
        return self.recompute_balance(entry.employee_id)

    def list_entries(
        self,
        ctx: RequestContext,
        *,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LEDGER_LIMIT,
    ) -> Sequence[LedgerEntry]:
        ctx.require_any()
        return self._ledger.list_entries(employee_id=employee_id, company_id=ctx.company_id, limit=int(limit))
