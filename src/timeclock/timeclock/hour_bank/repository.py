from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, LedgerSource
from .model import HourBankBalance, LedgerEntry


class LedgerRepository(Protocol):
    def upsert_automatic(self, *, employee_id: int, ref_date: date, minutes: int) -> int:
        """Atomically insert or update the single automatic entry for the day.

        Returns entry_id.
        """

        raise NotImplementedError

    def create_entry(
        self,
        *,
        employee_id: int,
        ref_date: date,
        minutes: int,
        source: LedgerSource,
        approval_status: ApprovalStatus,
        description: Optional[str],
        created_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        raise NotImplementedError

    def decide_entry(
        self,
        *,
        entry_id: int,
        status: ApprovalStatus,
        decided_by: Optional[int],
        decided_at: datetime,
    ) -> bool:
        """Move a pending entry to approved/rejected. False if it was not pending."""

        raise NotImplementedError

    def list_entries(
        self,
        *,
        employee_id: Optional[int] = None,
        company_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LedgerEntry]:
        raise NotImplementedError

    def sum_approved(self, employee_id: int) -> int:
        raise NotImplementedError

    def upsert_balance(self, employee_id: int, balance_minutes: int) -> None:
        raise NotImplementedError

    def get_balance(self, employee_id: int) -> Optional[HourBankBalance]:
        raise NotImplementedError
