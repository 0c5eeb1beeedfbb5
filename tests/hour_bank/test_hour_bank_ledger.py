from datetime import date, datetime

import pytest

from src.timeclock.timeclock.core.context import RequestContext
from src.timeclock.timeclock.core.enums import ApprovalStatus, LedgerSource, Role
from src.timeclock.timeclock.core.exceptions import AuthorizationError, ValidationError
from src.timeclock.timeclock.hour_bank.service import HourBankLedger
from tests.fakes import InMemoryEmployees, InMemoryLedger, make_employee

HR = RequestContext(actor_id=50, role=Role.HR, company_id=1)
MANAGER = RequestContext(actor_id=51, role=Role.MANAGER, company_id=1)
ADMIN = RequestContext(actor_id=1, role=Role.ADMIN)
DAY = date(2026, 3, 2)


def _ledger():
    repo = InMemoryLedger()
    employees = InMemoryEmployees(
        make_employee(1, company_id=1),
        make_employee(2, cpf="11144477735", company_id=2),
    )
    return HourBankLedger(repo, employees), repo


def test_balance_defaults_to_zero():
    svc, _ = _ledger()
    assert svc.get_balance(1).balance_minutes == 0


def test_only_approved_entries_count_toward_the_balance():
    svc, repo = _ledger()
    svc.post_automatic(1, DAY, 60)
    pending = svc.add_manual_entry(HR, employee_id=1, ref_date=DAY, minutes=120, source=LedgerSource.COMPENSATION)
    rejected = svc.add_manual_entry(HR, employee_id=1, ref_date=DAY, minutes=-30, source=LedgerSource.MANUAL_ADJUSTMENT)
    svc.reject_entry(HR, rejected, now=datetime(2026, 3, 3, 10, 0))

    assert svc.recompute_balance(1) == 60
    assert repo.get_entry(pending).approval_status == ApprovalStatus.PENDING
    assert repo.get_entry(rejected).approval_status == ApprovalStatus.REJECTED


def test_approving_a_manual_entry_updates_the_balance():
    svc, repo = _ledger()
    svc.post_automatic(1, DAY, -45)
    entry_id = svc.add_manual_entry(
        HR, employee_id=1, ref_date=DAY, minutes=480, source=LedgerSource.MEDICAL_CERTIFICATE, description="  flu  "
    )

    balance = svc.approve_entry(HR, entry_id, now=datetime(2026, 3, 3, 10, 0))

    entry = repo.get_entry(entry_id)
    assert balance == 435
    assert svc.get_balance(1).balance_minutes == 435
    assert entry.approval_status == ApprovalStatus.APPROVED
    assert entry.approved_by == 50
    assert entry.approved_at == datetime(2026, 3, 3, 10, 0)
    assert entry.created_by == 50
    assert entry.description == "flu"


def test_entry_cannot_be_decided_twice():
    svc, _ = _ledger()
    entry_id = svc.add_manual_entry(HR, employee_id=1, ref_date=DAY, minutes=60, source=LedgerSource.EXCUSED_ABSENCE)
    svc.approve_entry(HR, entry_id)

    with pytest.raises(ValidationError):
        svc.reject_entry(HR, entry_id)


def test_unknown_entry_is_rejected():
    svc, _ = _ledger()
    with pytest.raises(ValidationError):
        svc.approve_entry(HR, 999)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"employee_id": 1, "minutes": 30, "source": LedgerSource.AUTOMATIC},
        {"employee_id": 1, "minutes": 0, "source": LedgerSource.COMPENSATION},
        {"employee_id": 0, "minutes": 30, "source": LedgerSource.COMPENSATION},
    ],
)
def test_invalid_manual_entries_are_rejected(kwargs):
    svc, repo = _ledger()
    with pytest.raises(ValidationError):
        svc.add_manual_entry(HR, ref_date=DAY, **kwargs)
    assert repo.entries == {}


def test_manager_cannot_touch_the_ledger():
    svc, repo = _ledger()
    with pytest.raises(AuthorizationError):
        svc.add_manual_entry(MANAGER, employee_id=1, ref_date=DAY, minutes=30, source=LedgerSource.COMPENSATION)
    with pytest.raises(AuthorizationError):
        svc.list_entries(MANAGER)
    assert repo.entries == {}


def test_automatic_entry_is_unique_per_employee_day():
    svc, repo = _ledger()
    first = svc.post_automatic(1, DAY, 60)
    second = svc.post_automatic(1, DAY, 15)

    assert first == second
    assert repo.automatic_entries(1, DAY)[0].minutes == 15
    assert svc.recompute_balance(1) == 15


def test_list_entries_filters_by_employee():
    svc, _ = _ledger()
    svc.post_automatic(1, DAY, 60)
    svc.post_automatic(2, DAY, 30)

    entries = svc.list_entries(HR, employee_id=2)

    assert [e.employee_id for e in entries] == [2]


def test_company_bound_actor_cannot_add_entries_for_another_company():
    svc, repo = _ledger()

    with pytest.raises(AuthorizationError):
        svc.add_manual_entry(HR, employee_id=2, ref_date=DAY, minutes=600, source=LedgerSource.COMPENSATION)

    assert repo.entries == {}


def test_company_bound_actor_cannot_decide_entries_of_another_company():
    svc, repo = _ledger()
    entry_id = svc.add_manual_entry(ADMIN, employee_id=2, ref_date=DAY, minutes=600, source=LedgerSource.COMPENSATION)

    with pytest.raises(AuthorizationError):
        svc.approve_entry(HR, entry_id)
    with pytest.raises(AuthorizationError):
        svc.reject_entry(HR, entry_id)

    assert repo.get_entry(entry_id).approval_status == ApprovalStatus.PENDING
    assert repo.balances == {}


def test_balance_is_scoped_to_the_actor_company():
    svc, _ = _ledger()
    svc.post_automatic(2, DAY, 90)
    svc.recompute_balance(2)

    with pytest.raises(AuthorizationError):
        svc.balance_for(HR, 2)
    with pytest.raises(AuthorizationError):
        svc.balance_for(MANAGER, 1)

    assert svc.balance_for(ADMIN, 2).balance_minutes == 90
    assert svc.balance_for(HR, 1).balance_minutes == 0


def test_manual_entry_for_unknown_employee_is_rejected():
    svc, repo = _ledger()

    with pytest.raises(ValidationError):
        svc.add_manual_entry(HR, employee_id=99, ref_date=DAY, minutes=30, source=LedgerSource.COMPENSATION)

    assert repo.entries == {}
