from datetime import datetime, timedelta

import pytest

from src.timeclock.timeclock.common.security import verify_secret
from src.timeclock.timeclock.core.exceptions import (
    AccountLocked,
    EmployeeNotFound,
    InvalidCredentials,
    ValidationError,
)
from src.timeclock.timeclock.employees.service import IdentityService
from tests.fakes import InMemoryEmployees, make_employee

CPF = "529.982.247-25"
NOW = datetime(2026, 3, 2, 9, 0, 0)


def _service():
    repo = InMemoryEmployees(make_employee(1, cpf="52998224725", pin="123456"))
    return IdentityService(repo), repo


def test_valid_credentials_return_employee_and_log_attempt():
    svc, repo = _service()

    employee = svc.validate(CPF, "123456", device_id=3, now=NOW)

    assert employee.employee_id == 1
    assert repo.attempts[-1]["success"] is True
    assert repo.attempts[-1]["device_id"] == 3


def test_unknown_cpf_gets_the_generic_message():
    svc, repo = _service()

    with pytest.raises(EmployeeNotFound) as exc_info:
        svc.validate("111.444.777-35", "123456", now=NOW)

    assert str(exc_info.value) == "Invalid CPF or PIN"
    assert repo.attempts[-1]["success"] is False


def test_wrong_pin_increments_counter():
    svc, repo = _service()

    with pytest.raises(InvalidCredentials) as exc_info:
        svc.validate(CPF, "000000", now=NOW)

    assert str(exc_info.value) == "Invalid CPF or PIN"
    assert repo.by_id[1].failed_attempts == 1
    assert repo.by_id[1].locked_until is None


def test_fifth_failure_locks_for_two_minutes():
    svc, repo = _service()
    for _ in range(4):
        with pytest.raises(InvalidCredentials):
            svc.validate(CPF, "000000", now=NOW)

    with pytest.raises(AccountLocked) as exc_info:
        svc.validate(CPF, "000000", now=NOW)

    assert exc_info.value.remaining_minutes == 2
    assert repo.by_id[1].locked_until == NOW + timedelta(minutes=2)


def test_locked_account_rejects_even_the_right_pin_until_expiry():
    svc, repo = _service()
    for _ in range(4):
        with pytest.raises(InvalidCredentials):
            svc.validate(CPF, "000000", now=NOW)
    with pytest.raises(AccountLocked):
        svc.validate(CPF, "000000", now=NOW)

    with pytest.raises(AccountLocked) as exc_info:
        svc.validate(CPF, "123456", now=NOW + timedelta(seconds=30))
    assert exc_info.value.remaining_minutes == 2
    assert repo.by_id[1].failed_attempts == 5

    employee = svc.validate(CPF, "123456", now=NOW + timedelta(minutes=2))
    assert employee.employee_id == 1
    assert repo.by_id[1].failed_attempts == 0
    assert repo.by_id[1].locked_until is None


def test_success_resets_failed_attempts():
    svc, repo = _service()
    with pytest.raises(InvalidCredentials):
        svc.validate(CPF, "000000", now=NOW)

    svc.validate(CPF, "123456", now=NOW)

    assert repo.by_id[1].failed_attempts == 0


def test_set_pin_requires_six_digits_and_rehashes():
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.set_pin(1, "12ab56")
    with pytest.raises(ValidationError):
        svc.set_pin(99, "654321")

    svc.set_pin(1, "654321")
    assert verify_secret("654321", repo.by_id[1].pin_hash)
