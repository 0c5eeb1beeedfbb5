from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.security import hash_secret, lookup_digest, verify_secret
from ..common.validators import normalize_cpf, require_pin
from ..core.constants import LOCKOUT_MINUTES, MAX_FAILED_PIN_ATTEMPTS
from ..core.context import RequestContext
from ..core.exceptions import AccountLocked, EmployeeNotFound, InvalidCredentials, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class IdentityService:
    """Use case: identify a kiosk employee by CPF + PIN, with lockout accounting."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        max_attempts: int = MAX_FAILED_PIN_ATTEMPTS,
        lockout_minutes: int = LOCKOUT_MINUTES,
    ):
        self._employees = employees
        self._max_attempts = int(max_attempts)
        self._lockout = timedelta(minutes=int(lockout_minutes))

    def validate(self, cpf: str, pin: str, *, device_id: Optional[int] = None, now: Optional[datetime] = None) -> Employee:
        now = now or now_local()
        cpf_hash = lookup_digest(normalize_cpf(cpf))

        employee = self._employees.get_active_by_cpf_hash(cpf_hash)
        if not employee:
            logger.info("Kiosk login failed: unknown cpf_hash (device_id=%s)", device_id)
            self._employees.record_login_attempt(cpf_hash=cpf_hash, device_id=device_id, success=False, attempted_at=now)
            raise EmployeeNotFound()

        # A locked account is rejected before the PIN is checked, so it does not consume an attempt.
        if employee.is_locked(now):
            raise AccountLocked((employee.locked_until - now).total_seconds())

        if not verify_secret(pin or "", employee.pin_hash):
            attempts = employee.failed_attempts + 1
            locked_until = now + self._lockout if attempts >= self._max_attempts else None
            self._employees.set_failed_attempts(
                employee.employee_id, failed_attempts=attempts, locked_until=locked_until
            )
            self._employees.record_login_attempt(cpf_hash=cpf_hash, device_id=device_id, success=False, attempted_at=now)

            if locked_until is not None:
                logger.warning(
                    "Employee %s locked until %s after %s failed PIN attempts",
                    employee.employee_id,
                    locked_until,
                    attempts,
                )
                raise AccountLocked(self._lockout.total_seconds())
            raise InvalidCredentials()

        if employee.failed_attempts or employee.locked_until is not None:
            self._employees.set_failed_attempts(employee.employee_id, failed_attempts=0, locked_until=None)
        self._employees.record_login_attempt(cpf_hash=cpf_hash, device_id=device_id, success=True, attempted_at=now)
        return employee

    def set_pin(self, employee_id: int, pin: str) -> None:
        pin = require_pin(pin)
        if not self._employees.update_pin_hash(int(employee_id), hash_secret(pin)):
            raise ValidationError("Employee not found")


def employee_in_scope(employees: EmployeeRepository, ctx: RequestContext, employee_id: int) -> Employee:
    """Load an employee for an admin use case, enforcing the actor's company."""
    employee = employees.get_by_id(int(employee_id))
    if not employee:
        raise ValidationError("Employee not found")
    ctx.require_company(employee.company_id)
    return employee
