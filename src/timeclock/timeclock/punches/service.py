from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import day_bounds, now_local
from ..core.constants import DEFAULT_UNIT, PUNCH_COOLDOWN_MINUTES, SELFIE_CONTENT_TYPE
from ..core.enums import PunchStatus
from ..core.exceptions import EmployeeNotFound, PersistenceFailure, StorageFailure, TooSoon
from ..database.locks import LockTimeout
from ..devices.service import DeviceService
from ..employees.repository import EmployeeRepository
from ..storage.base import ObjectStorage
from ..storage.selfie import decode_selfie
from ..tasks.dispatcher import ReconciliationDispatcher
from .classifier import classify_punch_type
from .model import PunchResult
from .repository import PunchRepository

logger = logging.getLogger(__name__)


def selfie_path(employee_id: int, at: datetime) -> str:
    return f"{employee_id}/{at.date().isoformat()}/{int(at.timestamp() * 1000)}.jpg"


class PunchIntakeService:
    """Use case: accept a kiosk punch.

    The caller has already validated the employee's PIN. Steps: resolve the
    device, enforce the cooldown, classify the punch, store the selfie, write
    the punch and hand reconciliation to the dispatcher.
    """

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        devices: DeviceService,
        storage: ObjectStorage,
        dispatcher: ReconciliationDispatcher,
        locks,
        *,
        cooldown_minutes: int = PUNCH_COOLDOWN_MINUTES,
    ):
        self._punches = punches
        self._employees = employees
        self._devices = devices
        self._storage = storage
        self._dispatcher = dispatcher
        self._locks = locks
        self._cooldown_minutes = int(cooldown_minutes)
        self._cooldown = timedelta(minutes=self._cooldown_minutes)

    def intake(
        self,
        employee_id: int,
        device_secret: str,
        unit: Optional[str],
        selfie_image: str,
        *,
        now: Optional[datetime] = None,
    ) -> PunchResult:
        device = self._devices.resolve(device_secret, unit)

        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise EmployeeNotFound()

        selfie = decode_selfie(selfie_image)

        try:
            with self._locks.hold(f"punch:{employee.employee_id}"):
                punch = self._record(employee.employee_id, device.device_id, device.unit or unit, selfie, now)
        except LockTimeout:
            logger.warning("Concurrent punch in progress for employee %s", employee.employee_id)
            raise TooSoon(self._cooldown.total_seconds(), self._cooldown_minutes)

        self._dispatcher.dispatch(employee.employee_id, punch.occurred_at.date())

        logger.info(
            "Punch %s registered: employee=%s type=%s device=%s",
            punch.punch_id,
            employee.employee_id,
            punch.punch_type.value,
            device.device_id,
        )
        return PunchResult(
            punch_id=punch.punch_id,
            punch_type=punch.punch_type,
            occurred_at=punch.occurred_at,
            employee_name=employee.full_name,
        )

    def _record(self, employee_id: int, device_id: int, unit: Optional[str], selfie: bytes, now: Optional[datetime]):
        now = now or now_local()

        latest = self._punches.get_latest(employee_id)
        if latest is not None:
            elapsed = now - latest.occurred_at
            if elapsed < self._cooldown:
                raise TooSoon((self._cooldown - elapsed).total_seconds(), self._cooldown_minutes)

        start, end = day_bounds(now.date())
        punch_type = classify_punch_type(self._punches.count_between(employee_id, start, end))

        path = selfie_path(employee_id, now)
        try:
            selfie_ref = self._storage.store(path, selfie, SELFIE_CONTENT_TYPE)
        except Exception as exc:
            logger.exception("Selfie upload failed for employee %s", employee_id)
            raise StorageFailure() from exc

        try:
            return self._punches.create(
                employee_id=employee_id,
                device_id=device_id,
                unit=unit or DEFAULT_UNIT,
                punch_type=punch_type,
                occurred_at=now,
                status=PunchStatus.OK,
                selfie_ref=selfie_ref,
            )
        except Exception as exc:
            logger.exception("Punch insert failed for employee %s (selfie %s)", employee_id, selfie_ref)
            self._discard_selfie(path)
            raise PersistenceFailure() from exc

    def _discard_selfie(self, path: str) -> None:
        try:
            self._storage.remove(path)
        except Exception:
            logger.exception("Could not remove orphaned selfie %s", path)
