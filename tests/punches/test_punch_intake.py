from datetime import date, datetime, timedelta

import pytest

from src.timeclock.timeclock.common.security import lookup_digest
from src.timeclock.timeclock.core.enums import PunchType
from src.timeclock.timeclock.core.exceptions import (
    DeviceUnauthorized,
    EmployeeNotFound,
    PersistenceFailure,
    StorageFailure,
    TooSoon,
    ValidationError,
)
from src.timeclock.timeclock.devices.model import Device
from src.timeclock.timeclock.devices.service import DeviceService
from src.timeclock.timeclock.punches.service import PunchIntakeService, selfie_path
from tests.fakes import (
    InMemoryDevices,
    InMemoryEmployees,
    InMemoryPunches,
    InMemoryStorage,
    RecordingDispatcher,
    RecordingLocks,
    TimedOutLocks,
    make_employee,
    selfie_b64,
)

SECRET = "kiosk-secret"


def _build(*, storage=None, devices=None, locks=None):
    punches = InMemoryPunches()
    employees = InMemoryEmployees(make_employee(1, full_name="Ana"), make_employee(2, is_active=False))
    devices = devices or InMemoryDevices(Device(device_id=7, name="Front", unit="HQ", secret_hash=lookup_digest(SECRET)))
    storage = storage or InMemoryStorage()
    dispatcher = RecordingDispatcher()
    locks = locks or RecordingLocks()
    svc = PunchIntakeService(punches, employees, DeviceService(devices), storage, dispatcher, locks)
    return svc, punches, storage, dispatcher, locks


def test_first_punch_of_the_day_is_an_entry_and_triggers_reconciliation():
    svc, punches, storage, dispatcher, locks = _build()
    now = datetime(2026, 3, 2, 9, 0, 0)

    result = svc.intake(1, SECRET, None, selfie_b64(), now=now)

    assert result.punch_type == PunchType.ENTRY
    assert result.employee_name == "Ana"
    assert result.occurred_at == now
    assert len(punches.punches) == 1
    assert punches.punches[0].unit == "HQ"
    assert punches.punches[0].device_id == 7
    assert punches.punches[0].selfie_ref == f"selfies/{selfie_path(1, now)}"
    assert selfie_path(1, now) in storage.objects
    assert dispatcher.calls == [(1, date(2026, 3, 2))]
    assert locks.keys == ["punch:1"]


def test_punch_within_cooldown_is_rejected_with_retry_hint():
    svc, punches, _, dispatcher, _ = _build()
    first = datetime(2026, 3, 2, 9, 0, 0)
    svc.intake(1, SECRET, None, selfie_b64(), now=first)

    with pytest.raises(TooSoon) as exc_info:
        svc.intake(1, SECRET, None, selfie_b64(), now=first + timedelta(minutes=2, seconds=59))

    assert exc_info.value.retry_after_seconds == 1
    assert len(punches.punches) == 1
    assert len(dispatcher.calls) == 1


def test_punch_exactly_at_cooldown_boundary_is_accepted():
    svc, punches, _, _, _ = _build()
    first = datetime(2026, 3, 2, 9, 0, 0)
    svc.intake(1, SECRET, None, selfie_b64(), now=first)

    result = svc.intake(1, SECRET, None, selfie_b64(), now=first + timedelta(minutes=3))

    assert result.punch_type == PunchType.BREAK_START
    assert len(punches.punches) == 2


def test_cooldown_applies_across_midnight():
    svc, _, _, _, _ = _build()
    svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 23, 59, 0))

    with pytest.raises(TooSoon):
        svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 3, 0, 1, 0))


def test_classification_resets_on_a_new_day():
    svc, _, _, _, _ = _build()
    svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))
    svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 12, 0, 0))

    result = svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 3, 9, 0, 0))

    assert result.punch_type == PunchType.ENTRY


def test_storage_failure_leaves_no_punch_and_no_reconciliation():
    svc, punches, _, dispatcher, _ = _build(storage=InMemoryStorage(fail=True))

    with pytest.raises(StorageFailure):
        svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))

    assert punches.punches == []
    assert dispatcher.calls == []


def test_insert_failure_is_reported_as_persistence_failure():
    svc, punches, storage, dispatcher, _ = _build()
    punches.fail_on_create = True

    with pytest.raises(PersistenceFailure):
        svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))

    assert dispatcher.calls == []
    assert storage.objects == {}


def test_invalid_selfie_is_rejected_before_anything_is_written():
    svc, punches, storage, _, _ = _build()

    with pytest.raises(ValidationError):
        svc.intake(1, SECRET, None, "bm90IGFuIGltYWdl", now=datetime(2026, 3, 2, 9, 0, 0))

    assert punches.punches == []
    assert storage.objects == {}


def test_inactive_or_unknown_employee_cannot_punch():
    svc, _, _, _, _ = _build()

    with pytest.raises(EmployeeNotFound):
        svc.intake(2, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))
    with pytest.raises(EmployeeNotFound):
        svc.intake(99, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))


def test_unknown_device_is_rejected_when_devices_exist():
    svc, punches, _, _, _ = _build()

    with pytest.raises(DeviceUnauthorized):
        svc.intake(1, "other-secret", None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))

    assert punches.punches == []


def test_unit_falls_back_to_default_for_auto_registered_device():
    svc, punches, _, _, _ = _build(devices=InMemoryDevices())

    svc.intake(1, SECRET, None, selfie_b64(data_url=False), now=datetime(2026, 3, 2, 9, 0, 0))

    assert punches.punches[0].unit == "Demo"


def test_busy_employee_lock_is_reported_as_too_soon_and_writes_nothing():
    svc, punches, storage, dispatcher, _ = _build(locks=TimedOutLocks())

    with pytest.raises(TooSoon) as exc_info:
        svc.intake(1, SECRET, None, selfie_b64(), now=datetime(2026, 3, 2, 9, 0, 0))

    assert exc_info.value.retry_after_seconds == 180
    assert punches.punches == []
    assert storage.objects == {}
    assert dispatcher.calls == []
