import pytest

from src.timeclock.timeclock.common.security import lookup_digest
from src.timeclock.timeclock.core.exceptions import DeviceUnauthorized, ValidationError
from src.timeclock.timeclock.devices.model import Device
from src.timeclock.timeclock.devices.service import DeviceService
from tests.fakes import InMemoryDevices


def test_known_device_is_resolved_by_secret():
    repo = InMemoryDevices(Device(device_id=4, name="Lobby", unit="HQ", secret_hash=lookup_digest("s3cret")))

    assert DeviceService(repo).resolve("s3cret").device_id == 4


def test_first_device_registers_itself():
    repo = InMemoryDevices()

    device = DeviceService(repo).resolve("brand-new", "Warehouse")

    assert device.unit == "Warehouse"
    assert device.name == "Auto device"
    assert repo.devices == [device]
    assert DeviceService(repo).resolve("brand-new") == device


def test_unknown_secret_is_rejected_once_devices_exist():
    repo = InMemoryDevices(Device(device_id=4, name="Lobby", unit="HQ", secret_hash=lookup_digest("s3cret")))

    with pytest.raises(DeviceUnauthorized):
        DeviceService(repo).resolve("guess")
    assert len(repo.devices) == 1


def test_inactive_device_is_not_resolved():
    repo = InMemoryDevices(
        Device(device_id=4, name="Lobby", unit="HQ", secret_hash=lookup_digest("s3cret"), is_active=False),
        Device(device_id=5, name="Gate", unit="HQ", secret_hash=lookup_digest("other")),
    )

    with pytest.raises(DeviceUnauthorized):
        DeviceService(repo).resolve("s3cret")


def test_blank_secret_is_invalid():
    with pytest.raises(ValidationError):
        DeviceService(InMemoryDevices()).resolve("")
