from __future__ import annotations

import logging
from typing import Optional

from ..common.security import lookup_digest
from ..core.constants import AUTO_DEVICE_NAME, DEFAULT_UNIT
from ..core.exceptions import DeviceUnauthorized, ValidationError
from .model import Device
from .repository import DeviceRepository

logger = logging.getLogger(__name__)


class DeviceService:
    """Use case: resolve the kiosk device that sent a request."""

    def __init__(self, devices: DeviceRepository):
        self._devices = devices

    def resolve(self, device_secret: str, unit: Optional[str] = None) -> Device:
        if not device_secret or not isinstance(device_secret, str):
            raise ValidationError("Invalid device")

        secret_hash = lookup_digest(device_secret)
        device = self._devices.get_active_by_secret_hash(secret_hash)
        if device:
            return device

        if self._devices.has_active_devices():
            logger.warning("Rejected punch from unregistered device secret")
            raise DeviceUnauthorized()

        # Bootstrap: the very first kiosk registers itself.
        device = self._devices.create(name=AUTO_DEVICE_NAME, unit=unit or DEFAULT_UNIT, secret_hash=secret_hash)
        logger.info("Auto-registered device %s for unit %r", device.device_id, device.unit)
        return device
