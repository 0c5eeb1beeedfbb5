from __future__ import annotations

from typing import Optional, Protocol

from .model import Device


class DeviceRepository(Protocol):
    def get_active_by_secret_hash(self, secret_hash: str) -> Optional[Device]:
        raise NotImplementedError

    def has_active_devices(self) -> bool:
        raise NotImplementedError

    def create(self, *, name: str, unit: str, secret_hash: str) -> Device:
        raise NotImplementedError
