from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Device:
    """Domain entity: a registered kiosk device."""

    device_id: int
    name: str
    unit: str
    secret_hash: str
    is_active: bool = True
