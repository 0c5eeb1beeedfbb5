from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Device
from .repository import DeviceRepository


class MySQLDeviceRepository(DeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_by_secret_hash(self, secret_hash: str) -> Optional[Device]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT device_id, device_name, unit, secret_hash, is_active
                FROM time_devices
                WHERE secret_hash=%s AND is_active=1
                LIMIT 1
                """,
                (secret_hash,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Device(
                device_id=int(r["device_id"]),
                name=r["device_name"],
                unit=r["unit"],
                secret_hash=r["secret_hash"],
                is_active=bool(r["is_active"]),
            )

    def has_active_devices(self) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("SELECT 1 AS found FROM time_devices WHERE is_active=1 LIMIT 1")
            return fetchone(cur) is not None

    def create(self, *, name: str, unit: str, secret_hash: str) -> Device:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO time_devices(device_name, unit, secret_hash, is_active)
                VALUES(%s,%s,%s,1)
                """,
                (name, unit, secret_hash),
            )
            return Device(device_id=int(cur.lastrowid), name=name, unit=unit, secret_hash=secret_hash)
