from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from .core.constants import PUNCH_LOCK_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .database.locks import MySQLAdvisoryLocks
from .devices.mysql_device_repository import MySQLDeviceRepository
from .devices.service import DeviceService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import IdentityService
from .hour_bank.mysql_ledger_repository import MySQLLedgerRepository
from .hour_bank.service import HourBankLedger
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.service import PunchIntakeService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleResolver
from .storage.base import ObjectStorage
from .storage.local_storage import LocalObjectStorage
from .tasks.dispatcher import ReconciliationDispatcher
from .tasks.mysql_dead_letter_repository import MySQLDeadLetterRepository
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.service import ReconciliationEngine, TimesheetService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    devices_repo: MySQLDeviceRepository
    punches_repo: MySQLPunchRepository
    schedules_repo: MySQLScheduleRepository
    timesheets_repo: MySQLTimesheetRepository
    ledger_repo: MySQLLedgerRepository
    dead_letters_repo: MySQLDeadLetterRepository
    storage: ObjectStorage

    identity_service: IdentityService
    device_service: DeviceService
    schedule_resolver: ScheduleResolver
    hour_bank_ledger: HourBankLedger
    reconciliation_engine: ReconciliationEngine
    reconciliation_dispatcher: ReconciliationDispatcher
    punch_intake_service: PunchIntakeService
    timesheet_service: TimesheetService


def build_container(
    *,
    db_config: dict,
    storage_dir: str = "storage",
    selfie_bucket: str = "selfies",
    reconcile_max_attempts: int = 3,
    reconcile_backoff_seconds: float = 0.5,
    reconcile_workers: int = 0,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    devices_repo = MySQLDeviceRepository(conn)
    punches_repo = MySQLPunchRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)
    timesheets_repo = MySQLTimesheetRepository(conn)
    ledger_repo = MySQLLedgerRepository(conn)
    dead_letters_repo = MySQLDeadLetterRepository(conn)
    storage = LocalObjectStorage(storage_dir, bucket=selfie_bucket)

    identity_service = IdentityService(employees_repo)
    device_service = DeviceService(devices_repo)
    schedule_resolver = ScheduleResolver(schedules_repo, employees_repo)
    hour_bank_ledger = HourBankLedger(ledger_repo, employees_repo)
    reconciliation_engine = ReconciliationEngine(punches_repo, timesheets_repo, schedule_resolver, hour_bank_ledger)

    executor = ThreadPoolExecutor(max_workers=reconcile_workers, thread_name_prefix="reconcile") if reconcile_workers > 0 else None
    reconciliation_dispatcher = ReconciliationDispatcher(
        reconciliation_engine,
        dead_letters_repo,
        max_attempts=reconcile_max_attempts,
        backoff_seconds=reconcile_backoff_seconds,
        executor=executor,
    )
    punch_intake_service = PunchIntakeService(
        punches_repo,
        employees_repo,
        device_service,
        storage,
        reconciliation_dispatcher,
        MySQLAdvisoryLocks(conn, timeout_seconds=PUNCH_LOCK_TIMEOUT_SECONDS),
    )
    timesheet_service = TimesheetService(timesheets_repo, reconciliation_engine, employees_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        devices_repo=devices_repo,
        punches_repo=punches_repo,
        schedules_repo=schedules_repo,
        timesheets_repo=timesheets_repo,
        ledger_repo=ledger_repo,
        dead_letters_repo=dead_letters_repo,
        storage=storage,
        identity_service=identity_service,
        device_service=device_service,
        schedule_resolver=schedule_resolver,
        hour_bank_ledger=hour_bank_ledger,
        reconciliation_engine=reconciliation_engine,
        reconciliation_dispatcher=reconciliation_dispatcher,
        punch_intake_service=punch_intake_service,
        timesheet_service=timesheet_service,
    )
