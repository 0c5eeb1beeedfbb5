"""Example: use the service layer without Flask.

Controllers are thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import format_minutes, now_local
from src.timeclock.timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    timesheet = container.reconciliation_engine.reconcile(1, now_local().date())
    print(timesheet)
    print(format_minutes(container.hour_bank_ledger.get_balance(1).balance_minutes))


if __name__ == "__main__":
    main()
