"""Re-run reconciliations that ended up in the dead-letter table.

Usage: python scripts/backfill_reconciliation.py [--limit N] [--employee ID --date YYYY-MM-DD]
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import parse_iso_date
from src.timeclock.timeclock.container import build_container
from src.timeclock.timeclock.main import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=100)
    parser.add_argument("--employee", type=int, help="reconcile a single employee-day instead")
    parser.add_argument("--date", help="YYYY-MM-DD, used with --employee")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    container = build_container(db_config=dict(settings.DB_CONFIG))

    if args.employee is not None:
        if not args.date:
            parser.error("--date is required with --employee")
        timesheet = container.reconciliation_engine.reconcile(args.employee, parse_iso_date(args.date))
        print(f"OK: {timesheet}")
        return

    report = container.reconciliation_dispatcher.backfill(limit=args.limit)
    print(f"OK: retried={report.retried} resolved={report.resolved} still_failing={report.still_failing}")


if __name__ == "__main__":
    main()
