from datetime import datetime

from src.timeclock.timeclock.core.enums import PunchStatus, PunchType, TimesheetStatus
from src.timeclock.timeclock.punches.model import PunchEvent
from src.timeclock.timeclock.timesheets.calculator.positional_calculator import PositionalPairCalculator


def _punch(i: int, hh: int, mm: int, punch_type: PunchType, ss: int = 0) -> PunchEvent:
    return PunchEvent(
        punch_id=i,
        employee_id=1,
        device_id=1,
        unit="HQ",
        punch_type=punch_type,
        occurred_at=datetime(2026, 3, 2, hh, mm, ss),
        status=PunchStatus.OK,
        selfie_ref="selfies/x.jpg",
    )


def test_standard_day_counts_both_pairs_as_worked_time():
    punches = [
        _punch(1, 9, 0, PunchType.ENTRY),
        _punch(2, 12, 0, PunchType.BREAK_START),
        _punch(3, 13, 0, PunchType.BREAK_END),
        _punch(4, 18, 0, PunchType.EXIT),
    ]

    totals = PositionalPairCalculator().totals(punches)

    assert totals.worked_minutes == 480
    assert totals.break_minutes == 0


def test_pair_starting_with_break_start_counts_as_break():
    punches = [
        _punch(1, 9, 0, PunchType.ENTRY),
        _punch(2, 12, 0, PunchType.EXIT),
        _punch(3, 12, 0, PunchType.BREAK_START),
        _punch(4, 12, 45, PunchType.BREAK_END),
    ]

    totals = PositionalPairCalculator().totals(punches)

    assert totals.worked_minutes == 180
    assert totals.break_minutes == 45


def test_trailing_unpaired_punch_is_ignored():
    punches = [
        _punch(1, 9, 0, PunchType.ENTRY),
        _punch(2, 12, 0, PunchType.BREAK_START),
        _punch(3, 13, 0, PunchType.BREAK_END),
    ]

    totals = PositionalPairCalculator().totals(punches)

    assert totals.worked_minutes == 180
    assert totals.break_minutes == 0


def test_seconds_are_kept_as_fractional_minutes():
    punches = [_punch(1, 9, 0, PunchType.ENTRY), _punch(2, 9, 10, PunchType.BREAK_START, ss=30)]

    assert PositionalPairCalculator().totals(punches).worked_minutes == 10.5


def test_status_thresholds():
    calc = PositionalPairCalculator()
    assert calc.status(0) == TimesheetStatus.PENDING
    assert calc.status(1) == TimesheetStatus.PENDING
    assert calc.status(2) == TimesheetStatus.REVIEW
    assert calc.status(3) == TimesheetStatus.REVIEW
    assert calc.status(4) == TimesheetStatus.OK
    assert calc.status(6) == TimesheetStatus.OK
