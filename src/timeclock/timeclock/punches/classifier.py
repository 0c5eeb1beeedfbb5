from __future__ import annotations

from ..core.enums import PunchType

_FIRST_FOUR = (PunchType.ENTRY, PunchType.BREAK_START, PunchType.BREAK_END, PunchType.EXIT)


def classify_punch_type(punches_today: int) -> PunchType:
    """Type of the next punch given how many the employee already has today.

    The first four follow entry / break start / break end / exit. Past that the
    type alternates by parity (even -> entry, odd -> exit).
    """
    if punches_today < 0:
        raise ValueError("punches_today must be >= 0")
    if punches_today < len(_FIRST_FOUR):
        return _FIRST_FOUR[punches_today]
    return PunchType.ENTRY if punches_today % 2 == 0 else PunchType.EXIT
