from datetime import date, datetime

import pytest

from src.timeclock.timeclock.common.datetime_utils import day_bounds, format_minutes, month_bounds, round_half_up
from src.timeclock.timeclock.common.validators import is_valid_cpf, normalize_cpf, require_pin
from src.timeclock.timeclock.core.exceptions import ValidationError


def test_format_minutes_is_signed_hh_mm():
    assert format_minutes(60) == "+01:00"
    assert format_minutes(0) == "+00:00"
    assert format_minutes(-90) == "-01:30"
    assert format_minutes(605) == "+10:05"


def test_round_half_up_rounds_halves_towards_positive():
    assert round_half_up(10.5) == 11
    assert round_half_up(11.5) == 12
    assert round_half_up(10.49) == 10
    assert round_half_up(-0.5) == 0


def test_day_and_month_bounds():
    assert day_bounds(date(2026, 3, 2)) == (datetime(2026, 3, 2), datetime(2026, 3, 3))
    assert month_bounds(2026, 2) == (date(2026, 2, 1), date(2026, 2, 28))
    assert month_bounds(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))


def test_cpf_check_digits():
    assert normalize_cpf("529.982.247-25") == "52998224725"
    assert is_valid_cpf("529.982.247-25")
    assert not is_valid_cpf("529.982.247-26")
    assert not is_valid_cpf("111.111.111-11")
    assert not is_valid_cpf("123")


def test_pin_must_be_six_digits():
    assert require_pin("012345") == "012345"
    for bad in ("", "12345", "1234567", "12a456"):
        with pytest.raises(ValidationError):
            require_pin(bad)
