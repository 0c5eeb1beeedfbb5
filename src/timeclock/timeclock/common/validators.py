from __future__ import annotations

import re

from ..core.constants import PIN_LENGTH
from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"\D")


def normalize_cpf(value: str) -> str:
    """Strip formatting (dots, dash, spaces) from a CPF."""
    return _NON_DIGITS.sub("", value or "")


def is_valid_cpf(value: str) -> bool:
    """Check the two CPF verification digits."""
    digits = normalize_cpf(value)
    if len(digits) != 11 or digits == digits[0] * 11:
        return False

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11
        if check == 10:
            check = 0
        if check != int(digits[position]):
            return False
    return True


def require_pin(value: str) -> str:
    if not value or len(value) != PIN_LENGTH or not value.isdigit():
        raise ValidationError(f"PIN must have {PIN_LENGTH} digits")
    return value
