"""Reusable value constraints.

Each check returns ``True`` when the value satisfies it. Checks other than
``is_blank`` treat ``None`` as "nothing to check" and leave required-ness to
``is_blank``, so that one value can collect several messages
(e.g. both "not blank" and "of type digit" for an empty string).
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Iterable

NOT_BLANK = "This value should not be blank."
TYPE_DIGIT = "This value should be of type digit."
TYPE_STRING = "This value should be of type string."
POSITIVE = "This value should be positive."
AT_MOST = "This value should be less than or equal to {limit}."

# Largest value an INTEGER column holds
MAX_INTEGER = 2_147_483_647

_DIGITS = re.compile(r"[0-9]+")
_SIGNED_INT = re.compile(r"-?[0-9]+")


def is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def is_digit(value: Any) -> bool:
    """Digit string or non-negative integer (booleans are not numbers here)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, str):
        return _DIGITS.fullmatch(value) is not None
    return False


def as_int(value: Any) -> int | None:
    """Integer value of an int or a signed integer string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _SIGNED_INT.fullmatch(value):
        return int(value)
    return None


def exceeds(value: Any, limit: int = MAX_INTEGER) -> bool:
    number = as_int(value)
    return number is not None and number > limit


def as_text(value: Any) -> str | None:
    """Text form used for pattern checks; None when the value has no sensible one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (int, float)):
        return str(value)
    return None


def matches(pattern: re.Pattern[str], value: Any) -> bool:
    text = as_text(value)
    return text is not None and pattern.fullmatch(text) is not None


def is_one_of(value: Any, choices: Iterable[Any]) -> bool:
    """Strict choice check: ``1`` does not match ``"1"`` nor ``True``."""
    return any(type(value) is type(choice) and value == choice for choice in choices)
