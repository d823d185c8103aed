"""Field-level checks used by the purchase validation engine."""

import re
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

_INT_PATTERN = re.compile(r"[-+]?[0-9]+")
_CVC_PATTERN = re.compile(r"[0-9]{3,4}")
_CARD_PATTERN = re.compile(r"[0-9]{13,19}")
_CARD_SEPARATORS = re.compile(r"[- ]+")


def is_present(value: Any) -> bool:
    """Falsy values (None, "", 0, False, whitespace) count as missing."""
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_email(value: Any) -> bool:
    """Syntax-only email check; no DNS lookups."""
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def to_int(value: Any) -> Optional[int]:
    """Return value as an int when it is an int or a string of digits."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and _INT_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None


def is_int_in_range(value: Any, minimum: int, maximum: int) -> bool:
    number = to_int(value)
    return number is not None and minimum <= number <= maximum


def luhn_checksum_ok(digits: str) -> bool:
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def is_credit_card(value: Any) -> bool:
    """13-19 digits (spaces and dashes allowed) passing the Luhn checksum."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    if isinstance(value, int) and value < 0:
        return False
    digits = _CARD_SEPARATORS.sub("", str(value).strip())
    if not _CARD_PATTERN.fullmatch(digits):
        return False
    return luhn_checksum_ok(digits)


def is_cvc(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return bool(_CVC_PATTERN.fullmatch(str(value)))
