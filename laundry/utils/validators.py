"""
Field format checks shared by the DTOs and the request models.
"""

import re
from datetime import datetime

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PASS_RANGE_PATTERN = re.compile(r"^\d{2}-\d{2}$")
PERSONAL_NUMBER_PATTERN = re.compile(r"^(\d{4})(\d{2})(\d{2})-(\d{4})$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:[ '-][^\W\d_]+)*$")


def is_date_string(value: str) -> bool:
    """'YYYY-MM-DD' naming a real calendar day."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_pass_range(value: str) -> bool:
    """'HH-HH' with a start hour before the end hour."""
    if not isinstance(value, str) or not PASS_RANGE_PATTERN.match(value):
        return False
    start, end = int(value[:2]), int(value[3:])
    return 0 <= start < end <= 24


def luhn_checksum_valid(digits: str) -> bool:
    """Luhn check over a digit string, doubling every second digit from the left."""
    total = 0
    for index, char in enumerate(digits):
        value = int(char)
        if index % 2 == 0:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return total % 10 == 0


def is_personal_number(value: str) -> bool:
    """
    'YYYYMMDD-XXXX' with a valid birth date and a Luhn checksum computed
    over the last ten digits (YYMMDDXXXX).
    """
    if not isinstance(value, str):
        return False
    match = PERSONAL_NUMBER_PATTERN.match(value)
    if not match:
        return False
    year, month, day, serial = match.groups()
    try:
        datetime(int(year), int(month), int(day))
    except ValueError:
        return False
    return luhn_checksum_valid(year[2:] + month + day + serial)


def is_username(value: str) -> bool:
    return isinstance(value, str) and bool(USERNAME_PATTERN.match(value))


def is_name(value: str) -> bool:
    return isinstance(value, str) and bool(NAME_PATTERN.match(value))
