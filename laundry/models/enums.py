"""
Enumerations stored in or derived from the database.
"""

from enum import Enum, IntEnum


class Privilege(IntEnum):
    """Account privilege, stored as ``person.privilege_id``."""
    INVALID = 0
    STANDARD = 1
    ADMINISTRATOR = 2


class SlotStatus(str, Enum):
    """Display state of one pass slot in a weekly schedule."""
    AVAILABLE = "Available"
    TAKEN = "Taken"
    SELF_BOOKING = "SelfBooking"
