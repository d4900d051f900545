"""
Laundry pass booking service.

Residents reserve laundry room passes; administrators manage accounts
and view the complete weekly schedules.
"""

__version__ = "1.0.0"
