class CalendarError(Exception):
    """Base exception for all calendar-related errors."""


class StateError(CalendarError):
    """A saved or supplied month list does not form a valid window."""
