"""
rangepicker
~~~~~~~~~~~

Core of an endless date-range picker: a virtualized window of calendar
months (``rangepicker.calendar``), a tap-driven range selection
(``rangepicker.selection``) and array views joining the two for renderers
(``rangepicker.layout``).
"""

from rangepicker.calendar import CalendarError, CalendarWindow, YearMonth
from rangepicker.selection import RangeSelection, SelectionError

__all__ = [
    "CalendarWindow",
    "YearMonth",
    "RangeSelection",
    "CalendarError",
    "SelectionError",
]
