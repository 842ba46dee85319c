"""
rangepicker.calendar
~~~~~~~~~~~~~~~~~~~~

Endless, virtualized month window.  A CalendarWindow holds a bounded,
contiguous run of generated months, each split into week rows, and grows
one month at a time at either end as the user scrolls.

Basic usage::

    from rangepicker.calendar import CalendarWindow, YearMonth

    window = CalendarWindow(YearMonth(2024, 1), max_size=24)
    window.extend_forward()                     # → February 2024
    window.extend_backward()                    # → December 2023
    [str(m.month) for m in window]              # ['2023-12', '2024-01', '2024-02']

Driven by scroll callbacks::

    from rangepicker.calendar import WindowScroller

    scroller = WindowScroller(window, buffer=1)
    scroller.on_scroll(first_visible=0, last_visible=1)   # extends at the bottom

Save and restore::

    state = window.save()                       # plain, JSON-compatible dict
    window = CalendarWindow.restore(state)

Public API
----------
CalendarWindow   The month window.
YearMonth        Month arithmetic value.
CalendarMonth    Generated month (weeks of CalendarDay).
WindowScroller   Single-flight extension from scroll positions.
CalendarError    Base exception for all calendar-related errors.
StateError       Rejected restore payload or non-contiguous month list.
"""

from __future__ import annotations

from rangepicker.calendar._exceptions import CalendarError, StateError
from rangepicker.calendar.calendar import (
    CalendarWindow,
    restore_window,
    serialize_window,
)
from rangepicker.calendar.month import (
    DEFAULT_DAYS_OF_WEEK,
    CalendarDay,
    CalendarMonth,
    CalendarWeek,
    YearMonth,
    lookup_start_index,
    month_weeks,
    next_start_index,
)
from rangepicker.calendar.scroll import Reached, WindowScroller, edge_reached

__all__ = [
    "CalendarWindow",
    "CalendarDay",
    "CalendarWeek",
    "CalendarMonth",
    "YearMonth",
    "DEFAULT_DAYS_OF_WEEK",
    "month_weeks",
    "lookup_start_index",
    "next_start_index",
    "serialize_window",
    "restore_window",
    "Reached",
    "edge_reached",
    "WindowScroller",
    "CalendarError",
    "StateError",
]
