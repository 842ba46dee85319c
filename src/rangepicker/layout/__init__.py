"""
rangepicker.layout
~~~~~~~~~~~~~~~~~~

Array views of a generated month for renderers: the cell grid, per-day
selection masks and hit-testing of rendered day boxes.

Basic usage::

    from rangepicker.calendar import CalendarWindow, YearMonth
    from rangepicker.layout import DayBoxes, classify_month, month_grid
    from rangepicker.selection import RangeSelection

    month = CalendarWindow(YearMonth(2024, 1)).first
    month_grid(month)                  # (5, 7) array, 0 in empty cells
    flags = classify_month(month, RangeSelection())
    flags.in_range                     # bool mask, one entry per day

    boxes = DayBoxes.from_month(month, cell_width=48, cell_height=48)
    month.day_at(boxes.click(60, 10))  # → Jan 1, 2024

Public API
----------
month_grid       Day of month per grid cell.
day_index_grid   Flat day index per grid cell.
classify_month   Vectorised RangeSelection queries for a whole month.
DayFlags         The masks returned by classify_month.
DayBoxes         Day bounding boxes with hit-testing.
"""

from __future__ import annotations

from rangepicker.layout.boxes import DayBoxes
from rangepicker.layout.grid import DayFlags, classify_month, day_index_grid, month_grid

__all__ = [
    "month_grid",
    "day_index_grid",
    "classify_month",
    "DayFlags",
    "DayBoxes",
]
