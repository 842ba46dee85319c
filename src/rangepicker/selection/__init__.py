"""
rangepicker.selection
~~~~~~~~~~~~~~~~~~~~~

Tap-driven date range selection, independent of any calendar layout.

Basic usage::

    from datetime import date
    from rangepicker.selection import RangeSelection

    sel = RangeSelection(today=date(2024, 1, 15))
    sel.select_date(date(2024, 1, 5))            # start
    sel.select_date(date(2024, 1, 20))           # end
    sel.is_valid_range                           # → True
    sel.is_in_exclusive_range(date(2024, 1, 10)) # → True
    sel.select_date(date(2024, 1, 3))            # starts over from Jan 3

Public API
----------
RangeSelection       The selection state machine and its day queries.
SelectionError       Invalid endpoints or malformed saved state.
"""

from __future__ import annotations

from rangepicker.selection._exceptions import SelectionError
from rangepicker.selection.selection import (
    RangeSelection,
    restore_selection,
    serialize_selection,
)

__all__ = [
    "RangeSelection",
    "serialize_selection",
    "restore_selection",
    "SelectionError",
]
