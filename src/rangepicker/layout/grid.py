from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import numpy as np

from rangepicker.calendar.month import CalendarMonth
from rangepicker.selection.selection import RangeSelection


def month_grid(month: CalendarMonth) -> np.ndarray:
    """Day of month per (week, column) cell; 0 where the row has no day."""
    weeks = month.weeks
    grid = np.zeros((len(weeks), weeks[0].total_size), dtype=np.int64)
    for row, week in enumerate(weeks):
        grid[row, week.first_day_index:week.last_day_index + 1] = [
            d.date.day for d in week.days
        ]
    return grid


def day_index_grid(month: CalendarMonth) -> np.ndarray:
    """Flat day index per (week, column) cell; -1 where the row has no day."""
    weeks = month.weeks
    grid = np.full((len(weeks), weeks[0].total_size), -1, dtype=np.int64)
    i = 0
    for row, week in enumerate(weeks):
        n = len(week.days)
        grid[row, week.first_day_index:week.first_day_index + n] = np.arange(i, i + n)
        i += n
    return grid


@dataclass(frozen=True, slots=True)
class DayFlags:
    """Per-day boolean masks for one month, in flat day order."""

    today: np.ndarray
    selected: np.ndarray
    in_range: np.ndarray
    start: np.ndarray
    end: np.ndarray
    first_week_day: np.ndarray
    last_week_day: np.ndarray


def _equal(dates: np.ndarray, value: Optional[date]) -> np.ndarray:
    if value is None:
        return np.zeros(dates.shape, dtype=bool)
    return dates == np.datetime64(value, "D")


def classify_month(month: CalendarMonth, selection: RangeSelection) -> DayFlags:
    """
    Classify every day of ``month`` against ``selection`` in one pass.

    Element ``i`` of each mask answers the matching RangeSelection query for
    ``month.day_at(i)``.
    """
    days = list(month.days())
    dates = np.array([d.date for d in days], dtype="datetime64[D]")

    start = _equal(dates, selection.start_date)
    end = _equal(dates, selection.end_date)

    if selection.start_date is not None and selection.end_date is not None:
        in_range = (dates > np.datetime64(selection.start_date, "D")) & (
            dates < np.datetime64(selection.end_date, "D")
        )
    else:
        in_range = np.zeros(dates.shape, dtype=bool)

    return DayFlags(
        today=_equal(dates, selection.today),
        selected=start | end,
        in_range=in_range,
        start=start,
        end=end,
        first_week_day=np.array([d.is_first_week_day for d in days], dtype=bool),
        last_week_day=np.array([d.is_last_week_day for d in days], dtype=bool),
    )
