from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional

from ._exceptions import SelectionError

DateFormatter = Callable[[date], str]


def _day(value: date) -> date:
    # Day granularity; a datetime only contributes its calendar date.
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise TypeError(f"Expected a date; got {type(value).__name__}.")
    return value


class RangeSelection:
    """
    Two-endpoint date range built from single taps.

    The first tap sets the start.  A tap strictly after the start completes
    the range.  Any other tap (on or before the start, or once the range is
    complete) starts over with that date as the new start.
    """

    def __init__(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> None:
        start = _day(start_date) if start_date is not None else None
        end = _day(end_date) if end_date is not None else None
        if end is not None and (start is None or not start < end):
            raise SelectionError(
                f"end_date {end} requires a start_date before it; got {start}."
            )
        self._start_date = start
        self._end_date = end
        self._today = _day(today) if today is not None else date.today()

    # ── transitions ──────────────────────────────────────────────────────

    def select_date(self, value: date) -> None:
        d = _day(value)
        if self._start_date is None:
            self._start_date = d
        elif self._end_date is None and d > self._start_date:
            self._end_date = d
        else:
            self._start_date = d
            self._end_date = None

    # ── queries ──────────────────────────────────────────────────────────

    def is_today(self, value: date) -> bool:
        return _day(value) == self._today

    def is_selected(self, value: date) -> bool:
        d = _day(value)
        return d == self._start_date or d == self._end_date

    def is_in_exclusive_range(self, value: date) -> bool:
        d = _day(value)
        return (
            self._start_date is not None
            and self._end_date is not None
            and self._start_date < d < self._end_date
        )

    def is_start_date(self, value: date) -> bool:
        return _day(value) == self._start_date

    def is_end_date(self, value: date) -> bool:
        return _day(value) == self._end_date

    @property
    def is_valid_range(self) -> bool:
        return (
            self._start_date is not None
            and self._end_date is not None
            and self._start_date < self._end_date
        )

    # ── labels ───────────────────────────────────────────────────────────

    def start_as_string(
        self, formatter: Optional[DateFormatter] = None, placeholder: str = "Start Date"
    ) -> str:
        return _label(self._start_date, formatter, placeholder)

    def end_as_string(
        self, formatter: Optional[DateFormatter] = None, placeholder: str = "End Date"
    ) -> str:
        return _label(self._end_date, formatter, placeholder)

    # ── save / restore ───────────────────────────────────────────────────

    def save(self) -> dict[str, Optional[str]]:
        return {
            "start_date": self._start_date.isoformat() if self._start_date else None,
            "end_date": self._end_date.isoformat() if self._end_date else None,
        }

    @classmethod
    def restore(
        cls, state: dict[str, Any], today: Optional[date] = None
    ) -> RangeSelection:
        try:
            start = state.get("start_date")
            end = state.get("end_date")
            start = date.fromisoformat(start) if start is not None else None
            end = date.fromisoformat(end) if end is not None else None
        except (AttributeError, TypeError, ValueError) as exc:
            raise SelectionError(f"Malformed selection state: {exc}") from exc
        return cls(start_date=start, end_date=end, today=today)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def start_date(self) -> Optional[date]:
        return self._start_date

    @property
    def end_date(self) -> Optional[date]:
        return self._end_date

    @property
    def today(self) -> date:
        return self._today

    def __repr__(self) -> str:
        return (
            f"RangeSelection(start_date={self._start_date}, "
            f"end_date={self._end_date}, "
            f"today={self._today})"
        )


def _label(value: Optional[date], formatter: Optional[DateFormatter], placeholder: str) -> str:
    if value is None:
        return placeholder
    if formatter is None:
        return value.isoformat()
    return formatter(value)


def serialize_selection(selection: RangeSelection) -> dict[str, Optional[str]]:
    return selection.save()


def restore_selection(
    state: dict[str, Any], today: Optional[date] = None
) -> RangeSelection:
    return RangeSelection.restore(state, today=today)
