import itertools
import logging
from collections import deque
from typing import Any, Iterable, Iterator, Optional, Sequence

from ._exceptions import CalendarError, StateError
from .month import (
    DEFAULT_DAYS_OF_WEEK,
    CalendarMonth,
    YearMonth,
    check_days_of_week,
    lookup_start_index,
    month_weeks,
)

logger = logging.getLogger(__name__)


class CalendarWindow:
    """
    Bounded, chronologically contiguous window of generated months.

    Months are generated lazily at either end; once the window holds
    ``max_size`` months, every extension evicts one month from the opposite
    end.  Month ids come from a counter that is never rewound, so they stay
    usable as rendering keys across evictions.
    """

    _DEFAULT_MAX_SIZE: int = 60

    def __init__(
        self,
        initial_month: Optional[YearMonth] = None,
        initial_calendar_months: Iterable[CalendarMonth] = (),
        days_of_week: Sequence[int] = DEFAULT_DAYS_OF_WEEK,
        max_size: Optional[int] = None,
    ) -> None:
        self._configure(days_of_week, max_size)

        if initial_month is None:
            initial_month = YearMonth.now()
        restored = list(initial_calendar_months)
        self._ids = itertools.count(_max_id(restored) + 1)

        months = [self._generate(initial_month)] + restored
        _check_window(months)
        self._fill(months)

    def _configure(self, days_of_week: Sequence[int], max_size: Optional[int]) -> None:
        self._days_of_week: tuple[int, ...] = check_days_of_week(days_of_week)
        if max_size is None:
            max_size = self._DEFAULT_MAX_SIZE
        if max_size < 1:
            raise CalendarError(f"max_size must be at least 1; got {max_size}.")
        self._max_size: int = max_size

    def _fill(self, months: list[CalendarMonth]) -> None:
        if len(months) > self._max_size:
            logger.warning(
                "Window of %d months exceeds max_size=%d; dropping the %d oldest.",
                len(months), self._max_size, len(months) - self._max_size,
            )
        # deque(maxlen) appends and evicts in one step.
        self._months: deque[CalendarMonth] = deque(months, maxlen=self._max_size)

    # ── generation ───────────────────────────────────────────────────────

    def _generate(self, month: YearMonth) -> CalendarMonth:
        start_index = lookup_start_index(month, self._days_of_week)
        generated = CalendarMonth(
            weeks=month_weeks(month, start_index, len(self._days_of_week)),
            month=month,
            id=next(self._ids),
        )
        logger.debug(
            "Generated %s (id=%d, start_index=%d, weeks=%d).",
            month, generated.id, start_index, len(generated.weeks),
        )
        return generated

    def extend_forward(self) -> CalendarMonth:
        """Append the month after the last one, evicting the first if full."""
        month = self._generate(self._months[-1].month.plus_months(1))
        if len(self._months) == self._max_size:
            logger.debug("Evicting %s from the front.", self._months[0].month)
        self._months.append(month)
        return month

    def extend_backward(self) -> CalendarMonth:
        """Prepend the month before the first one, evicting the last if full."""
        month = self._generate(self._months[0].month.minus_months(1))
        if len(self._months) == self._max_size:
            logger.debug("Evicting %s from the back.", self._months[-1].month)
        self._months.appendleft(month)
        return month

    # ── save / restore ───────────────────────────────────────────────────

    def save(self) -> dict[str, Any]:
        return {
            "months": [m.to_dict() for m in self._months],
            "days_of_week": list(self._days_of_week),
        }

    @classmethod
    def restore(
        cls, state: dict[str, Any], max_size: Optional[int] = None
    ) -> "CalendarWindow":
        """Rebuild a window from :meth:`save` output without generating any month."""
        try:
            days_of_week = check_days_of_week(state["days_of_week"])
            months = [CalendarMonth.from_dict(m) for m in state["months"]]
        except (KeyError, TypeError, ValueError, CalendarError) as exc:
            raise StateError(f"Malformed window state: {exc}") from exc

        window = cls.__new__(cls)
        window._configure(days_of_week, max_size)
        for m in months:
            _check_month(m, window._days_of_week)
        _check_window(months)
        window._ids = itertools.count(_max_id(months) + 1)
        window._fill(months)
        return window

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def months(self) -> tuple[CalendarMonth, ...]:
        return tuple(self._months)

    @property
    def first(self) -> CalendarMonth:
        return self._months[0]

    @property
    def last(self) -> CalendarMonth:
        return self._months[-1]

    @property
    def days_of_week(self) -> tuple[int, ...]:
        return self._days_of_week

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._months)

    def __getitem__(self, index: int) -> CalendarMonth:
        return self._months[index]

    def __iter__(self) -> Iterator[CalendarMonth]:
        return iter(tuple(self._months))

    def __repr__(self) -> str:
        return (
            f"CalendarWindow(first={self.first.month}, "
            f"last={self.last.month}, "
            f"size={len(self)}, "
            f"max_size={self._max_size}, "
            f"days_of_week={list(self._days_of_week)})"
        )


def serialize_window(window: CalendarWindow) -> dict[str, Any]:
    return window.save()


def restore_window(
    state: dict[str, Any], max_size: Optional[int] = None
) -> CalendarWindow:
    return CalendarWindow.restore(state, max_size=max_size)


# ── validation ──────────────────────────────────────────────────────────────

def _max_id(months: Sequence[CalendarMonth]) -> int:
    return max((m.id for m in months), default=0)


def _check_window(months: Sequence[CalendarMonth]) -> None:
    if not months:
        raise StateError("A window needs at least one month.")
    ids = [m.id for m in months]
    if len(set(ids)) != len(ids):
        raise StateError(f"Month ids are not unique: {ids}.")
    for prev, cur in zip(months, months[1:]):
        if cur.month != prev.month.plus_months(1):
            raise StateError(
                f"Months are not contiguous: {prev.month} is followed by {cur.month}."
            )


def _check_month(month: CalendarMonth, days_of_week: Sequence[int]) -> None:
    week_size = len(days_of_week)
    if not month.weeks:
        raise StateError(f"{month.month} has no weeks.")
    expected = [month.month.at_day(d) for d in range(1, month.month.length() + 1)]
    if [d.date for d in month.days()] != expected:
        raise StateError(f"{month.month} does not cover its days exactly once, in order.")
    if month.first_day_index != lookup_start_index(month.month, days_of_week):
        raise StateError(f"{month.month} does not start under its weekday's column.")
    for week in month.weeks:
        size = week.last_day_index - week.first_day_index + 1
        if (
            week.total_size != week_size
            or not 0 <= week.first_day_index <= week.last_day_index < week_size
            or len(week.days) != size
        ):
            raise StateError(f"{month.month} has a week inconsistent with its bounds.")
        last = len(week.days) - 1
        for j, day in enumerate(week.days):
            if day.is_first_week_day != (j == 0) or day.is_last_week_day != (j == last):
                raise StateError(f"{month.month} has wrong week edge flags on {day.date}.")
