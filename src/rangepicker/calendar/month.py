from __future__ import annotations

import calendar as _calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterator, Optional, Sequence

from ._exceptions import CalendarError

# Weekdays are the ints returned by date.weekday(): Monday=0 .. Sunday=6.
DEFAULT_DAYS_OF_WEEK: tuple[int, ...] = (
    _calendar.SUNDAY,
    _calendar.MONDAY,
    _calendar.TUESDAY,
    _calendar.WEDNESDAY,
    _calendar.THURSDAY,
    _calendar.FRIDAY,
    _calendar.SATURDAY,
)


@dataclass(frozen=True, order=True, slots=True)
class YearMonth:
    """A calendar month, without a day component."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise CalendarError(f"Month must be in 1..12; got {self.month}.")

    @classmethod
    def now(cls) -> YearMonth:
        return cls.of(date.today())

    @classmethod
    def of(cls, d: date) -> YearMonth:
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, text: str) -> YearMonth:
        year, _, month = text.partition("-")
        try:
            return cls(int(year), int(month))
        except ValueError:
            raise CalendarError(f"Not a YYYY-MM month: {text!r}.") from None

    def plus_months(self, n: int) -> YearMonth:
        year, month0 = divmod(self.year * 12 + self.month - 1 + n, 12)
        return YearMonth(year, month0 + 1)

    def minus_months(self, n: int) -> YearMonth:
        return self.plus_months(-n)

    def length(self) -> int:
        return _calendar.monthrange(self.year, self.month)[1]

    def at_day(self, day: int) -> date:
        return date(self.year, self.month, day)

    def first_weekday(self) -> int:
        return self.at_day(1).weekday()

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, slots=True)
class CalendarDay:
    date: date
    is_first_week_day: bool
    is_last_week_day: bool


@dataclass(frozen=True, slots=True)
class CalendarWeek:
    """One rendered row of a month.

    ``first_day_index`` and ``last_day_index`` are the 0-based columns of the
    first and last day within a row of ``total_size`` columns.
    """

    days: tuple[CalendarDay, ...]
    first_day_index: int
    last_day_index: int
    total_size: int


@dataclass(frozen=True, slots=True)
class CalendarMonth:
    """
    A generated month: its weeks, its year-month and a window-unique id.

    Days are addressed by a flat index counting from the first day of the
    first week (index 0 is always day 1 of the month).
    """

    weeks: tuple[CalendarWeek, ...]
    month: YearMonth
    id: int

    @property
    def first_day_index(self) -> int:
        return self.weeks[0].first_day_index

    @property
    def day_count(self) -> int:
        return sum(len(w.days) for w in self.weeks)

    def days(self) -> Iterator[CalendarDay]:
        for week in self.weeks:
            yield from week.days

    def iter_days_indexed(self) -> Iterator[tuple[int, CalendarDay]]:
        return enumerate(self.days())

    def find_first_day_index(
        self, predicate: Callable[[int, CalendarDay], bool]
    ) -> Optional[int]:
        for i, day in self.iter_days_indexed():
            if predicate(i, day):
                return i
        return None

    def day_at(self, index: int) -> Optional[CalendarDay]:
        if index < 0:
            return None
        for i, day in self.iter_days_indexed():
            if i == index:
                return day
        return None

    # ── plain-data form ──────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "month": str(self.month),
            "weeks": [
                {
                    "days": [
                        [d.date.isoformat(), d.is_first_week_day, d.is_last_week_day]
                        for d in w.days
                    ],
                    "first_day_index": w.first_day_index,
                    "last_day_index": w.last_day_index,
                    "total_size": w.total_size,
                }
                for w in self.weeks
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarMonth:
        weeks = tuple(
            CalendarWeek(
                days=tuple(
                    CalendarDay(date.fromisoformat(iso), bool(first), bool(last))
                    for iso, first, last in w["days"]
                ),
                first_day_index=int(w["first_day_index"]),
                last_day_index=int(w["last_day_index"]),
                total_size=int(w["total_size"]),
            )
            for w in data["weeks"]
        )
        return cls(weeks=weeks, month=YearMonth.parse(data["month"]), id=int(data["id"]))


# ── week generation ─────────────────────────────────────────────────────────

def _week(
    month: YearMonth, first_day: int, size: int, first_index: int, week_size: int
) -> CalendarWeek:
    return CalendarWeek(
        days=tuple(
            CalendarDay(
                date=month.at_day(first_day + j),
                is_first_week_day=j == 0,
                is_last_week_day=j == size - 1,
            )
            for j in range(size)
        ),
        first_day_index=first_index,
        last_day_index=first_index + size - 1,
        total_size=week_size,
    )


def month_weeks(
    month: YearMonth, start_index: int, week_size: int
) -> tuple[CalendarWeek, ...]:
    """
    Split ``month`` into rows of ``week_size`` columns, day 1 falling on
    column ``start_index``.

    The first row is partial (from ``start_index``), interior rows are full
    and the last row holds whatever remains.  A month that fits in a single
    row yields one week that is both first and last.
    """
    if week_size < 1:
        raise CalendarError(f"Week size must be at least 1; got {week_size}.")
    if not 0 <= start_index < week_size:
        raise CalendarError(
            f"Start index must be in 0..{week_size - 1}; got {start_index}."
        )

    length = month.length()
    nb_weeks = math.ceil((length + start_index) / week_size)

    first_size = min(week_size - start_index, length)
    weeks = [_week(month, 1, first_size, start_index, week_size)]
    assigned = first_size

    for _ in range(1, nb_weeks - 1):
        weeks.append(_week(month, assigned + 1, week_size, 0, week_size))
        assigned += week_size

    if nb_weeks > 1:
        weeks.append(_week(month, assigned + 1, length - assigned, 0, week_size))

    return tuple(weeks)


# ── start index strategies ──────────────────────────────────────────────────

def lookup_start_index(month: YearMonth, days_of_week: Sequence[int]) -> int:
    """Column of day 1 of ``month``: its weekday's position in ``days_of_week``."""
    weekday = month.first_weekday()
    try:
        return list(days_of_week).index(weekday)
    except ValueError:
        raise CalendarError(
            f"{month} starts on weekday {weekday}, "
            f"which is not in days_of_week {list(days_of_week)}."
        ) from None


def next_start_index(previous: CalendarMonth, week_size: int) -> int:
    """Column of day 1 of the month following ``previous``, by continuing its last row."""
    index = previous.weeks[-1].last_day_index + 1
    return index if index < week_size else 0


def check_days_of_week(days_of_week: Sequence[int]) -> tuple[int, ...]:
    days = tuple(days_of_week)
    if not days:
        raise CalendarError("days_of_week must not be empty.")
    for d in days:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise CalendarError(f"Weekdays must be ints in 0..6; got {d!r}.")
    if len(set(days)) != len(days):
        raise CalendarError(f"days_of_week contains duplicates: {list(days)}.")
    # Every month start is looked up, so every weekday must have a column.
    if len(days) != 7:
        raise CalendarError(
            f"days_of_week must order all seven weekdays; got {list(days)}."
        )
    return days
