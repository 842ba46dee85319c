"""
tests/calendar/test_calendar.py

Covers:
  - Construction defaults and configuration errors
  - Forward/backward extension and start index continuity
  - Bounded size and eviction from the opposite end
  - Id stability across evictions
  - Supplied initial months (append as-is, validated)
  - Save/restore and rejection of malformed state (weekday order,
    week edge flags, shifted columns)
  - Random extension sequences keep the window invariants
"""

import logging
from datetime import date

import numpy as np
import pytest

from rangepicker.calendar import (
    CalendarError,
    CalendarWindow,
    StateError,
    YearMonth,
    restore_window,
    serialize_window,
)

JAN_2024 = YearMonth(2024, 1)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def window():
    """Sunday-first window anchored on January 2024."""
    return CalendarWindow(JAN_2024)


@pytest.fixture
def small():
    """Window that holds at most three months."""
    return CalendarWindow(JAN_2024, max_size=3)


# ── Helpers ───────────────────────────────────────────────────────────────────

def month_names(window):
    return [str(m.month) for m in window]


def assert_window_invariants(window):
    months = window.months
    assert 1 <= len(months) <= window.max_size
    ids = [m.id for m in months]
    assert len(set(ids)) == len(ids)
    for prev, cur in zip(months, months[1:]):
        assert cur.month == prev.month.plus_months(1)
    for m in months:
        days = [d.date for d in m.days()]
        assert days == [m.month.at_day(i) for i in range(1, m.month.length() + 1)]


# ── Construction ──────────────────────────────────────────────────────────────

class TestConstruction:

    def test_single_initial_month(self, window):
        assert len(window) == 1
        assert window.first is window.last
        assert window.first.month == JAN_2024

    def test_initial_month_layout(self, window):
        jan = window.first
        assert jan.weeks[0].first_day_index == 1
        assert [d.date.day for d in jan.weeks[0].days] == [1, 2, 3, 4, 5, 6]
        assert jan.weeks[0].last_day_index == 6
        assert jan.weeks[-1].days[-1].date == date(2024, 1, 31)
        assert jan.weeks[-1].last_day_index == 3

    def test_defaults(self):
        w = CalendarWindow()
        assert w.first.month == YearMonth.of(date.today())
        assert w.max_size == 60
        assert w.days_of_week == (6, 0, 1, 2, 3, 4, 5)

    def test_monday_first(self):
        w = CalendarWindow(JAN_2024, days_of_week=[0, 1, 2, 3, 4, 5, 6])
        assert w.first.first_day_index == 0
        assert w.first.weeks[-1].last_day_index == 2

    def test_first_id_is_one(self, window):
        assert window.first.id == 1

    @pytest.mark.parametrize("days_of_week", [[], [7], [0, 0, 1], [-1, 0], [True], ["mon"]])
    def test_bad_days_of_week_raise(self, days_of_week):
        with pytest.raises(CalendarError):
            CalendarWindow(JAN_2024, days_of_week=days_of_week)

    @pytest.mark.parametrize("max_size", [0, -3])
    def test_bad_max_size_raises(self, max_size):
        with pytest.raises(CalendarError):
            CalendarWindow(JAN_2024, max_size=max_size)

    def test_weekday_missing_from_config_raises(self):
        # Sep 2024 starts on a Sunday, absent from a Mon–Fri configuration
        with pytest.raises(CalendarError):
            CalendarWindow(YearMonth(2024, 9), days_of_week=[0, 1, 2, 3, 4])

    @pytest.mark.parametrize("days_of_week", [[0, 1, 2, 3, 4], [6, 0, 1, 2, 3, 4]])
    def test_partial_week_rejected_even_if_initial_month_fits(self, days_of_week):
        # Jan 1, 2024 is a Monday, present in both configurations
        with pytest.raises(CalendarError):
            CalendarWindow(JAN_2024, days_of_week=days_of_week)

    @pytest.mark.parametrize(
        "days_of_week", [(6, 0, 1, 2, 3, 4, 5), (0, 1, 2, 3, 4, 5, 6), (3, 4, 5, 6, 0, 1, 2)]
    )
    def test_accepted_config_extends_both_ways(self, days_of_week):
        w = CalendarWindow(JAN_2024, days_of_week=days_of_week, max_size=60)
        for _ in range(24):
            w.extend_forward()
            w.extend_backward()
        assert len(w) == 49
        assert_window_invariants(w)

    def test_months_is_a_snapshot(self, window):
        snapshot = window.months
        window.extend_forward()
        assert len(snapshot) == 1
        assert len(window.months) == 2


# ── Extension ─────────────────────────────────────────────────────────────────

class TestExtension:

    def test_extend_forward_appends_next_month(self, window):
        feb = window.extend_forward()
        assert feb.month == YearMonth(2024, 2)
        assert window.last is feb
        assert month_names(window) == ["2024-01", "2024-02"]

    def test_extend_backward_prepends_previous_month(self, window):
        dec = window.extend_backward()
        assert dec.month == YearMonth(2023, 12)
        assert window.first is dec
        assert month_names(window) == ["2023-12", "2024-01"]

    def test_forward_continues_weekday_cycle(self, window):
        jan = window.first
        feb = window.extend_forward()
        assert feb.first_day_index == (jan.weeks[-1].last_day_index + 1) % 7
        assert feb.first_day_index == 4    # Feb 1, 2024 is a Thursday

    def test_backward_is_anchored_by_weekday(self, window):
        dec = window.extend_backward()
        assert dec.first_day_index == 5    # Dec 1, 2023 is a Friday
        assert (dec.weeks[-1].last_day_index + 1) % 7 == window[1].first_day_index

    def test_forward_across_full_last_row(self):
        w = CalendarWindow(YearMonth(2024, 8))
        assert w.first.weeks[-1].last_day_index == 6
        assert w.extend_forward().first_day_index == 0

    def test_indexing(self, window):
        window.extend_forward()
        window.extend_backward()
        assert window[0].month == YearMonth(2023, 12)
        assert window[-1].month == YearMonth(2024, 2)


# ── Eviction ──────────────────────────────────────────────────────────────────

class TestEviction:

    def test_grows_until_max_size(self, small):
        small.extend_forward()
        small.extend_forward()
        assert month_names(small) == ["2024-01", "2024-02", "2024-03"]

    def test_forward_evicts_front(self, small):
        for _ in range(3):
            small.extend_forward()
        assert month_names(small) == ["2024-02", "2024-03", "2024-04"]

    def test_backward_evicts_back(self, small):
        for _ in range(3):
            small.extend_backward()
        assert month_names(small) == ["2023-10", "2023-11", "2023-12"]

    def test_one_eviction_per_call_once_full(self, small):
        small.extend_forward()
        small.extend_forward()
        for _ in range(10):
            before = small.months
            small.extend_forward()
            assert len(small) == 3
            assert small.months[:2] == before[1:]

    def test_max_size_one(self):
        w = CalendarWindow(JAN_2024, max_size=1)
        w.extend_forward()
        assert month_names(w) == ["2024-02"]
        w.extend_backward()
        assert month_names(w) == ["2024-01"]

    def test_direction_change_after_eviction(self, small):
        for _ in range(4):
            small.extend_forward()
        small.extend_backward()
        assert month_names(small) == ["2024-02", "2024-03", "2024-04"]

    def test_eviction_is_logged(self, small, caplog):
        small.extend_forward()
        small.extend_forward()
        with caplog.at_level(logging.DEBUG, logger="rangepicker.calendar.calendar"):
            small.extend_forward()
        assert "Evicting 2024-01" in caplog.text


# ── Ids ───────────────────────────────────────────────────────────────────────

class TestIds:

    def test_ids_strictly_increase_in_generation_order(self, small):
        ids = [small.first.id]
        for step in range(20):
            month = small.extend_forward() if step % 3 else small.extend_backward()
            ids.append(month.id)
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_ids_not_reused_after_eviction(self, small):
        seen = {small.first.id}
        for _ in range(10):
            month = small.extend_forward()
            assert month.id not in seen
            seen.add(month.id)

    def test_same_month_regenerated_gets_new_id(self):
        w = CalendarWindow(JAN_2024, max_size=1)
        first_jan = w.first.id
        w.extend_forward()
        jan_again = w.extend_backward()
        assert jan_again.month == JAN_2024
        assert jan_again.id != first_jan


# ── Initial calendar months ───────────────────────────────────────────────────

class TestInitialCalendarMonths:

    def test_supplied_months_appended_as_is(self, window):
        feb = window.extend_forward()
        mar = window.extend_forward()
        w = CalendarWindow(JAN_2024, initial_calendar_months=[feb, mar])
        assert month_names(w) == ["2024-01", "2024-02", "2024-03"]
        assert w[1] is feb
        assert w[2] is mar

    def test_generated_id_avoids_supplied_ids(self, window):
        feb = window.extend_forward()
        mar = window.extend_forward()
        w = CalendarWindow(JAN_2024, initial_calendar_months=[feb, mar])
        assert w.first.id > mar.id
        assert w.extend_forward().id > w.first.id

    def test_non_contiguous_supplied_months_raise(self, window):
        window.extend_forward()
        with pytest.raises(StateError):
            CalendarWindow(JAN_2024, initial_calendar_months=window.months)

    def test_gap_in_supplied_months_raises(self, window):
        window.extend_forward()
        mar = window.extend_forward()
        with pytest.raises(StateError):
            CalendarWindow(JAN_2024, initial_calendar_months=[mar])


# ── Save / restore ────────────────────────────────────────────────────────────

class TestSaveRestore:

    @pytest.fixture
    def saved(self, window):
        window.extend_forward()
        window.extend_backward()
        return window, window.save()

    def test_restore_keeps_months_and_ids(self, saved):
        window, state = saved
        restored = CalendarWindow.restore(state)
        assert restored.months == window.months
        assert restored.days_of_week == window.days_of_week

    def test_restore_does_not_generate(self, saved):
        window, state = saved
        assert len(CalendarWindow.restore(state)) == len(window)

    def test_restored_window_keeps_extending(self, saved):
        window, state = saved
        restored = restore_window(state)
        nxt = restored.extend_forward()
        assert nxt.month == YearMonth(2024, 3)
        assert nxt.id > max(m.id for m in window.months)

    def test_state_is_plain_data(self, saved):
        _, state = saved
        assert state["days_of_week"] == [6, 0, 1, 2, 3, 4, 5]
        assert [m["month"] for m in state["months"]] == ["2023-12", "2024-01", "2024-02"]

    def test_function_pair(self, saved):
        window, _ = saved
        assert restore_window(serialize_window(window)).months == window.months

    def test_restore_trims_to_max_size(self, saved, caplog):
        _, state = saved
        with caplog.at_level(logging.WARNING, logger="rangepicker.calendar.calendar"):
            restored = CalendarWindow.restore(state, max_size=2)
        assert month_names(restored) == ["2024-01", "2024-02"]
        assert "dropping the 1 oldest" in caplog.text

    def test_reordered_months_rejected(self, saved):
        _, state = saved
        state["months"].reverse()
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_empty_months_rejected(self, saved):
        _, state = saved
        state["months"] = []
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_missing_day_rejected(self, saved):
        _, state = saved
        state["months"][1]["weeks"][2]["days"].pop()
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_inconsistent_week_bounds_rejected(self, saved):
        _, state = saved
        state["months"][1]["weeks"][0]["first_day_index"] = 0
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_duplicate_ids_rejected(self, saved):
        _, state = saved
        state["months"][2]["id"] = state["months"][0]["id"]
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_week_size_mismatch_rejected(self, saved):
        _, state = saved
        state["days_of_week"] = [0, 1, 2, 3, 4, 5]
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    @pytest.mark.parametrize(
        "state",
        [{}, {"months": []}, {"days_of_week": [0]}, {"months": [{"id": 1}], "days_of_week": [0]}],
    )
    def test_malformed_state_rejected(self, state):
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    @pytest.mark.parametrize("days_of_week", [5, [], [0, 0], [0, 1, 2, 3, 4], None, ["x"] * 7])
    def test_malformed_days_of_week_rejected(self, saved, days_of_week):
        _, state = saved
        state["days_of_week"] = days_of_week
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_bad_max_size_stays_calendar_error(self, saved):
        _, state = saved
        with pytest.raises(CalendarError) as info:
            CalendarWindow.restore(state, max_size=0)
        assert not isinstance(info.value, StateError)

    def test_wrong_first_week_day_flag_rejected(self, saved):
        _, state = saved
        state["months"][1]["weeks"][1]["days"][0][1] = False
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_wrong_last_week_day_flag_rejected(self, saved):
        _, state = saved
        state["months"][1]["weeks"][1]["days"][3][2] = True
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_shifted_columns_rejected(self, saved):
        # Jan 1 moved from Monday's column to Sunday's; the row stays self-consistent
        _, state = saved
        first = state["months"][1]["weeks"][0]
        first["first_day_index"], first["last_day_index"] = 0, 5
        with pytest.raises(StateError):
            CalendarWindow.restore(state)

    def test_restored_monday_first_window(self):
        w = CalendarWindow(JAN_2024, days_of_week=range(7))
        w.extend_forward()
        restored = CalendarWindow.restore(w.save())
        assert restored.months == w.months
        assert restored.days_of_week == tuple(range(7))

    def test_bad_month_text_rejected(self, saved):
        _, state = saved
        state["months"][0]["month"] = "2023-13"
        with pytest.raises(StateError):
            CalendarWindow.restore(state)


# ── Invariants ────────────────────────────────────────────────────────────────

class TestInvariants:

    def test_random_extensions_keep_invariants(self):
        rng = np.random.default_rng(7)
        w = CalendarWindow(JAN_2024, max_size=12)
        for forward in rng.integers(0, 2, size=300):
            if forward:
                w.extend_forward()
            else:
                w.extend_backward()
            assert_window_invariants(w)

    def test_long_forward_run_matches_continuation(self):
        w = CalendarWindow(YearMonth(2000, 1), max_size=500)
        for _ in range(400):
            w.extend_forward()
        for prev, cur in zip(w.months, w.months[1:]):
            assert cur.first_day_index == (prev.weeks[-1].last_day_index + 1) % 7
