from datetime import date, timedelta

import pytest

from recurrence_engine.models import builders
from recurrence_engine.models.errors import InvalidRule
from recurrence_engine.models.frequency import PeriodBoundary
from recurrence_engine.services.enumerator import (
    occurrences_in_range,
    paycheck_pay_date,
    upcoming_occurrences,
)
from recurrence_engine.services.resolver import next_occurrence

PAYCHECK_PERIODS = [
    {"start_date": "2024-01-01", "end_date": "2024-01-14"},
    {"start_date": "2024-01-15", "end_date": "2024-01-31"},
    {"start_date": "2024-02-01", "end_date": "2024-02-14"},
]


def test_monthly_first_of_month_over_a_quarter():
    result = occurrences_in_range(builders.monthly(1), None, date(2024, 1, 1), date(2024, 3, 31))
    assert result == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]


def test_end_of_month_over_a_year_is_leap_aware():
    rule = builders.monthly(end_of_month=True)
    result = occurrences_in_range(rule, None, date(2024, 1, 1), date(2024, 12, 31))
    assert len(result) == 12
    assert result[1] == date(2024, 2, 29)
    assert all((d + timedelta(days=1)).day == 1 for d in result)


def test_semi_monthly_in_january():
    result = occurrences_in_range(builders.semi_monthly(1, 15), None, date(2024, 1, 1), date(2024, 1, 31))
    assert result == [date(2024, 1, 1), date(2024, 1, 15)]


def test_weekly_window_includes_both_ends():
    result = occurrences_in_range(builders.weekly("monday"), None, date(2024, 1, 1), date(2024, 1, 29))
    assert result == [date(2024, 1, d) for d in (1, 8, 15, 22, 29)]


def test_biweekly_window_keeps_anchor_phase():
    anchor = date(2024, 1, 5)
    result = occurrences_in_range(builders.biweekly("friday"), anchor, date(2024, 1, 1), date(2024, 2, 29))
    assert result == [date(2024, 1, 5), date(2024, 1, 19), date(2024, 2, 2), date(2024, 2, 16)]
    assert all(((d - anchor).days // 7) % 2 == 0 for d in result)


def test_biweekly_anchor_off_the_weekday_spaces_fourteen_days():
    anchor = date(2024, 1, 1)  # a Monday
    result = occurrences_in_range(builders.biweekly("friday"), anchor, date(2024, 1, 1), date(2024, 3, 1))
    assert result == [date(2024, 1, 5), date(2024, 1, 19), date(2024, 2, 2), date(2024, 2, 16), date(2024, 3, 1)]
    assert all(((d - anchor).days // 7) % 2 == 0 for d in result)
    assert all((b - a).days == 14 for a, b in zip(result, result[1:]))


def test_semi_monthly_dates_that_clamp_together_fire_once():
    rule = builders.semi_monthly(29, second_is_eom=True)
    assert occurrences_in_range(rule, None, date(2023, 2, 1), date(2023, 2, 28)) == [date(2023, 2, 28)]
    assert occurrences_in_range(rule, None, date(2024, 2, 1), date(2024, 2, 29)) == [date(2024, 2, 29)]
    same_day = builders.semi_monthly(15, 15)
    assert occurrences_in_range(same_day, None, date(2023, 1, 1), date(2023, 1, 31)) == [date(2023, 1, 15)]


def test_yearly_occurrence_on_window_start_is_kept_once():
    rule = builders.yearly(3, 15)
    result = occurrences_in_range(rule, None, date(2024, 3, 15), date(2026, 12, 31))
    assert result == [date(2024, 3, 15), date(2025, 3, 15), date(2026, 3, 15)]


def test_custom_quarterly_over_two_years():
    rule = builders.quarterly_custom(["03-15", "06-18", "09-19", "12-09"])
    result = occurrences_in_range(rule, None, date(2024, 1, 1), date(2025, 12, 31))
    assert len(result) == 8
    assert result[0] == date(2024, 3, 15)
    assert result[-1] == date(2025, 12, 9)


def test_results_are_strictly_increasing_and_inside_window():
    start, end = date(2024, 1, 1), date(2024, 6, 30)
    for rule in (
        builders.monthly(31),
        builders.weekly("wednesday"),
        builders.semi_monthly(1, second_is_eom=True),
        builders.quarterly_regular(1),
    ):
        result = occurrences_in_range(rule, None, start, end)
        assert result == sorted(set(result))
        assert all(start <= d <= end for d in result)


def test_empty_when_window_is_reversed():
    assert occurrences_in_range(builders.monthly(1), None, date(2024, 3, 1), date(2024, 1, 1)) == []


def test_iteration_cap_truncates_long_windows():
    rule = builders.weekly("monday")
    result = occurrences_in_range(rule, None, date(2024, 1, 1), date(2030, 12, 31))
    assert len(result) == 100
    assert result[-1] == date(2024, 1, 1) + timedelta(weeks=99)


def test_iteration_cap_is_configurable():
    rule = builders.weekly("monday")
    result = occurrences_in_range(rule, None, date(2024, 1, 1), date(2030, 12, 31), max_iterations=3)
    assert result == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]


def test_calls_are_restartable():
    rule = builders.semi_monthly(1, 15)
    first = occurrences_in_range(rule, None, date(2024, 1, 1), date(2024, 6, 30))
    second = occurrences_in_range(rule, None, date(2024, 1, 1), date(2024, 6, 30))
    assert first == second


def test_biweekly_without_anchor_raises():
    with pytest.raises(InvalidRule):
        occurrences_in_range(builders.biweekly("friday"), None, date(2024, 1, 1), date(2024, 1, 31))


def test_invalid_window_raises_value_error():
    with pytest.raises(ValueError):
        occurrences_in_range(builders.monthly(1), None, "soon", date(2024, 1, 31))


# ── Per-paycheck ─────────────────────────────────────────────────────────────

def test_per_paycheck_period_start_uses_every_period():
    result = occurrences_in_range(
        builders.per_paycheck(), None, date(2024, 1, 1), date(2024, 2, 14), periods=PAYCHECK_PERIODS,
    )
    assert result == [date(2024, 1, 1), date(2024, 1, 15), date(2024, 2, 1)]


def test_per_paycheck_without_periods_is_empty():
    assert occurrences_in_range(builders.per_paycheck(), None, date(2024, 1, 1), date(2024, 2, 14)) == []


def test_per_paycheck_pay_date_prefers_explicit_pay_date():
    periods = [
        PeriodBoundary(start=date(2024, 1, 1), end=date(2024, 1, 14), pay_date=date(2024, 1, 12)),
        {"start_date": "2024-01-15", "end_date": "2024-01-31", "pay_date": "2024-01-31"},
    ]
    result = occurrences_in_range(
        builders.per_paycheck("pay_date"), None, date(2024, 1, 1), date(2024, 1, 31), periods=periods,
    )
    assert result == [date(2024, 1, 12), date(2024, 1, 31)]


def test_pay_date_falls_back_to_previous_business_day():
    # 2024-06-01 is a Saturday, 2024-09-01 a Sunday
    assert paycheck_pay_date(PeriodBoundary(date(2024, 6, 1), date(2024, 6, 14))) == date(2024, 5, 31)
    assert paycheck_pay_date(PeriodBoundary(date(2024, 9, 1), date(2024, 9, 14))) == date(2024, 8, 30)
    assert paycheck_pay_date(PeriodBoundary(date(2024, 1, 15), date(2024, 1, 31))) == date(2024, 1, 15)


def test_malformed_period_raises():
    with pytest.raises(ValueError):
        occurrences_in_range(
            builders.per_paycheck(), None, date(2024, 1, 1), date(2024, 1, 31),
            periods=[{"start_date": "nope"}],
        )


# ── Upcoming ─────────────────────────────────────────────────────────────────

def test_upcoming_occurrences_chain_the_resolver():
    rule = builders.monthly(15)
    assert upcoming_occurrences(rule, from_date=date(2024, 1, 15)) == [
        date(2024, 2, 15), date(2024, 3, 15), date(2024, 4, 15),
    ]


def test_upcoming_yearly_skips_from_date():
    rule = builders.yearly(3, 15)
    assert upcoming_occurrences(rule, count=2, from_date=date(2024, 3, 15)) == [
        date(2025, 3, 15), date(2026, 3, 15),
    ]


def test_upcoming_per_paycheck_is_empty():
    assert upcoming_occurrences(builders.per_paycheck(), from_date=date(2024, 1, 1)) == []


def test_upcoming_matches_repeated_next_occurrence():
    rule = builders.biweekly("tuesday")
    anchor = date(2024, 1, 2)
    dates = upcoming_occurrences(rule, anchor, count=4, from_date=date(2024, 1, 1))
    cursor = date(2024, 1, 1)
    for d in dates:
        assert next_occurrence(rule, anchor, cursor) == d
        cursor = d
