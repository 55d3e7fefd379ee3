"""Convenience builders used by the income and expense forms, one per kind."""
from recurrence_engine.models.frequency import (
    BiweeklyRule,
    MonthlyRule,
    PerPaycheckRule,
    QuarterlyRule,
    SemiMonthlyRule,
    WeeklyRule,
    YearlyRule,
)
from recurrence_engine.utils.constants import (
    QUARTERLY_CUSTOM,
    QUARTERLY_REGULAR,
    TRIGGER_PERIOD_START,
)


def monthly(day_of_month: int = 1, end_of_month: bool = False) -> MonthlyRule:
    return MonthlyRule(
        day_of_month=None if end_of_month else day_of_month,
        is_end_of_month=end_of_month,
    )


def weekly(day_of_week: str) -> WeeklyRule:
    return WeeklyRule(day_of_week=day_of_week.lower())


def biweekly(day_of_week: str) -> BiweeklyRule:
    """The anchor date is not part of the rule; pass it to the resolver."""
    return BiweeklyRule(day_of_week=day_of_week.lower())


def semi_monthly(
    first_day: int,
    second_day: int | None = None,
    second_is_eom: bool = False,
) -> SemiMonthlyRule:
    return SemiMonthlyRule(
        first_day=first_day,
        second_day=None if second_is_eom else second_day,
        second_is_eom=second_is_eom,
    )


def quarterly_regular(day_of_month: int) -> QuarterlyRule:
    return QuarterlyRule(quarterly_type=QUARTERLY_REGULAR, day_of_month=day_of_month)


def quarterly_custom(custom_dates: list[str]) -> QuarterlyRule:
    return QuarterlyRule(quarterly_type=QUARTERLY_CUSTOM, custom_dates=tuple(custom_dates))


def yearly(month: int, day: int) -> YearlyRule:
    return YearlyRule(month=month, day=day)


def per_paycheck(trigger: str = TRIGGER_PERIOD_START) -> PerPaycheckRule:
    return PerPaycheckRule(trigger=trigger)
