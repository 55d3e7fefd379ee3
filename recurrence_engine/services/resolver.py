from datetime import date, timedelta

from recurrence_engine.models.errors import InvalidRule, UnsupportedKind
from recurrence_engine.models.frequency import (
    BiweeklyRule,
    MonthlyRule,
    QuarterlyRule,
    RecurrenceRule,
    SemiMonthlyRule,
    WeeklyRule,
    YearlyRule,
)
from recurrence_engine.services.validator import check_rule
from recurrence_engine.utils.constants import (
    FREQ_BIWEEKLY,
    FREQ_MONTHLY,
    FREQ_PER_PAYCHECK,
    FREQ_QUARTERLY,
    FREQ_SEMI_MONTHLY,
    FREQ_WEEKLY,
    FREQ_YEARLY,
    QUARTERLY_CUSTOM,
    WEEKDAYS,
)
from recurrence_engine.utils.date_helpers import (
    add_months,
    coerce_date,
    end_of_month,
    parse_month_day,
    safe_date,
    start_of_week,
    today,
    weeks_between,
)


def next_occurrence(
    rule: RecurrenceRule,
    anchor_date: date | str | None = None,
    from_date: date | None = None,
) -> date:
    """
    Return the next date `rule` fires on, searching from `from_date` (default: today).

    Every kind except yearly answers strictly after `from_date`; yearly also
    accepts `from_date` itself. Raises UnsupportedKind for per-paycheck rules,
    which need period boundaries (see occurrences_in_range), and InvalidRule
    for malformed rules or a biweekly rule without an anchor date.
    """
    if getattr(rule, "type", None) == FREQ_PER_PAYCHECK:
        raise UnsupportedKind("Per-paycheck items require paycheck period context")
    check_rule(rule)
    ref = coerce_date(from_date) if from_date is not None else today()
    if ref is None:
        raise ValueError(f"Invalid from date: {from_date!r}")
    return resolve(rule, anchor_date, ref)


def resolve(rule: RecurrenceRule, anchor_date, from_date: date) -> date:
    """next_occurrence without the structural check; rule must already be valid."""
    if rule.type == FREQ_MONTHLY:
        return _monthly_next(rule, from_date)
    elif rule.type == FREQ_WEEKLY:
        return _weekly_next(rule, from_date)
    elif rule.type == FREQ_BIWEEKLY:
        return _biweekly_next(rule, anchor_date, from_date)
    elif rule.type == FREQ_SEMI_MONTHLY:
        return _semi_monthly_next(rule, from_date)
    elif rule.type == FREQ_QUARTERLY:
        if rule.quarterly_type == QUARTERLY_CUSTOM:
            return _custom_quarterly_next(rule, from_date)
        return _regular_quarterly_next(rule, from_date)
    elif rule.type == FREQ_YEARLY:
        return _yearly_next(rule, from_date)
    elif rule.type == FREQ_PER_PAYCHECK:
        raise UnsupportedKind("Per-paycheck items require paycheck period context")
    raise InvalidRule(f"Unsupported frequency type: {rule.type!r}")


def _monthly_next(rule: MonthlyRule, from_date: date) -> date:
    if rule.is_end_of_month:
        month_end = end_of_month(from_date)
        if from_date >= month_end:
            return end_of_month(add_months(from_date.replace(day=1), 1))
        return month_end

    candidate = safe_date(from_date.year, from_date.month, rule.day_of_month)
    if candidate <= from_date:
        following = add_months(from_date.replace(day=1), 1)
        candidate = safe_date(following.year, following.month, rule.day_of_month)
    return candidate


def _weekday_after(day_of_week: str, from_date: date) -> date:
    """First date on the weekday strictly after from_date, searching from Monday of its week."""
    target = WEEKDAYS.index(day_of_week.lower())
    candidate = start_of_week(from_date)
    while candidate.weekday() != target:
        candidate += timedelta(days=1)
    if candidate <= from_date:
        candidate += timedelta(weeks=1)
    return candidate


def _weekly_next(rule: WeeklyRule, from_date: date) -> date:
    return _weekday_after(rule.day_of_week, from_date)


def _biweekly_next(rule: BiweeklyRule, anchor_date, from_date: date) -> date:
    if anchor_date is None:
        raise InvalidRule("Anchor date is required for biweekly frequency")
    anchor = coerce_date(anchor_date)
    if anchor is None:
        raise InvalidRule(f"Invalid anchor date: {anchor_date!r}")

    candidate = _weekday_after(rule.day_of_week, from_date)
    # Lock to the anchor's phase: an even number of weeks away from it
    if weeks_between(anchor, candidate) % 2 != 0:
        candidate += timedelta(weeks=1)
    return candidate


def _semi_monthly_dates(rule: SemiMonthlyRule, year: int, month: int) -> list[date]:
    first = safe_date(year, month, rule.first_day)
    if rule.second_is_eom:
        second = end_of_month(first)
    else:
        second = safe_date(year, month, rule.second_day)
    return sorted({first, second})


def _semi_monthly_next(rule: SemiMonthlyRule, from_date: date) -> date:
    for candidate in _semi_monthly_dates(rule, from_date.year, from_date.month):
        if candidate > from_date:
            return candidate
    following = add_months(from_date.replace(day=1), 1)
    return _semi_monthly_dates(rule, following.year, following.month)[0]


def _yearly_next(rule: YearlyRule, from_date: date) -> date:
    candidate = safe_date(from_date.year, rule.month, rule.day)
    if candidate < from_date:
        candidate = safe_date(from_date.year + 1, rule.month, rule.day)
    return candidate


def _regular_quarterly_next(rule: QuarterlyRule, from_date: date) -> date:
    target_day = rule.day_of_month or 1
    # Quarters start in January, April, July and October
    next_quarter_month = (from_date.month - 1) // 3 * 3 + 4
    year = from_date.year
    if next_quarter_month > 12:
        next_quarter_month -= 12
        year += 1
    candidate = safe_date(year, next_quarter_month, target_day)
    if candidate <= from_date:
        candidate = safe_date(from_date.year + 1, 1, target_day)
    return candidate


def _custom_quarterly_next(rule: QuarterlyRule, from_date: date) -> date:
    month_days = [parse_month_day(d) for d in rule.custom_dates]
    for year in (from_date.year, from_date.year + 1):
        for month, day in month_days:
            candidate = safe_date(year, month, day)
            if candidate > from_date:
                return candidate
    # Next year always has a later date; guard for malformed input only
    month, day = month_days[0]
    return safe_date(from_date.year + 1, month, day)
