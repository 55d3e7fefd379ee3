from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from recurrence_engine.models.frequency import PeriodBoundary, PerPaycheckRule, RecurrenceRule
from recurrence_engine.services.resolver import resolve
from recurrence_engine.services.validator import check_rule
from recurrence_engine.utils.constants import (
    DEFAULT_PREVIEW_COUNT,
    FREQ_PER_PAYCHECK,
    MAX_RANGE_ITERATIONS,
    TRIGGER_PERIOD_START,
)
from recurrence_engine.utils.date_helpers import coerce_date, previous_business_day, today


def occurrences_in_range(
    rule: RecurrenceRule,
    anchor_date: date | str | None,
    window_start: date,
    window_end: date,
    periods: Iterable[PeriodBoundary | Mapping] | None = None,
    max_iterations: int = MAX_RANGE_ITERATIONS,
) -> list[date]:
    """
    Return every date in [window_start, window_end] on which `rule` fires, in order.

    Per-paycheck rules are answered from `periods` alone: one date per supplied
    period, whatever the window. Other kinds walk the resolver forward from
    window_start, stopping after `max_iterations` steps; a long window on a
    frequent rule is truncated rather than looping without bound.
    """
    check_rule(rule)
    start = _require_date(window_start, "window start")
    end = _require_date(window_end, "window end")

    if rule.type == FREQ_PER_PAYCHECK:
        return _per_paycheck_occurrences(rule, periods or [])

    result: list[date] = []
    cursor = start
    iterations = 0
    while cursor <= end and iterations < max_iterations:
        occurrence = first_on_or_after(rule, anchor_date, cursor)
        if occurrence > end:
            break
        result.append(occurrence)
        cursor = occurrence + timedelta(days=1)
        iterations += 1
    return result


def upcoming_occurrences(
    rule: RecurrenceRule,
    anchor_date: date | str | None = None,
    count: int = DEFAULT_PREVIEW_COUNT,
    from_date: date | None = None,
) -> list[date]:
    """The next `count` dates after from_date (default: today). Empty for per-paycheck rules."""
    check_rule(rule)
    if rule.type == FREQ_PER_PAYCHECK:
        return []
    cursor = _require_date(from_date, "from date") if from_date is not None else today()
    result: list[date] = []
    for _ in range(count):
        occurrence = resolve(rule, anchor_date, cursor)
        if occurrence <= cursor:
            # yearly matches its own from-date; step past it
            occurrence = resolve(rule, anchor_date, cursor + timedelta(days=1))
        result.append(occurrence)
        cursor = occurrence
    return result


def paycheck_pay_date(period: PeriodBoundary) -> date:
    """Explicit pay date when the period carries one, else its start moved off a weekend."""
    if period.pay_date is not None:
        return period.pay_date
    return previous_business_day(period.start)


def first_on_or_after(rule: RecurrenceRule, anchor_date, cursor: date) -> date:
    # Resolution is strictly-after for most kinds; ask from the previous day so
    # an occurrence on the cursor itself is kept.
    occurrence = resolve(rule, anchor_date, cursor - timedelta(days=1))
    if occurrence < cursor:
        occurrence = resolve(rule, anchor_date, cursor)
    return occurrence


def _per_paycheck_occurrences(
    rule: PerPaycheckRule,
    periods: Iterable[PeriodBoundary | Mapping],
) -> list[date]:
    occurrences = []
    for raw in periods:
        period = raw if isinstance(raw, PeriodBoundary) else PeriodBoundary.from_dict(raw)
        if rule.trigger == TRIGGER_PERIOD_START:
            occurrences.append(period.start)
        else:
            occurrences.append(paycheck_pay_date(period))
    return occurrences


def _require_date(value, label: str) -> date:
    parsed = coerce_date(value)
    if parsed is None:
        raise ValueError(f"Invalid {label}: {value!r}")
    return parsed
