"""Item-level helpers for the budget screens.

These work on ScheduledItem records as they come out of storage (kind +
config dict + anchor) and never write anything back; callers get copies.
A record whose rule cannot be resolved simply has no next due date here,
so one bad record does not hide the rest of a household's schedule.
"""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import date, timedelta

from recurrence_engine.models.errors import InvalidRule
from recurrence_engine.models.frequency import PeriodBoundary, RecurrenceRule
from recurrence_engine.models.scheduled_item import ScheduledItem
from recurrence_engine.services.enumerator import first_on_or_after, occurrences_in_range
from recurrence_engine.services.formatter import format_frequency
from recurrence_engine.services.validator import parse_rule
from recurrence_engine.utils.app_config import RecurrenceSettings
from recurrence_engine.utils.constants import FREQ_PER_PAYCHECK
from recurrence_engine.utils.date_helpers import (
    add_months,
    end_of_month,
    format_date,
    format_month,
    parse_month,
    today,
)


@dataclass
class UpcomingItem:
    item_id: str
    name: str
    due_date: date
    days_until_due: int
    day_label: str          # 'today' | 'tomorrow' | 'in N days'
    frequency_label: str


def item_rule(item: ScheduledItem) -> RecurrenceRule | None:
    """The item's typed rule, or None when its stored config is malformed."""
    try:
        return parse_rule(item.frequency_type, item.frequency_config)
    except InvalidRule:
        return None


def _due_on_or_after(item: ScheduledItem, rule: RecurrenceRule | None, ref: date) -> date | None:
    if rule is None or rule.type == FREQ_PER_PAYCHECK:
        return None
    try:
        return first_on_or_after(rule, item.anchor_date, ref)
    except InvalidRule:
        return None


def with_next_due_dates(
    items: Iterable[ScheduledItem], from_date: date | None = None
) -> list[ScheduledItem]:
    """Copies of items with next_due_date set to the first occurrence on or after
    from_date (default: today), the same date upcoming_items reports as due."""
    ref = from_date or today()
    result = []
    for item in items:
        due = _due_on_or_after(item, item_rule(item), ref)
        result.append(replace(item, next_due_date=format_date(due) if due else None))
    return result


def upcoming_items(
    items: Iterable[ScheduledItem],
    from_date: date | None = None,
    settings: RecurrenceSettings | None = None,
) -> list[UpcomingItem]:
    """Items due within settings.upcoming_days of from_date (inclusive), soonest first.

    An occurrence on from_date itself counts as due "today", matching with_next_due_dates.
    """
    ref = from_date or today()
    horizon = ref + timedelta(days=(settings or RecurrenceSettings()).upcoming_days)
    upcoming = []
    for item in items:
        rule = item_rule(item)
        due = _due_on_or_after(item, rule, ref)
        if due is None or due > horizon:
            continue
        days_away = (due - ref).days
        day_label = "today" if days_away == 0 else (
            "tomorrow" if days_away == 1 else f"in {days_away} days"
        )
        upcoming.append(UpcomingItem(
            item_id=item.id,
            name=item.name,
            due_date=due,
            days_until_due=days_away,
            day_label=day_label,
            frequency_label=format_frequency(item.frequency_type, rule),
        ))
    return sorted(upcoming, key=lambda u: (u.days_until_due, u.name))


def occurrences_by_item(
    items: Iterable[ScheduledItem],
    window_start: date,
    window_end: date,
    periods: Iterable[PeriodBoundary | Mapping] | None = None,
    settings: RecurrenceSettings | None = None,
) -> dict[str, list[date]]:
    """
    {item.id: [dates]} for every item within [window_start, window_end].
    Unresolvable items map to an empty list.
    """
    max_iterations = (settings or RecurrenceSettings()).max_iterations
    period_list = list(periods) if periods is not None else None
    result: dict[str, list[date]] = {}
    for item in items:
        rule = item_rule(item)
        if rule is None:
            result[item.id] = []
            continue
        try:
            result[item.id] = occurrences_in_range(
                rule, item.anchor_date, window_start, window_end,
                periods=period_list, max_iterations=max_iterations,
            )
        except InvalidRule:
            result[item.id] = []
    return result


def monthly_occurrence_counts(
    item: ScheduledItem,
    first_month: str,
    months: int,
    periods: Iterable[PeriodBoundary | Mapping] | None = None,
) -> list[dict]:
    """
    [{month:'YYYY-MM', occurrences:int}] for `months` calendar months from first_month.
    Raises InvalidRule when the item's rule is malformed.
    """
    start = parse_month(first_month)
    if start is None:
        raise ValueError(f"Invalid month: {first_month}")
    rule = parse_rule(item.frequency_type, item.frequency_config)
    period_list = list(periods) if periods is not None else None

    result = []
    for i in range(months):
        month_start = add_months(start, i)
        month_end = end_of_month(month_start)
        dates = occurrences_in_range(
            rule, item.anchor_date, month_start, month_end, periods=period_list,
        )
        # per-paycheck answers with every period; keep the ones in this month
        in_month = [d for d in dates if month_start <= d <= month_end]
        result.append({"month": format_month(month_start), "occurrences": len(in_month)})
    return result
