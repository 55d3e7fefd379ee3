from collections.abc import Mapping
from dataclasses import is_dataclass

from recurrence_engine.models.frequency import rule_to_config
from recurrence_engine.utils.constants import (
    FREQ_BIWEEKLY,
    FREQ_MONTHLY,
    FREQ_PER_PAYCHECK,
    FREQ_QUARTERLY,
    FREQ_SEMI_MONTHLY,
    FREQ_WEEKLY,
    FREQ_YEARLY,
    FREQUENCY_LABELS,
    FREQUENCY_TYPES,
    MONTH_NAMES,
    QUARTERLY_REGULAR,
    TRIGGER_PERIOD_START,
    WEEKDAYS,
)


def ordinal(n: int) -> str:
    """English ordinal, e.g. 1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if n % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _weekday_label(value) -> str:
    return str(value or "").capitalize()


def _month_label(month) -> str:
    if isinstance(month, int) and 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def format_frequency(kind: str, config) -> str:
    """Human-readable description of a rule, e.g. 'Monthly (1st)' or 'Semi-monthly (1st & EOM)'."""
    if is_dataclass(config) and not isinstance(config, type):
        config = rule_to_config(config)
    if not isinstance(config, Mapping):
        config = {}

    if kind == FREQ_MONTHLY:
        if config.get("is_end_of_month"):
            return "Monthly (End of Month)"
        return f"Monthly ({ordinal(config.get('day_of_month') or 1)})"

    if kind == FREQ_WEEKLY:
        return f"Weekly ({_weekday_label(config.get('day_of_week'))})"

    if kind == FREQ_BIWEEKLY:
        return f"Every 2 weeks ({_weekday_label(config.get('day_of_week'))})"

    if kind == FREQ_YEARLY:
        month = _month_label(config.get("month"))
        return f"Yearly ({month} {ordinal(config.get('day') or 1)})"

    if kind == FREQ_QUARTERLY:
        if config.get("quarterly_type") == QUARTERLY_REGULAR:
            return f"Quarterly ({ordinal(config.get('day_of_month') or 1)} of each quarter)"
        return "Quarterly (Custom dates)"

    if kind == FREQ_SEMI_MONTHLY:
        first = ordinal(config.get("first_day") or 1)
        second = "EOM" if config.get("second_is_eom") else ordinal(config.get("second_day") or 1)
        return f"Semi-monthly ({first} & {second})"

    if kind == FREQ_PER_PAYCHECK:
        trigger = "period start" if config.get("trigger") == TRIGGER_PERIOD_START else "pay date"
        return f"Every paycheck ({trigger})"

    return str(kind)


# ── Form option lists ─────────────────────────────────────────────────────────

def frequency_options() -> list[dict]:
    return [{"value": kind, "label": FREQUENCY_LABELS[kind]} for kind in FREQUENCY_TYPES]


def day_of_week_options() -> list[dict]:
    return [{"value": day, "label": day.capitalize()} for day in WEEKDAYS]


def month_options() -> list[dict]:
    return [{"value": i + 1, "label": name} for i, name in enumerate(MONTH_NAMES)]


def day_options() -> list[dict]:
    return [{"value": day, "label": ordinal(day)} for day in range(1, 32)]
