"""Structural checks for recurrence rules.

Only the shape of a rule is checked here: required fields per kind and
their numeric ranges. Whether a day exists in a given month (31 April,
29 February) is left to the resolver, which clamps to the month's end.
"""
from collections.abc import Mapping
from dataclasses import is_dataclass

from recurrence_engine.models.errors import InvalidRule
from recurrence_engine.models.frequency import (
    RULE_CLASSES,
    BiweeklyRule,
    MonthlyRule,
    PerPaycheckRule,
    QuarterlyRule,
    RecurrenceRule,
    SemiMonthlyRule,
    WeeklyRule,
    YearlyRule,
    rule_to_config,
)
from recurrence_engine.utils.constants import (
    CUSTOM_QUARTERLY_DATE_COUNT,
    FREQ_BIWEEKLY,
    FREQ_MONTHLY,
    FREQ_PER_PAYCHECK,
    FREQ_QUARTERLY,
    FREQ_SEMI_MONTHLY,
    FREQ_WEEKLY,
    FREQ_YEARLY,
    MAX_DAY,
    MAX_MONTH,
    MIN_DAY,
    MIN_MONTH,
    PAYCHECK_TRIGGERS,
    QUARTERLY_CUSTOM,
    QUARTERLY_REGULAR,
    WEEKDAYS,
)
from recurrence_engine.utils.date_helpers import parse_month_day


def _is_int(value) -> bool:
    # bool is an int subclass; True must not pass as day 1
    return isinstance(value, int) and not isinstance(value, bool)


def _is_day(value) -> bool:
    return _is_int(value) and MIN_DAY <= value <= MAX_DAY


def _is_month(value) -> bool:
    return _is_int(value) and MIN_MONTH <= value <= MAX_MONTH


def _is_weekday(value) -> bool:
    return isinstance(value, str) and value.lower() in WEEKDAYS


def _valid_monthly(config: Mapping) -> bool:
    return config.get("is_end_of_month") is True or _is_day(config.get("day_of_month"))


def _valid_weekly(config: Mapping) -> bool:
    return _is_weekday(config.get("day_of_week"))


def _valid_semi_monthly(config: Mapping) -> bool:
    if not _is_day(config.get("first_day")):
        return False
    return config.get("second_is_eom") is True or _is_day(config.get("second_day"))


def _valid_quarterly(config: Mapping) -> bool:
    quarterly_type = config.get("quarterly_type")
    if quarterly_type == QUARTERLY_REGULAR:
        return _is_day(config.get("day_of_month"))
    if quarterly_type == QUARTERLY_CUSTOM:
        dates = config.get("custom_dates")
        if not isinstance(dates, (list, tuple)) or len(dates) != CUSTOM_QUARTERLY_DATE_COUNT:
            return False
        return all(parse_month_day(d) is not None for d in dates)
    return False


def _valid_yearly(config: Mapping) -> bool:
    return _is_month(config.get("month")) and _is_day(config.get("day"))


def _valid_per_paycheck(config: Mapping) -> bool:
    return config.get("trigger") in PAYCHECK_TRIGGERS


_CHECKS = {
    FREQ_MONTHLY: _valid_monthly,
    FREQ_WEEKLY: _valid_weekly,
    FREQ_BIWEEKLY: _valid_weekly,
    FREQ_SEMI_MONTHLY: _valid_semi_monthly,
    FREQ_QUARTERLY: _valid_quarterly,
    FREQ_YEARLY: _valid_yearly,
    FREQ_PER_PAYCHECK: _valid_per_paycheck,
}


def is_valid(kind: str, config) -> bool:
    """True when config is a well-formed rule of the given kind. Never raises."""
    if is_dataclass(config) and not isinstance(config, type):
        config = rule_to_config(config)
    if not isinstance(config, Mapping):
        return False
    check = _CHECKS.get(kind)
    if check is None:
        return False
    if config.get("type", kind) != kind:
        return False
    return check(config)


def parse_rule(kind: str, config: Mapping) -> RecurrenceRule:
    """Build the typed rule for a stored (kind, config) pair."""
    if not is_valid(kind, config):
        raise InvalidRule(f"Invalid {kind} frequency configuration: {config!r}")

    if kind == FREQ_MONTHLY:
        eom = config.get("is_end_of_month") is True
        return MonthlyRule(
            day_of_month=None if eom else config["day_of_month"],
            is_end_of_month=eom,
        )
    if kind == FREQ_WEEKLY:
        return WeeklyRule(day_of_week=config["day_of_week"].lower())
    if kind == FREQ_BIWEEKLY:
        return BiweeklyRule(day_of_week=config["day_of_week"].lower())
    if kind == FREQ_SEMI_MONTHLY:
        eom = config.get("second_is_eom") is True
        return SemiMonthlyRule(
            first_day=config["first_day"],
            second_day=None if eom else config["second_day"],
            second_is_eom=eom,
        )
    if kind == FREQ_QUARTERLY:
        if config["quarterly_type"] == QUARTERLY_CUSTOM:
            return QuarterlyRule(
                quarterly_type=QUARTERLY_CUSTOM,
                custom_dates=tuple(d.strip() for d in config["custom_dates"]),
            )
        return QuarterlyRule(quarterly_type=QUARTERLY_REGULAR, day_of_month=config["day_of_month"])
    if kind == FREQ_YEARLY:
        return YearlyRule(month=config["month"], day=config["day"])
    return PerPaycheckRule(trigger=config["trigger"])


def check_rule(rule: RecurrenceRule) -> None:
    """Raise InvalidRule unless rule is a well-formed instance of its kind's dataclass."""
    kind = getattr(rule, "type", None)
    rule_class = RULE_CLASSES.get(kind)
    if rule_class is None or not isinstance(rule, rule_class):
        raise InvalidRule(f"Not a recurrence rule: {rule!r}")
    if not is_valid(kind, rule):
        raise InvalidRule(f"Invalid {kind} frequency configuration: {rule!r}")
