from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional, Union

from recurrence_engine.utils.constants import (
    FREQ_BIWEEKLY,
    FREQ_MONTHLY,
    FREQ_PER_PAYCHECK,
    FREQ_QUARTERLY,
    FREQ_SEMI_MONTHLY,
    FREQ_WEEKLY,
    FREQ_YEARLY,
    QUARTERLY_REGULAR,
    TRIGGER_PERIOD_START,
)
from recurrence_engine.utils.date_helpers import coerce_date


@dataclass(frozen=True)
class MonthlyRule:
    day_of_month: Optional[int] = None   # None when is_end_of_month
    is_end_of_month: bool = False
    type: str = field(default=FREQ_MONTHLY, init=False)


@dataclass(frozen=True)
class WeeklyRule:
    day_of_week: str                     # 'monday'..'sunday'
    type: str = field(default=FREQ_WEEKLY, init=False)


@dataclass(frozen=True)
class BiweeklyRule:
    day_of_week: str                     # phase comes from the caller's anchor date
    type: str = field(default=FREQ_BIWEEKLY, init=False)


@dataclass(frozen=True)
class SemiMonthlyRule:
    first_day: int
    second_day: Optional[int] = None     # None when second_is_eom
    second_is_eom: bool = False
    type: str = field(default=FREQ_SEMI_MONTHLY, init=False)


@dataclass(frozen=True)
class QuarterlyRule:
    quarterly_type: str = QUARTERLY_REGULAR   # 'regular' | 'custom'
    day_of_month: Optional[int] = None        # regular only
    custom_dates: tuple[str, ...] = ()        # custom only, 'MM-DD' x 4
    type: str = field(default=FREQ_QUARTERLY, init=False)


@dataclass(frozen=True)
class YearlyRule:
    month: int                           # 1-12
    day: int                             # 1-31
    type: str = field(default=FREQ_YEARLY, init=False)


@dataclass(frozen=True)
class PerPaycheckRule:
    trigger: str = TRIGGER_PERIOD_START  # 'period_start' | 'pay_date'
    type: str = field(default=FREQ_PER_PAYCHECK, init=False)


RecurrenceRule = Union[
    MonthlyRule,
    WeeklyRule,
    BiweeklyRule,
    SemiMonthlyRule,
    QuarterlyRule,
    YearlyRule,
    PerPaycheckRule,
]

RULE_CLASSES: dict[str, type] = {
    FREQ_MONTHLY: MonthlyRule,
    FREQ_WEEKLY: WeeklyRule,
    FREQ_BIWEEKLY: BiweeklyRule,
    FREQ_SEMI_MONTHLY: SemiMonthlyRule,
    FREQ_QUARTERLY: QuarterlyRule,
    FREQ_YEARLY: YearlyRule,
    FREQ_PER_PAYCHECK: PerPaycheckRule,
}


def rule_to_config(rule: RecurrenceRule) -> dict:
    """JSON-compatible dict for rule storage, e.g. {'type': 'monthly', 'day_of_month': 1, ...}."""
    config = asdict(rule)
    for key, value in config.items():
        if isinstance(value, tuple):
            config[key] = list(value)
    return config


@dataclass(frozen=True)
class PeriodBoundary:
    start: date
    end: date
    pay_date: Optional[date] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PeriodBoundary":
        """Accepts {'start_date', 'end_date', 'pay_date'?} (or 'start'/'end') with ISO strings or dates."""
        start = coerce_date(data.get("start_date", data.get("start")))
        end = coerce_date(data.get("end_date", data.get("end")))
        if start is None or end is None:
            raise ValueError(f"Invalid period boundary: {data!r}")
        pay_date = coerce_date(data.get("pay_date"))
        return cls(start=start, end=end, pay_date=pay_date)
