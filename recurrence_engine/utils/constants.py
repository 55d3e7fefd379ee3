DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

MAX_RANGE_ITERATIONS = 100  # safety cap per enumeration call
DEFAULT_PREVIEW_COUNT = 3
UPCOMING_DUE_DAYS = 30

FREQ_MONTHLY = "monthly"
FREQ_BIWEEKLY = "biweekly"
FREQ_WEEKLY = "weekly"
FREQ_YEARLY = "yearly"
FREQ_QUARTERLY = "quarterly"
FREQ_SEMI_MONTHLY = "semi_monthly"
FREQ_PER_PAYCHECK = "per_paycheck"

FREQUENCY_TYPES = (
    FREQ_MONTHLY,
    FREQ_BIWEEKLY,
    FREQ_WEEKLY,
    FREQ_SEMI_MONTHLY,
    FREQ_QUARTERLY,
    FREQ_YEARLY,
    FREQ_PER_PAYCHECK,
)

FREQUENCY_LABELS = {
    FREQ_MONTHLY: "Monthly",
    FREQ_BIWEEKLY: "Every 2 weeks",
    FREQ_WEEKLY: "Weekly",
    FREQ_SEMI_MONTHLY: "Semi-monthly",
    FREQ_QUARTERLY: "Quarterly",
    FREQ_YEARLY: "Yearly",
    FREQ_PER_PAYCHECK: "Every paycheck",
}

QUARTERLY_REGULAR = "regular"
QUARTERLY_CUSTOM = "custom"
CUSTOM_QUARTERLY_DATE_COUNT = 4

TRIGGER_PERIOD_START = "period_start"
TRIGGER_PAY_DATE = "pay_date"
PAYCHECK_TRIGGERS = (TRIGGER_PERIOD_START, TRIGGER_PAY_DATE)

# Index matches date.weekday(): 0=Mon..6=Sun
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

MIN_DAY, MAX_DAY = 1, 31
MIN_MONTH, MAX_MONTH = 1, 12
