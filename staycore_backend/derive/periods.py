from datetime import date, datetime, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ..errors import ValidationError

PERIODS = ("current-month", "last-month", "current-year", "last-year")
BOOKING_TYPES = ("daily", "weekly", "monthly")

_PERIOD_STEP = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(weeks=1),
    "monthly": relativedelta(months=1),
}


def parse_date(value):
    """Calendar date from a date, datetime or ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.isoparse(value.strip()).date()
        except (ValueError, OverflowError):
            raise ValueError(f"invalid date: {value!r}") from None
    raise ValueError(f"invalid date: {value!r}")


def today():
    return date.today()


def add_period(start, booking_type):
    """One billing period after `start`; monthly clamps to the month end (Jan 31 -> Feb 28)."""
    try:
        return parse_date(start) + _PERIOD_STEP[booking_type]
    except KeyError:
        raise ValidationError("invalid_booking_type", f"booking_type must be one of {', '.join(BOOKING_TYPES)}",
                              field="booking_type") from None


def week_window(reference):
    """Sunday..Saturday calendar week containing `reference`."""
    reference = parse_date(reference)
    start = reference - timedelta(days=(reference.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(year, month):
    start = date(year, month, 1)
    return start, start + relativedelta(months=1) - timedelta(days=1)


def resolve_period(period, now=None):
    """Inclusive (start, end) dates for a named reporting period."""
    now = parse_date(now or today())
    if period == "current-month":
        return month_bounds(now.year, now.month)
    if period == "last-month":
        previous = now.replace(day=1) - relativedelta(months=1)
        return month_bounds(previous.year, previous.month)
    if period == "current-year":
        return date(now.year, 1, 1), date(now.year, 12, 31)
    if period == "last-year":
        return date(now.year - 1, 1, 1), date(now.year - 1, 12, 31)
    raise ValidationError("invalid_period", f"period must be one of {', '.join(PERIODS)}", field="period")


def trailing_months(now=None, count=6):
    """(year, month) pairs for the last `count` months, oldest first, ending with `now`'s month."""
    first = parse_date(now or today()).replace(day=1)
    months = []
    for back in range(count - 1, -1, -1):
        d = first - relativedelta(months=back)
        months.append((d.year, d.month))
    return months
