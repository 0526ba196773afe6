import logging

from .money import sum_amounts
from .periods import add_period, parse_date, week_window
from .records import as_bool, get_field

log = logging.getLogger(__name__)

PAYMENT_STATUSES = ("pending", "paid", "overdue")


def is_trackable(guest):
    """Active guests that have not moved out are the only ones payment views show."""
    return as_bool(get_field(guest, "is_active"), default=False) and not as_bool(get_field(guest, "has_moved_out"))


def due_date_of(guest):
    value = get_field(guest, "next_payment_due")
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError:
        log.warning("Skipping guest %s with bad next_payment_due %r", get_field(guest, "id"), value)
        return None


def select_payments_due(guests, start, end):
    """Trackable guests whose next payment falls in [start, end], earliest first."""
    start, end = parse_date(start), parse_date(end)
    selected = []
    for guest in guests or ():
        if not is_trackable(guest):
            continue
        due = due_date_of(guest)
        if due is not None and start <= due <= end:
            selected.append((due, guest))
    selected.sort(key=lambda pair: pair[0])
    return [guest for _, guest in selected]


def payments_due_this_week(guests, today):
    start, end = week_window(today)
    return select_payments_due(guests, start, end)


def due_today(guests, today):
    return select_payments_due(guests, today, today)


def is_overdue(guest, today):
    """Due date already passed and the stored status is not 'paid'."""
    due = due_date_of(guest)
    if due is None:
        return False
    return due < parse_date(today) and get_field(guest, "payment_status") != "paid"


def overdue_guests(guests, today):
    """Trackable guests whose effective status for `today` is overdue (a lapsed "paid" counts)."""
    return [g for g in guests or () if is_trackable(g) and effective_payment_status(g, today) == "overdue"]


def effective_payment_status(guest, today):
    """Status after applying the re-arm rule for `today`.

    A 'paid' guest stays paid until the new due date arrives, then is pending
    for that day and overdue once it has passed without a payment.
    """
    today = parse_date(today)
    status = get_field(guest, "payment_status") or "pending"
    due = due_date_of(guest)
    if due is None:
        return status
    if status == "paid" and due <= today:
        status = "pending"
    if status != "paid":
        status = "overdue" if due < today else "pending"
    return status


def next_due_date(from_date, booking_type):
    return add_period(from_date, booking_type)


def advance_due_date(guest, today):
    """Next due date after a payment: one period past the current due date (or today if unset)."""
    base = due_date_of(guest) or parse_date(today)
    return next_due_date(base, get_field(guest, "booking_type"))


def total_payments_due(guests, today):
    return sum_amounts(due_today(guests, today), lambda g: get_field(g, "payment_amount"), label="guest")


def days_until_due(guest, today):
    due = due_date_of(guest)
    if due is None:
        return None
    return (due - parse_date(today)).days
