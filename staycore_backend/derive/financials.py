import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from .money import InvalidAmount, as_float, from_cents, percent, sum_amounts, to_cents
from .payments_due import total_payments_due
from .periods import parse_date, resolve_period, trailing_months
from .records import get_field, get_nested

log = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Other"
TREND_MONTHS = 6


def payment_amount(payment):
    return get_nested(payment, "payment", "amount")


def payment_date(payment):
    return get_nested(payment, "payment", "payment_date", "date")


def expense_amount(expense):
    return get_field(expense, "amount")


def expense_date(expense):
    return get_field(expense, "receipt_date", "date")


def _dated(records, date_of, label):
    for record in records or ():
        value = date_of(record)
        try:
            yield parse_date(value), record
        except ValueError:
            log.warning("Skipping %s %s with bad date %r", label, get_field(record, "id"), value)


def _cents(record, amount_of, label):
    try:
        return to_cents(amount_of(record))
    except InvalidAmount as e:
        log.warning("Skipping %s %s with bad amount: %s", label, get_field(record, "id"), e)
        return None


def filter_between(records, date_of, start, end, label="record"):
    start, end = parse_date(start), parse_date(end)
    return [record for d, record in _dated(records, date_of, label) if start <= d <= end]


def filter_payments(payments, period, now=None):
    start, end = resolve_period(period, now)
    return filter_between(payments, payment_date, start, end, label="payment")


def filter_expenses(expenses, period, now=None):
    start, end = resolve_period(period, now)
    return filter_between(expenses, expense_date, start, end, label="expense")


def category_breakdown(expenses):
    """Expense totals per category (missing category -> 'Other'), with share of all expenses."""
    totals = {}
    for expense in expenses or ():
        cents = _cents(expense, expense_amount, "expense")
        if cents is None:
            continue
        category = get_field(expense, "category") or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0) + cents
    grand_total = sum(totals.values())
    return [
        {"name": name, "value": float(from_cents(cents)), "percentage": percent(cents, grand_total)}
        for name, cents in totals.items()
    ]


def _building_of(payment, room_buildings):
    building_id = get_nested(payment, "room", "building_id")
    if building_id is None:
        room_id = get_nested(payment, "payment", "room_id")
        building_id = room_buildings.get(room_id)
    return building_id


def property_breakdown(payments, rooms=(), buildings=()):
    """Revenue per building of each payment's room. Listed buildings are always present."""
    room_buildings = {get_field(r, "id"): get_field(r, "building_id") for r in rooms or ()}
    info = {get_field(b, "id"): b for b in buildings or ()}
    totals = dict.fromkeys(info, 0)
    for payment in payments or ():
        cents = _cents(payment, payment_amount, "payment")
        if cents is None:
            continue
        building_id = _building_of(payment, room_buildings)
        totals[building_id] = totals.get(building_id, 0) + cents

    breakdown = []
    for building_id, cents in totals.items():
        building = info.get(building_id)
        if building is not None:
            name = get_field(building, "name") or f"Building {building_id}"
        else:
            name = f"Building {building_id}" if building_id is not None else "Unassigned"
        breakdown.append({
            "buildingId": building_id,
            "name": name,
            "address": get_field(building, "address"),
            "revenue": float(from_cents(cents)),
        })
    return breakdown


def monthly_trend(payments, expenses, now=None, months=TREND_MONTHS):
    dated_payments = list(_dated(payments, payment_date, "payment"))
    dated_expenses = list(_dated(expenses, expense_date, "expense"))

    def in_month(dated, year, month):
        return [record for d, record in dated if d.year == year and d.month == month]

    trend = []
    for year, month in trailing_months(now, months):
        revenue = sum_amounts(in_month(dated_payments, year, month), payment_amount, label="payment")
        spent = sum_amounts(in_month(dated_expenses, year, month), expense_amount, label="expense")
        trend.append({
            "month": date(year, month, 1).strftime("%b %y"),
            "year": year,
            "monthNumber": month,
            "revenue": float(revenue),
            "expenses": float(spent),
            "profit": float(revenue - spent),
        })
    return trend


@dataclass
class FinancialSummary:
    period: str
    start: date
    end: date
    total_revenue: Decimal = Decimal("0.00")
    total_expenses: Decimal = Decimal("0.00")
    payment_count: int = 0
    expense_count: int = 0
    category_breakdown: list = field(default_factory=list)
    property_breakdown: list = field(default_factory=list)
    monthly_trend: list = field(default_factory=list)

    @property
    def net_profit(self):
        return self.total_revenue - self.total_expenses

    @property
    def profit_margin(self):
        return percent(self.net_profit, self.total_revenue)

    def to_dict(self):
        return {
            "period": self.period,
            "startDate": self.start.isoformat(),
            "endDate": self.end.isoformat(),
            "totalRevenue": as_float(self.total_revenue),
            "totalExpenses": as_float(self.total_expenses),
            "netProfit": as_float(self.net_profit),
            "profitMargin": self.profit_margin,
            "paymentCount": self.payment_count,
            "expenseCount": self.expense_count,
            "categoryBreakdown": self.category_breakdown,
            "propertyBreakdown": self.property_breakdown,
            "monthlyTrend": self.monthly_trend,
        }


def aggregate_financials(payments, expenses, period="current-month", now=None, rooms=(), buildings=()):
    """Revenue, expenses, profit and breakdowns for one reporting period.

    Payments are dated by ``payment_date`` and expenses by ``receipt_date``;
    rows with unusable dates or amounts are skipped with a warning. The
    monthly trend always covers the trailing six months ending at ``now``.
    """
    start, end = resolve_period(period, now)
    period_payments = filter_between(payments, payment_date, start, end, label="payment")
    period_expenses = filter_between(expenses, expense_date, start, end, label="expense")

    return FinancialSummary(
        period=period,
        start=start,
        end=end,
        total_revenue=sum_amounts(period_payments, payment_amount, label="payment"),
        total_expenses=sum_amounts(period_expenses, expense_amount, label="expense"),
        payment_count=len(period_payments),
        expense_count=len(period_expenses),
        category_breakdown=category_breakdown(period_expenses),
        property_breakdown=property_breakdown(period_payments, rooms, buildings),
        monthly_trend=monthly_trend(payments, expenses, now),
    )


def revenue_growth(payments, now=None):
    this_month = sum_amounts(filter_payments(payments, "current-month", now), payment_amount, label="payment")
    last_month = sum_amounts(filter_payments(payments, "last-month", now), payment_amount, label="payment")
    return {
        "thisMonthRevenue": float(this_month),
        "lastMonthRevenue": float(last_month),
        "growth": percent(this_month - last_month, last_month),
    }


def financial_summary(payments, expenses, guests=(), today: Optional[date] = None):
    """This month's headline numbers plus what is due from guests today."""
    revenue = sum_amounts(filter_payments(payments, "current-month", today), payment_amount, label="payment")
    spent = sum_amounts(filter_expenses(expenses, "current-month", today), expense_amount, label="expense")
    return {
        "thisMonthRevenue": float(revenue),
        "thisMonthExpenses": float(spent),
        "netIncome": float(revenue - spent),
        "totalPaymentsDue": float(total_payments_due(guests, today or date.today())),
    }
