"""Read-model rules over snapshots of rooms, guests and money records.

Everything in this package is a pure function of its inputs: nothing is
persisted and inputs are never mutated.
"""
from .financials import (
    FinancialSummary,
    aggregate_financials,
    category_breakdown,
    financial_summary,
    monthly_trend,
    property_breakdown,
    revenue_growth,
)
from .maintenance import summarize_maintenance
from .money import parse_amount, percent
from .occupancy import OccupancyCounts, calculate_occupancy, normalize_status, occupancy_by_building
from .payments_due import (
    advance_due_date,
    due_today,
    effective_payment_status,
    is_overdue,
    is_trackable,
    next_due_date,
    overdue_guests,
    payments_due_this_week,
    select_payments_due,
    total_payments_due,
)
from .periods import PERIODS, resolve_period, week_window
from .transitions import TransitionResult, can_transition_room
