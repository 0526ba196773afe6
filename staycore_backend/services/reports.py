from datetime import date

from ..derive import aggregate_financials, financial_summary, revenue_growth, summarize_maintenance
from ..derive.payments_due import overdue_guests, payments_due_this_week
from ..models import Building, Guest, MaintenanceRequest, Payment, Receipt, Room
from .rooms import occupancy_report


def _money_rows(building_id=None):
    payments = Payment.query.all()
    receipts = Receipt.query.all()
    if building_id is not None:
        payments = [p for p in payments if p.room is not None and p.room.building_id == building_id]
        receipts = [r for r in receipts if r.building_id == building_id]
    return payments, receipts


def financial_report(auth, period="current-month", now=None, building_id=None):
    auth.require_admin()
    payments, receipts = _money_rows(building_id)
    buildings = Building.query.order_by(Building.id).all()
    if building_id is not None:
        buildings = [b for b in buildings if b.id == building_id]

    summary = aggregate_financials(payments, receipts, period=period, now=now,
                                   rooms=Room.query.all(), buildings=buildings)
    report = summary.to_dict()
    report["revenueGrowth"] = revenue_growth(payments, now)
    report["buildingId"] = building_id
    return report


def maintenance_report(auth, room_id=None):
    auth.require_admin()
    return summarize_maintenance(MaintenanceRequest.query.all(), room_id=room_id)


def dashboard_summary(auth, today=None, building_id=None):
    """Headline numbers for the admin dashboard."""
    auth.require_admin()
    today = today or date.today()
    payments, receipts = _money_rows(building_id)
    guests = Guest.query.filter_by(is_active=True, has_moved_out=False).all()
    return {
        "financial": financial_summary(payments, receipts, guests, today),
        "occupancy": occupancy_report(auth, building_id)["overall"],
        "maintenance": maintenance_report(auth),
        "paymentsDueThisWeek": len(payments_due_this_week(guests, today)),
        "overduePayments": len(overdue_guests(guests, today)),
    }
