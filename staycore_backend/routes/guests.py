from flask import Blueprint, jsonify, request

from ..derive import effective_payment_status
from ..derive.payments_due import days_until_due
from ..derive.periods import today as current_date
from ..derive.records import as_bool
from ..errors import ValidationError
from ..security import admin_required
from ..services import (
    check_in_guest,
    create_guest,
    list_guests,
    mark_guest_moved_out,
    mark_payment_received,
    overdue,
    payments_due,
    payments_due_this_week,
    payments_due_today,
    refresh_payment_statuses,
    update_guest,
)
from ..utils.params import date_arg, int_value, json_body

guests_bp = Blueprint("guests", __name__, url_prefix="/api")


def _tracked(guest, today):
    """Guest row plus the derived payment fields the tracker views show."""
    data = guest.serialize()
    data["effective_payment_status"] = effective_payment_status(guest, today)
    data["days_until_due"] = days_until_due(guest, today)
    return data


@guests_bp.get("/guests")
@admin_required
def get_guests(auth):
    include_inactive = as_bool(request.args.get("include_inactive"))
    room_id = request.args.get("room_id", type=int)
    today = current_date()
    guests = list_guests(auth, include_inactive=include_inactive, room_id=room_id)
    return jsonify([_tracked(g, today) for g in guests]), 200


@guests_bp.post("/guests")
@admin_required
def add_guest(auth):
    guest = create_guest(auth, json_body())
    return jsonify(guest.serialize()), 201


@guests_bp.patch("/guests/<int:guest_id>")
@admin_required
def patch_guest(guest_id, auth):
    data = json_body()
    if as_bool(data.get("has_moved_out")):
        guest, room = mark_guest_moved_out(auth, guest_id, int_value(data, "room_id"))
        return jsonify({"guest": guest.serialize(), "room": room.serialize()}), 200
    guest = update_guest(auth, guest_id, data)
    return jsonify(guest.serialize()), 200


@guests_bp.get("/guests/payment-due")
@admin_required
def get_payment_due(auth):
    """Guests with a payment due today, this week (Sun-Sat) or in start..end"""
    today = date_arg("today") or current_date()
    start, end = date_arg("start"), date_arg("end")
    window = request.args.get("window", "week")

    if start or end:
        if not (start and end):
            raise ValidationError("invalid_window", "start and end must be given together")
        if start > end:
            raise ValidationError("invalid_window", "start must not be after end")
        guests = payments_due(auth, start, end)
    elif window == "today":
        guests = payments_due_today(auth, today)
    elif window == "week":
        guests = payments_due_this_week(auth, today)
    else:
        raise ValidationError("invalid_window", "window must be 'today' or 'week'", field="window")

    return jsonify({"guests": [_tracked(g, today) for g in guests], "count": len(guests)}), 200


@guests_bp.get("/guests/overdue")
@admin_required
def get_overdue(auth):
    today = date_arg("today") or current_date()
    guests = overdue(auth, today)
    return jsonify({"guests": [_tracked(g, today) for g in guests], "count": len(guests)}), 200


@guests_bp.post("/guests/<int:guest_id>/checkin")
@admin_required
def checkin(guest_id, auth):
    guest, room = check_in_guest(auth, guest_id)
    return jsonify({"guest": guest.serialize(), "room": room.serialize(), "access_pin": room.access_pin}), 200


@guests_bp.post("/guests/<int:guest_id>/payment")
@admin_required
def record_payment(guest_id, auth):
    data = json_body()
    guest, payment = mark_payment_received(auth, guest_id, data.get("payment_method"), notes=data.get("notes"))
    return jsonify({"guest": guest.serialize(), "payment": payment.serialize()}), 200


@guests_bp.post("/guests/<int:guest_id>/move-out")
@admin_required
def move_out(guest_id, auth):
    data = json_body()
    guest, room = mark_guest_moved_out(auth, guest_id, int_value(data, "room_id"))
    return jsonify({"guest": guest.serialize(), "room": room.serialize()}), 200


@guests_bp.post("/guests/refresh-statuses")
@admin_required
def refresh_statuses(auth):
    changed = refresh_payment_statuses(auth)
    return jsonify({"changed": changed, "count": len(changed)}), 200
