import logging
from datetime import date

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..derive import (
    advance_due_date,
    due_today,
    effective_payment_status,
    next_due_date,
    overdue_guests,
    payments_due_this_week as select_this_week,
    select_payments_due,
)
from ..derive.periods import BOOKING_TYPES
from ..errors import NotFoundError, PartialFailure, StayCoreError, ValidationError
from ..extensions import db
from ..models import Guest, MaintenanceRequest, Payment
from ..utils.params import amount_value, date_value
from .rooms import change_room_status, get_room

log = logging.getLogger(__name__)

REQUIRED_GUEST_FIELDS = ("room_id", "guest_name", "booking_type", "check_in_date", "payment_amount")
UPDATABLE_GUEST_FIELDS = ("guest_name", "email", "phone", "check_out_date", "payment_amount",
                          "next_payment_due", "payment_status", "notes")
CLEANING_TITLE = "Post-Checkout Cleaning"


def get_guest(guest_id):
    guest = db.session.get(Guest, guest_id)
    if guest is None:
        raise NotFoundError("guest", guest_id)
    return guest


def list_guests(auth, include_inactive=False, room_id=None):
    auth.require_admin()
    query = Guest.query
    if not include_inactive:
        query = query.filter_by(is_active=True, has_moved_out=False)
    if room_id is not None:
        query = query.filter(Guest.room_id == room_id)
    return query.order_by(Guest.id).all()


def _active_guests():
    return Guest.query.filter_by(is_active=True, has_moved_out=False).all()


def create_guest(auth, data):
    """Register a guest and schedule their first payment one period after check-in."""
    auth.require_admin()
    data = data or {}
    for name in REQUIRED_GUEST_FIELDS:
        if data.get(name) in (None, ""):
            raise ValidationError("missing_field", f"{name} is required", field=name)

    booking_type = str(data["booking_type"]).strip().lower()
    if booking_type not in BOOKING_TYPES:
        raise ValidationError("invalid_booking_type", f"booking_type must be one of {', '.join(BOOKING_TYPES)}",
                              field="booking_type")
    try:
        room = get_room(int(data["room_id"]))
    except (TypeError, ValueError):
        raise ValidationError("invalid_room", "room_id must be an integer", field="room_id") from None
    check_in = date_value(data, "check_in_date", required=True)

    payment_due_day = None
    if booking_type == "weekly":
        payment_due_day = (check_in.weekday() + 1) % 7  # 0 = Sunday
    elif booking_type == "monthly":
        payment_due_day = check_in.day

    guest = Guest(
        room_id=room.id,
        guest_name=str(data["guest_name"]).strip(),
        email=data.get("email"),
        phone=data.get("phone"),
        booking_type=booking_type,
        check_in_date=check_in,
        check_out_date=date_value(data, "check_out_date"),
        payment_amount=amount_value(data, "payment_amount"),
        next_payment_due=next_due_date(check_in, booking_type),
        payment_due_day=payment_due_day,
        payment_status="pending",
        notes=data.get("notes"),
    )
    db.session.add(guest)
    db.session.commit()
    log.info("Guest %s created for room %s (%s)", guest.id, room.id, booking_type)
    return guest


def update_guest(auth, guest_id, data):
    auth.require_admin()
    guest = get_guest(guest_id)
    for name in UPDATABLE_GUEST_FIELDS:
        if name not in data:
            continue
        if name in ("check_out_date", "next_payment_due"):
            setattr(guest, name, date_value(data, name))
        elif name == "guest_name":
            value = data[name]
            if value is None or not str(value).strip():
                raise ValidationError("missing_field", "guest_name is required", field=name)
            guest.guest_name = str(value).strip()
        elif name == "payment_amount":
            guest.payment_amount = amount_value(data, name)
        elif name == "payment_status":
            if data[name] not in ("pending", "paid", "overdue"):
                raise ValidationError("invalid_payment_status", "payment_status must be pending, paid or overdue",
                                      field=name)
            guest.payment_status = data[name]
        else:
            setattr(guest, name, data[name])
    db.session.commit()
    return guest


def check_in_guest(auth, guest_id):
    """Put the guest into their room: room -> occupied with the guest as tenant."""
    guest = get_guest(guest_id)
    room, _ = change_room_status(auth, guest.room_id, "occupied", {
        "tenant_name": guest.guest_name,
        "tenant_phone": guest.phone,
        "tenant_email": guest.email,
    })
    return guest, room


def generate_invoice_number(today):
    prefix = f"INV-{today.year}{today.month:02d}-"
    issued = Payment.query.filter(Payment.invoice_number.like(prefix + "%")).count()
    return f"{prefix}{issued + 1:04d}"


def mark_payment_received(auth, guest_id, payment_method, today=None, notes=None):
    """Record a payment for the guest's current period and roll the due date forward.

    The due date advances one booking period from the date that was due (or
    from today when none was set) and the guest is marked 'paid' until that
    new date arrives.
    """
    auth.require_admin()
    method = (payment_method or "").strip().lower()
    if not method:
        raise ValidationError("invalid_payment_method", "Payment method is required", field="payment_method")

    today = today or date.today()
    guest = get_guest(guest_id)
    if guest.has_moved_out or not guest.is_active:
        raise ValidationError("guest_inactive", "Guest has moved out", field="guest_id")

    payment = Payment(
        room_id=guest.room_id,
        guest_id=guest.id,
        amount=guest.payment_amount,
        payment_date=today,
        payment_method=method,
        status="completed",
        invoice_number=generate_invoice_number(today),
        notes=notes,
    )
    guest.next_payment_due = advance_due_date(guest, today)
    guest.payment_status = "paid"
    guest.last_payment_date = today
    guest.last_payment_method = method

    db.session.add(payment)
    db.session.commit()
    log.info("Payment %s recorded for guest %s; next due %s", payment.invoice_number, guest.id,
             guest.next_payment_due)
    return guest, payment


def _schedule_cleaning(room, guest_name=None):
    existing = MaintenanceRequest.query.filter(
        MaintenanceRequest.room_id == room.id,
        MaintenanceRequest.title == CLEANING_TITLE,
        MaintenanceRequest.status != "completed",
    ).first()
    if existing:
        return existing
    description = f"Automated cleaning request for room {room.number}"
    if guest_name:
        description += f" after {guest_name} checkout"
    request = MaintenanceRequest(
        room_id=room.id,
        title=CLEANING_TITLE,
        description=description,
        priority="normal",
        status="submitted",
        assigned_to="Housekeeping",
    )
    db.session.add(request)
    return request


def _clean_up_room(auth, room_id, guest_name=None):
    room, _ = change_room_status(auth, room_id, "needs_cleaning", commit=False)
    if current_app.config.get("SCHEDULE_CLEANING_ON_MOVE_OUT", True):
        _schedule_cleaning(room, guest_name)
    db.session.commit()
    return room


def mark_guest_moved_out(auth, guest_id, room_id=None, today=None):
    """Deactivate the guest, then send their room to cleaning.

    The room is looked up first, so an unknown room id changes nothing.
    The two writes are committed separately. If the guest write fails nothing
    has changed and the error propagates. If only the room write fails a
    PartialFailure is raised whose retry descriptor points at
    retry_room_cleanup().
    """
    auth.require_admin()
    today = today or date.today()
    guest = get_guest(guest_id)
    room_id = get_room(room_id or guest.room_id).id

    guest.has_moved_out = True
    guest.is_active = False
    guest.move_out_date = today
    guest.check_out_date = guest.check_out_date or today
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("Move-out failed for guest %s", guest_id)
        raise
    log.info("Guest %s moved out of room %s", guest_id, room_id)

    try:
        room = _clean_up_room(auth, room_id, guest.guest_name)
    except (SQLAlchemyError, StayCoreError) as e:
        db.session.rollback()
        log.error("Room %s cleanup failed after guest %s moved out: %s", room_id, guest_id, e)
        raise PartialFailure(
            completed="guest_move_out",
            failed="room_cleanup",
            retry={"action": "room_cleanup", "room_id": room_id},
            result={"guest": guest.serialize()},
        ) from e
    return guest, room


def retry_room_cleanup(auth, room_id):
    """Compensating action for a move-out whose room write failed. Safe to repeat."""
    auth.require_admin()
    room = get_room(room_id)
    if room.status == "needs_cleaning" and not (room.tenant_name or room.tenant_phone or room.tenant_email):
        return room
    return _clean_up_room(auth, room_id)


def refresh_payment_statuses(auth, today=None):
    """Persist the re-arm rule: paid -> pending on the due date, -> overdue after it."""
    auth.require_admin()
    today = today or date.today()
    changed = []
    for guest in _active_guests():
        status = effective_payment_status(guest, today)
        if status != guest.payment_status:
            changed.append({"guest_id": guest.id, "from": guest.payment_status, "to": status})
            guest.payment_status = status
    if changed:
        db.session.commit()
        log.info("Refreshed payment status for %d guests", len(changed))
    return changed


def payments_due(auth, start, end):
    auth.require_admin()
    return select_payments_due(_active_guests(), start, end)


def payments_due_this_week(auth, today=None):
    auth.require_admin()
    return select_this_week(_active_guests(), today or date.today())


def payments_due_today(auth, today=None):
    auth.require_admin()
    return due_today(_active_guests(), today or date.today())


def overdue(auth, today=None):
    auth.require_admin()
    return overdue_guests(_active_guests(), today or date.today())
