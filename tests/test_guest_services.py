from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from staycore_backend.errors import AuthError, NotFoundError, PartialFailure, ValidationError
from staycore_backend.extensions import db
from staycore_backend.models import Guest, MaintenanceRequest, Payment, Room
from staycore_backend.security import AuthContext
from staycore_backend.services import (
    change_room_status,
    check_in_guest,
    create_guest,
    mark_guest_moved_out,
    mark_payment_received,
    payments_due,
    refresh_payment_statuses,
    retry_room_cleanup,
    update_guest,
)
from staycore_backend.services import guests as guest_service


def test_create_guest_schedules_first_payment(admin, room):
    guest = create_guest(admin, {
        "room_id": str(room.id),
        "guest_name": "  Lee Park ",
        "booking_type": "Weekly",
        "check_in_date": "2024-06-03",
        "payment_amount": "$1,200.00",
    })
    assert guest.guest_name == "Lee Park"
    assert guest.next_payment_due == date(2024, 6, 10)
    assert guest.payment_due_day == 1  # Monday, counted from Sunday
    assert float(guest.payment_amount) == 1200.0
    assert guest.payment_status == "pending"


def test_create_monthly_guest_clamps_to_month_end(admin, room):
    guest = create_guest(admin, {"room_id": room.id, "guest_name": "Ari", "booking_type": "monthly",
                                 "check_in_date": "2024-01-31", "payment_amount": 900})
    assert guest.next_payment_due == date(2024, 2, 29)
    assert guest.payment_due_day == 31


def test_create_guest_validates_input(admin, room):
    with pytest.raises(ValidationError) as exc:
        create_guest(admin, {"room_id": room.id, "booking_type": "weekly"})
    assert exc.value.code == "missing_field"

    with pytest.raises(ValidationError) as exc:
        create_guest(admin, {"room_id": room.id, "guest_name": "Ari", "booking_type": "hourly",
                             "check_in_date": "2024-01-31", "payment_amount": 10})
    assert exc.value.code == "invalid_booking_type"


def test_services_require_admin(room):
    with pytest.raises(AuthError) as exc:
        create_guest(AuthContext.anonymous(), {})
    assert exc.value.status_code == 401

    with pytest.raises(AuthError) as exc:
        payments_due(AuthContext(identity="front-desk", role="staff"), date(2024, 6, 1), date(2024, 6, 7))
    assert exc.value.status_code == 403


def test_payment_received_rolls_due_date(admin, guest):
    guest, payment = mark_payment_received(admin, guest.id, "Cash", today=date(2024, 6, 10))
    assert payment.invoice_number == "INV-202406-0001"
    assert payment.payment_method == "cash"
    assert float(payment.amount) == 250.0
    assert guest.payment_status == "paid"
    assert guest.next_payment_due == date(2024, 6, 17)
    assert guest.last_payment_date == date(2024, 6, 10)

    _, second = mark_payment_received(admin, guest.id, "card", today=date(2024, 6, 17))
    assert second.invoice_number == "INV-202406-0002"
    assert db.session.get(Guest, guest.id).next_payment_due == date(2024, 6, 24)


def test_payment_requires_method(admin, guest):
    with pytest.raises(ValidationError) as exc:
        mark_payment_received(admin, guest.id, "  ")
    assert exc.value.code == "invalid_payment_method"
    assert Payment.query.count() == 0


def test_move_out_clears_room_and_schedules_cleaning(admin, guest, room):
    guest, room = mark_guest_moved_out(admin, guest.id, today=date(2024, 6, 12))
    assert guest.has_moved_out and not guest.is_active
    assert guest.move_out_date == date(2024, 6, 12)
    assert room.status == "needs_cleaning"
    assert room.tenant_name is None
    cleaning = MaintenanceRequest.query.filter_by(room_id=room.id).all()
    assert [c.title for c in cleaning] == ["Post-Checkout Cleaning"]
    assert payments_due(admin, date(2024, 6, 9), date(2024, 6, 15)) == []


def test_move_out_room_failure_is_partial(admin, guest, room, monkeypatch):
    guest_id, room_id = guest.id, room.id

    def broken_cleanup(*args, **kwargs):
        raise OperationalError("UPDATE rooms", {}, Exception("database is locked"))

    monkeypatch.setattr(guest_service, "_clean_up_room", broken_cleanup)
    with pytest.raises(PartialFailure) as exc:
        mark_guest_moved_out(admin, guest_id, today=date(2024, 6, 12))

    failure = exc.value
    assert failure.status_code == 207
    assert failure.retry == {"action": "room_cleanup", "room_id": room_id}
    assert failure.to_dict()["result"]["guest"]["has_moved_out"] is True
    assert db.session.get(Guest, guest_id).has_moved_out
    assert db.session.get(Room, room_id).status == "occupied"

    monkeypatch.undo()
    room = retry_room_cleanup(admin, room_id)
    assert room.status == "needs_cleaning"
    assert room.tenant_name is None
    # a second retry is a no-op
    assert retry_room_cleanup(admin, room_id).status == "needs_cleaning"
    assert MaintenanceRequest.query.filter_by(room_id=room_id).count() == 1


def test_check_in_occupies_room(admin, guest, room):
    room.status = "available"
    room.tenant_name = None
    db.session.commit()

    _, room = check_in_guest(admin, guest.id)
    assert room.status == "occupied"
    assert room.tenant_name == "Dana Reyes"
    assert room.tenant_email == "dana@example.com"


def test_cleaned_room_becomes_available_with_new_pin(admin, room, app):
    room.status = "needs_cleaning"
    db.session.commit()

    room, result = change_room_status(admin, room.id, "available", today=date(2024, 6, 13))
    assert result.from_status == "needs_cleaning"
    assert room.last_cleaned == date(2024, 6, 13)
    assert len(room.access_pin) == app.config["ROOM_PIN_LENGTH"]
    assert room.access_pin[0] != "0"


def test_refresh_payment_statuses(admin, guest):
    guest.payment_status = "paid"
    db.session.commit()

    assert refresh_payment_statuses(admin, today=date(2024, 6, 9)) == []
    changed = refresh_payment_statuses(admin, today=date(2024, 6, 11))
    assert changed == [{"guest_id": guest.id, "from": "paid", "to": "overdue"}]
    assert db.session.get(Guest, guest.id).payment_status == "overdue"


def test_update_guest_rejects_blank_name(admin, guest):
    for value in (None, "   "):
        with pytest.raises(ValidationError) as exc:
            update_guest(admin, guest.id, {"guest_name": value})
        assert exc.value.code == "missing_field"
    db.session.rollback()
    assert db.session.get(Guest, guest.id).guest_name == "Dana Reyes"

    assert update_guest(admin, guest.id, {"guest_name": " Dana R. "}).guest_name == "Dana R."


def test_move_out_to_unknown_room_changes_nothing(admin, guest, room):
    guest_id, room_id = guest.id, room.id
    with pytest.raises(NotFoundError):
        mark_guest_moved_out(admin, guest_id, room_id=999, today=date(2024, 6, 12))
    db.session.rollback()
    assert not db.session.get(Guest, guest_id).has_moved_out
    assert db.session.get(Room, room_id).status == "occupied"
