from flask import Blueprint, jsonify, request

from ..derive.periods import today as current_date
from ..extensions import db
from ..models import Payment
from ..security import admin_required
from ..services import get_room
from ..utils.params import amount_value, date_value, int_value, json_body, pagination, require_fields

payments_bp = Blueprint("payments", __name__, url_prefix="/api")


@payments_bp.get("/payments")
@admin_required
def list_payments(auth):
    """Payments, newest first, with optional filtering"""
    guest_id = request.args.get("guest_id", type=int)
    room_id = request.args.get("room_id", type=int)
    status = request.args.get("status")
    limit, offset = pagination()

    query = Payment.query
    if guest_id:
        query = query.filter(Payment.guest_id == guest_id)
    if room_id:
        query = query.filter(Payment.room_id == room_id)
    if status:
        query = query.filter(Payment.status == status)

    total = query.count()
    payments = query.order_by(Payment.payment_date.desc(), Payment.id.desc()).limit(limit).offset(offset).all()
    return jsonify({"payments": [p.serialize() for p in payments], "count": total}), 200


@payments_bp.post("/payments")
@admin_required
def create_payment(auth):
    """Record a payment that did not come through the guest tracker"""
    data = json_body()
    require_fields(data, ["room_id", "amount"])
    room = get_room(int_value(data, "room_id", required=True))

    payment = Payment(
        room_id=room.id,
        guest_id=int_value(data, "guest_id"),
        amount=amount_value(data, "amount"),
        payment_date=date_value(data, "payment_date") or current_date(),
        payment_method=data.get("payment_method"),
        status=data.get("status", "completed"),
        notes=data.get("notes"),
    )
    db.session.add(payment)
    db.session.commit()
    return jsonify(payment.serialize()), 201
