from flask import Blueprint, jsonify, request

from ..derive import normalize_status
from ..errors import ValidationError
from ..extensions import db
from ..models import ROOM_STATUSES, Payment, Room
from ..security import admin_required
from ..services import available_count, change_room_status, get_room, retry_room_cleanup
from ..utils.params import amount_value, int_value, json_body, pagination, require_fields

rooms_bp = Blueprint("rooms", __name__, url_prefix="/api")


@rooms_bp.get("/rooms")
@admin_required
def list_rooms(auth):
    """Rooms with optional building/status filters"""
    building_id = request.args.get("building_id", type=int)
    status = request.args.get("status")
    limit, offset = pagination(default_limit=100, max_limit=500)

    query = Room.query
    if building_id:
        query = query.filter(Room.building_id == building_id)
    if status:
        query = query.filter(Room.status == normalize_status(status))

    total = query.count()
    rooms = query.order_by(Room.building_id, Room.number).limit(limit).offset(offset).all()
    return jsonify({"total": total, "rooms": [r.serialize() for r in rooms]}), 200


@rooms_bp.get("/rooms/available-count")
def rooms_available_count():
    return jsonify({"available": available_count()}), 200


@rooms_bp.post("/rooms")
@admin_required
def create_room(auth):
    data = json_body()
    require_fields(data, ["number"])
    status = normalize_status(data.get("status") or "available")
    floor = int_value(data, "floor")
    if status not in ROOM_STATUSES:
        raise ValidationError("invalid_status", f"Unknown room status: {data.get('status')!r}", field="status")

    room = Room(
        number=str(data["number"]).strip(),
        building_id=int_value(data, "building_id"),
        status=status,
        size=data.get("size", "standard"),
        floor=floor if floor is not None else 1,
        rental_rate=amount_value(data, "rental_rate", required=False),
        rental_period=data.get("rental_period"),
        notes=data.get("notes"),
    )
    db.session.add(room)
    db.session.commit()
    return jsonify(room.serialize()), 201


@rooms_bp.put("/rooms/<int:room_id>")
@admin_required
def update_room(room_id, auth):
    """Edit room details; status changes go through /rooms/<id>/status"""
    room = get_room(room_id)
    data = json_body()
    if "number" in data:
        require_fields(data, ["number"])
        room.number = str(data["number"]).strip()
    if "building_id" in data:
        room.building_id = int_value(data, "building_id")
    if "floor" in data:
        floor = int_value(data, "floor")
        room.floor = floor if floor is not None else 1
    if "rental_rate" in data:
        room.rental_rate = amount_value(data, "rental_rate", required=False)
    for field in ("size", "rental_period", "notes"):
        if field in data:
            setattr(room, field, data[field])
    db.session.commit()
    return jsonify(room.serialize()), 200


@rooms_bp.put("/rooms/<int:room_id>/status")
@admin_required
def update_room_status(room_id, auth):
    data = json_body()
    require_fields(data, ["status"])
    room, result = change_room_status(auth, room_id, data["status"], data)
    return jsonify({"room": room.serialize(), "transition": result.to_dict()}), 200


@rooms_bp.post("/rooms/<int:room_id>/cleanup-retry")
@admin_required
def room_cleanup_retry(room_id, auth):
    room = retry_room_cleanup(auth, room_id)
    return jsonify(room.serialize()), 200


@rooms_bp.delete("/rooms/<int:room_id>")
@admin_required
def delete_room(room_id, auth):
    room = get_room(room_id)
    if room.guests or room.maintenance_requests or Payment.query.filter_by(room_id=room.id).count():
        raise ValidationError("room_in_use", "Room has guest, payment or maintenance history")
    db.session.delete(room)
    db.session.commit()
    return jsonify({"message": "Room deleted"}), 200
