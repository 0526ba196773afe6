from flask import Blueprint, jsonify, request

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import MaintenanceRequest
from ..models.maintenance import PRIORITIES, STATUSES
from ..security import admin_required
from ..services import get_room
from ..utils.params import int_value, json_body, require_fields

maintenance_bp = Blueprint("maintenance", __name__, url_prefix="/api")


def _choice(data, field, allowed, default=None):
    value = data.get(field, default)
    if value is None:
        return None
    value = str(value).strip().lower()
    if value not in allowed:
        raise ValidationError(f"invalid_{field}", f"{field} must be one of {', '.join(allowed)}", field=field)
    return value


@maintenance_bp.get("/maintenance")
@admin_required
def list_requests(auth):
    room_id = request.args.get("room_id", type=int)
    status = request.args.get("status")

    query = MaintenanceRequest.query
    if room_id:
        query = query.filter(MaintenanceRequest.room_id == room_id)
    if status:
        query = query.filter(MaintenanceRequest.status == status)
    requests = query.order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc()).all()
    return jsonify([r.serialize() for r in requests]), 200


@maintenance_bp.post("/maintenance")
@admin_required
def create_request(auth):
    data = json_body()
    require_fields(data, ["room_id", "title", "description"])
    room = get_room(int_value(data, "room_id", required=True))

    maintenance = MaintenanceRequest(
        room_id=room.id,
        title=str(data["title"]).strip(),
        description=data["description"],
        priority=_choice(data, "priority", PRIORITIES, default="normal"),
        status="submitted",
        assigned_to=data.get("assigned_to"),
    )
    db.session.add(maintenance)
    db.session.commit()
    return jsonify(maintenance.serialize()), 201


@maintenance_bp.put("/maintenance/<int:request_id>")
@admin_required
def update_request(request_id, auth):
    maintenance = db.session.get(MaintenanceRequest, request_id)
    if maintenance is None:
        raise NotFoundError("maintenance_request", request_id)

    data = json_body()
    status = _choice(data, "status", STATUSES)
    if status == "completed":
        maintenance.complete()
    elif status == "in_progress":
        maintenance.mark_in_progress()
    elif status:
        maintenance.status = status
    if "priority" in data:
        maintenance.priority = _choice(data, "priority", PRIORITIES)
    for field in ("title", "description", "assigned_to"):
        if field in data:
            setattr(maintenance, field, data[field])

    db.session.commit()
    return jsonify(maintenance.serialize()), 200
