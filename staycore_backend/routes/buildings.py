from flask import Blueprint, jsonify

from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Building
from ..security import admin_required
from ..utils.params import amount_value, json_body, require_fields

buildings_bp = Blueprint("buildings", __name__, url_prefix="/api")

RATE_FIELDS = ("daily_rate", "weekly_rate", "monthly_rate")


def _get_building(building_id):
    building = db.session.get(Building, building_id)
    if building is None:
        raise NotFoundError("building", building_id)
    return building


@buildings_bp.get("/buildings")
def list_buildings():
    buildings = Building.query.order_by(Building.id).all()
    return jsonify([b.serialize() for b in buildings]), 200


@buildings_bp.post("/buildings")
@admin_required
def create_building(auth):
    data = json_body()
    require_fields(data, ["name"])
    building = Building(name=data["name"].strip(), address=data.get("address"))
    for field in RATE_FIELDS:
        setattr(building, field, amount_value(data, field, required=False))
    db.session.add(building)
    db.session.commit()
    return jsonify(building.serialize()), 201


@buildings_bp.put("/buildings/<int:building_id>")
@admin_required
def update_building(building_id, auth):
    building = _get_building(building_id)
    data = json_body()
    if "name" in data:
        require_fields(data, ["name"])
        building.name = data["name"].strip()
    if "address" in data:
        building.address = data["address"]
    for field in RATE_FIELDS:
        if field in data:
            setattr(building, field, amount_value(data, field, required=False))
    db.session.commit()
    return jsonify(building.serialize()), 200


@buildings_bp.delete("/buildings/<int:building_id>")
@admin_required
def delete_building(building_id, auth):
    building = _get_building(building_id)
    if building.rooms:
        raise ValidationError("building_has_rooms", "Remove or move the building's rooms first")
    db.session.delete(building)
    db.session.commit()
    return jsonify({"message": "Building deleted"}), 200
