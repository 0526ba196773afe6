import logging
import secrets
from datetime import date

from flask import current_app

from ..derive import calculate_occupancy, can_transition_room, occupancy_by_building
from ..errors import NotFoundError
from ..extensions import db
from ..models import Building, Room

log = logging.getLogger(__name__)


def get_room(room_id):
    room = db.session.get(Room, room_id)
    if room is None:
        raise NotFoundError("room", room_id)
    return room


def generate_access_pin(length=None):
    """Random numeric PIN without a leading zero."""
    length = length or current_app.config.get("ROOM_PIN_LENGTH", 4)
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def change_room_status(auth, room_id, next_status, payload=None, today=None, commit=True):
    """Apply a validated status change to a room. Returns (room, TransitionResult)."""
    auth.require_admin()
    room = get_room(room_id)
    result = can_transition_room(room.status, next_status, payload)

    changes = dict(result.changes)
    if result.to_status == "available":
        changes["access_pin"] = generate_access_pin()
        if result.from_status == "needs_cleaning":
            changes["last_cleaned"] = today or date.today()
    room.apply_changes(changes)

    if commit:
        db.session.commit()
    log.info("Room %s status %s -> %s", room.id, result.from_status, result.to_status)
    return room, result


def available_count():
    return Room.query.filter(Room.status == "available").count()


def occupancy_report(auth, building_id=None):
    auth.require_admin()
    rooms = Room.query.all()
    buildings = Building.query.order_by(Building.id).all()
    names = {b.id: b.name for b in buildings}

    per_building = []
    for bid, counts in occupancy_by_building(rooms, buildings).items():
        if building_id is not None and bid != building_id:
            continue
        per_building.append({"buildingId": bid, "name": names.get(bid), **counts.to_dict()})

    return {
        "overall": calculate_occupancy(rooms, building_id=building_id).to_dict(),
        "buildings": per_building,
    }
