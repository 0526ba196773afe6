from dataclasses import dataclass

from .money import percent
from .records import get_field

STATUS_ALIASES = {
    "cleaning": "needs_cleaning",
    "out_of_service": "maintenance",
}
KNOWN_STATUSES = ("available", "occupied", "needs_cleaning", "maintenance")


def normalize_status(status):
    """Canonical room status; unknown strings come back normalised but unchanged otherwise."""
    if not status:
        return ""
    key = str(status).strip().lower().replace("-", "_").replace(" ", "_")
    return STATUS_ALIASES.get(key, key)


@dataclass(frozen=True)
class OccupancyCounts:
    total: int = 0
    available: int = 0
    occupied: int = 0
    needs_cleaning: int = 0
    maintenance: int = 0
    other: int = 0

    @property
    def occupancy_rate(self):
        return percent(self.occupied, self.total)

    @property
    def availability_rate(self):
        return percent(self.available, self.total)

    def to_dict(self):
        return {
            "total": self.total,
            "available": self.available,
            "occupied": self.occupied,
            "needsCleaning": self.needs_cleaning,
            "maintenance": self.maintenance,
            "other": self.other,
            "occupancyRate": self.occupancy_rate,
            "availabilityRate": self.availability_rate,
        }


def calculate_occupancy(rooms, building_id=None):
    counts = dict.fromkeys(KNOWN_STATUSES, 0)
    other = 0
    total = 0
    for room in rooms or ():
        if building_id is not None and get_field(room, "building_id") != building_id:
            continue
        total += 1
        status = normalize_status(get_field(room, "status"))
        if status in counts:
            counts[status] += 1
        else:
            other += 1
    return OccupancyCounts(total=total, other=other, **counts)


def occupancy_by_building(rooms, buildings=None):
    """OccupancyCounts keyed by building id; listed buildings appear even with no rooms."""
    grouped = {get_field(b, "id"): [] for b in buildings or ()}
    for room in rooms or ():
        grouped.setdefault(get_field(room, "building_id"), []).append(room)
    return {bid: calculate_occupancy(group) for bid, group in grouped.items()}
