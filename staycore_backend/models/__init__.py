from staycore_backend.extensions import db

from .building import Building
from .room import Room, ROOM_STATUSES
from .guest import Guest
from .payment import Payment
from .receipt import Receipt
from .maintenance import MaintenanceRequest
from .inquiry import Inquiry

__all__ = [
    "db",
    "Building",
    "Room",
    "ROOM_STATUSES",
    "Guest",
    "Payment",
    "Receipt",
    "MaintenanceRequest",
    "Inquiry",
]
