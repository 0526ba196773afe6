from .auth import auth_bp
from .buildings import buildings_bp
from .rooms import rooms_bp
from .guests import guests_bp
from .payments import payments_bp
from .receipts import receipts_bp
from .maintenance import maintenance_bp
from .inquiries import inquiries_bp
from .reports import reports_bp

__all__ = [
    "auth_bp",
    "buildings_bp",
    "rooms_bp",
    "guests_bp",
    "payments_bp",
    "receipts_bp",
    "maintenance_bp",
    "inquiries_bp",
    "reports_bp",
]
