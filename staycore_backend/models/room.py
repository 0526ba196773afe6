from datetime import datetime

from staycore_backend.extensions import db

# available, occupied, needs_cleaning, maintenance (out_of_service is stored as maintenance)
ROOM_STATUSES = ('available', 'occupied', 'needs_cleaning', 'maintenance')


class Room(db.Model):
    __tablename__ = 'rooms'

    id = db.Column(db.Integer, primary_key=True)
    number = db.Column(db.String(50), nullable=False)
    building_id = db.Column(db.Integer, db.ForeignKey('buildings.id'), nullable=True, index=True)

    status = db.Column(db.String(50), nullable=False, default='available', index=True)
    size = db.Column(db.String(50), default='standard')  # standard, large
    floor = db.Column(db.Integer, default=1)
    last_cleaned = db.Column(db.Date, nullable=True)

    # Current occupant
    tenant_name = db.Column(db.String(255), nullable=True)
    tenant_phone = db.Column(db.String(50), nullable=True)
    tenant_email = db.Column(db.String(255), nullable=True)

    rental_rate = db.Column(db.Numeric(10, 2), nullable=True)
    rental_period = db.Column(db.String(20), nullable=True)  # daily, weekly, monthly
    access_pin = db.Column(db.String(10), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guests = db.relationship('Guest', backref='room', lazy=True)
    maintenance_requests = db.relationship('MaintenanceRequest', backref='room', lazy=True)

    def __repr__(self):
        return f'<Room {self.id}: {self.number} - {self.status}>'

    def apply_changes(self, changes):
        """Copy a transition result's field changes onto the row."""
        for field, value in changes.items():
            setattr(self, field, value)

    def serialize(self):
        return {
            'id': self.id,
            'number': self.number,
            'building_id': self.building_id,
            'status': self.status,
            'size': self.size,
            'floor': self.floor,
            'last_cleaned': self.last_cleaned.isoformat() if self.last_cleaned else None,
            'tenant_name': self.tenant_name,
            'tenant_phone': self.tenant_phone,
            'tenant_email': self.tenant_email,
            'rental_rate': float(self.rental_rate) if self.rental_rate is not None else None,
            'rental_period': self.rental_period,
            'access_pin': self.access_pin,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'building_name': self.building.name if self.building else None,
        }
