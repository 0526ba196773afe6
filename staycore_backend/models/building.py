from datetime import datetime

from staycore_backend.extensions import db


class Building(db.Model):
    __tablename__ = 'buildings'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.Text, nullable=True)

    # Optional default rates for rooms in this building
    daily_rate = db.Column(db.Numeric(10, 2), nullable=True)
    weekly_rate = db.Column(db.Numeric(10, 2), nullable=True)
    monthly_rate = db.Column(db.Numeric(10, 2), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    rooms = db.relationship('Room', backref='building', lazy=True)

    def __repr__(self):
        return f'<Building {self.id}: {self.name}>'

    def serialize(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'daily_rate': float(self.daily_rate) if self.daily_rate is not None else None,
            'weekly_rate': float(self.weekly_rate) if self.weekly_rate is not None else None,
            'monthly_rate': float(self.monthly_rate) if self.monthly_rate is not None else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'room_count': len(self.rooms),
        }
