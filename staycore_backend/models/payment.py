from datetime import datetime

from staycore_backend.extensions import db


class Payment(db.Model):
    __tablename__ = 'payments'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=False, index=True)
    guest_id = db.Column(db.Integer, db.ForeignKey('guests.id'), nullable=True, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    payment_date = db.Column(db.Date, nullable=False, index=True)
    payment_method = db.Column(db.String(50), nullable=True)  # cash, card, check, transfer
    status = db.Column(db.String(50), default='completed')  # pending, completed, failed
    invoice_number = db.Column(db.String(40), unique=True, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    room = db.relationship('Room', lazy=True)

    def __repr__(self):
        return f'<Payment {self.id}: ${self.amount} - {self.status}>'

    def serialize(self):
        return {
            "id": self.id,
            "room_id": self.room_id,
            "guest_id": self.guest_id,
            "amount": float(self.amount),
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "payment_method": self.payment_method,
            "status": self.status,
            "invoice_number": self.invoice_number,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "building_id": self.room.building_id if self.room else None,
        }
