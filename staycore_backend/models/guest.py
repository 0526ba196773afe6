from datetime import datetime

from staycore_backend.extensions import db


class Guest(db.Model):
    __tablename__ = 'guests'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=False, index=True)

    # Contact
    guest_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)

    # Booking
    booking_type = db.Column(db.String(20), nullable=False, default='weekly')  # daily, weekly, monthly
    check_in_date = db.Column(db.Date, nullable=False)
    check_out_date = db.Column(db.Date, nullable=True)

    # Billing
    payment_amount = db.Column(db.Numeric(10, 2), nullable=False)
    next_payment_due = db.Column(db.Date, nullable=True, index=True)
    payment_due_day = db.Column(db.Integer, nullable=True)  # weekday for weekly, day of month for monthly
    payment_status = db.Column(db.String(20), default='pending', index=True)  # pending, paid, overdue
    last_payment_date = db.Column(db.Date, nullable=True)
    last_payment_method = db.Column(db.String(50), nullable=True)

    # Lifecycle
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    has_moved_out = db.Column(db.Boolean, default=False, nullable=False)
    move_out_date = db.Column(db.Date, nullable=True)

    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    payments = db.relationship('Payment', backref='guest', lazy=True)

    def __repr__(self):
        return f'<Guest {self.id}: {self.guest_name} (room {self.room_id})>'

    def serialize(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'guest_name': self.guest_name,
            'email': self.email,
            'phone': self.phone,
            'booking_type': self.booking_type,
            'check_in_date': self.check_in_date.isoformat() if self.check_in_date else None,
            'check_out_date': self.check_out_date.isoformat() if self.check_out_date else None,
            'payment_amount': float(self.payment_amount) if self.payment_amount is not None else None,
            'next_payment_due': self.next_payment_due.isoformat() if self.next_payment_due else None,
            'payment_due_day': self.payment_due_day,
            'payment_status': self.payment_status,
            'last_payment_date': self.last_payment_date.isoformat() if self.last_payment_date else None,
            'last_payment_method': self.last_payment_method,
            'is_active': self.is_active,
            'has_moved_out': self.has_moved_out,
            'move_out_date': self.move_out_date.isoformat() if self.move_out_date else None,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'room_number': self.room.number if self.room else None,
        }
